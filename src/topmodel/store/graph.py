# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dependency graph of model files: affected sets and topological order."""

from __future__ import annotations

from collections.abc import Callable, Iterable

from topmodel.model.entities import ModelFile
from topmodel.model.errors import CircularDependencyError, ModelError, ModelErrorType

# ###############
# Public Interface
# ###############


def affected_files(files: dict[str, ModelFile], pending: Iterable[str]) -> list[ModelFile]:
    """Return the pending files plus every file that transitively uses one.

    Args:
        files: All known files by name.
        pending: Names of the changed files. Names missing from *files*
            (deleted files) still propagate to their dependents.

    Returns:
        The affected files, in the iteration order of *files*.
    """
    dependents: dict[str, list[str]] = {}
    for model_file in files.values():
        for use in model_file.uses:
            dependents.setdefault(use.name, []).append(model_file.name)

    affected: set[str] = set()
    stack = list(pending)
    while stack:
        name = stack.pop()
        if name in affected:
            continue
        affected.add(name)
        stack.extend(dependents.get(name, []))

    return [f for name, f in files.items() if name in affected]


def sort_files(
    files: list[ModelFile],
    dependencies_of: Callable[[ModelFile], Iterable[ModelFile]],
) -> list[ModelFile]:
    """Sort files so that every file comes after the files it uses.

    Independent files keep their relative input order. Dependencies outside
    *files* are ignored.

    Args:
        files: The files to sort.
        dependencies_of: Returns the files a given file uses.

    Returns:
        The files in dependency order.

    Raises:
        CircularDependencyError: If the files' ``uses`` form a cycle. The
            attached error belongs to the first file of the cycle.
    """
    GREY, BLACK = 1, 2
    members = {id(f) for f in files}
    color: dict[int, int] = {}
    path: list[ModelFile] = []
    result: list[ModelFile] = []

    def _visit(model_file: ModelFile) -> None:
        color[id(model_file)] = GREY
        path.append(model_file)
        for dep in dependencies_of(model_file):
            if id(dep) not in members:
                continue
            state = color.get(id(dep))
            if state == GREY:
                raise _cycle_error(path[path.index(dep) :] + [dep])
            if state is None:
                _visit(dep)
        path.pop()
        color[id(model_file)] = BLACK
        result.append(model_file)

    for model_file in files:
        if id(model_file) not in color:
            _visit(model_file)
    return result


# ################
# Implementation
# ################


def _cycle_error(cycle: list[ModelFile]) -> CircularDependencyError:
    names = [f.name for f in cycle]
    first = cycle[0]
    use = next((u for u in first.uses if u.name == names[1]), None)
    error = ModelError(
        file=first,
        owner=first,
        template=f"Circular dependency between model files: {' -> '.join(names)}.",
        reference=use,
        type=ModelErrorType.CIRCULAR_DEPENDENCY,
    )
    return CircularDependencyError(names, error)
