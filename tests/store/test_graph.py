# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for affected-file computation and dependency ordering."""

import pytest

from topmodel.model.entities import ModelFile
from topmodel.model.errors import CircularDependencyError, ModelErrorType
from topmodel.model.references import Reference
from topmodel.store.graph import affected_files, sort_files

# ###############
# Test Helpers
# ###############


def _files(**uses: list[str]) -> dict[str, ModelFile]:
    """Build files by name, each using the listed file names."""
    return {
        name: ModelFile(name=name, path=f"/model/{name}.tmd", module="M", uses=[Reference(name=u, line=i + 2, column=5) for i, u in enumerate(deps)])
        for name, deps in uses.items()
    }


def _sort(files: dict[str, ModelFile]) -> list[str]:
    result = sort_files(list(files.values()), lambda f: [files[u.name] for u in f.uses if u.name in files])
    return [f.name for f in result]


# ###############
# Affected Files
# ###############


class TestAffectedFiles:
    def test_only_pending_without_dependents(self) -> None:
        files = _files(A=[], B=[])
        assert [f.name for f in affected_files(files, {"A"})] == ["A"]

    def test_transitive_dependents(self) -> None:
        files = _files(A=[], B=["A"], C=["B"], D=[])
        assert [f.name for f in affected_files(files, {"A"})] == ["A", "B", "C"]

    def test_dependencies_are_not_affected(self) -> None:
        files = _files(A=[], B=["A"])
        assert [f.name for f in affected_files(files, {"B"})] == ["B"]

    def test_removed_file_affects_its_dependents(self) -> None:
        files = _files(B=["A"], C=[])
        assert [f.name for f in affected_files(files, {"A"})] == ["B"]

    def test_order_follows_registry(self) -> None:
        files = _files(C=["A"], A=[], B=["A"])
        assert [f.name for f in affected_files(files, ["A"])] == ["C", "A", "B"]

    def test_cycle_terminates(self) -> None:
        files = _files(A=["B"], B=["A"])
        assert {f.name for f in affected_files(files, {"A"})} == {"A", "B"}


# ###############
# Sorting
# ###############


class TestSortFiles:
    def test_dependencies_come_first(self) -> None:
        files = _files(C=["B"], B=["A"], A=[])
        assert _sort(files) == ["A", "B", "C"]

    def test_independent_files_keep_input_order(self) -> None:
        files = _files(Z=[], M=[], A=[])
        assert _sort(files) == ["Z", "M", "A"]

    def test_mixed_order(self) -> None:
        files = _files(X=[], B=["A"], A=[], Y=[])
        assert _sort(files) == ["X", "A", "B", "Y"]

    def test_external_dependencies_are_ignored(self) -> None:
        files = _files(B=["A"])
        assert _sort(files) == ["B"]

    def test_cycle_raises(self) -> None:
        files = _files(A=["B"], B=["C"], C=["A"])
        with pytest.raises(CircularDependencyError) as exc_info:
            _sort(files)
        error = exc_info.value
        assert error.cycle == ["A", "B", "C", "A"]
        assert error.model_error is not None
        assert error.model_error.file is files["A"]
        assert error.model_error.type == ModelErrorType.CIRCULAR_DEPENDENCY
        assert error.model_error.reference is not None
        assert error.model_error.reference.name == "B"
        assert "A -> B -> C -> A" in str(error)

    def test_self_use_is_a_cycle(self) -> None:
        files = _files(A=["A"])
        with pytest.raises(CircularDependencyError) as exc_info:
            _sort(files)
        assert exc_info.value.cycle == ["A", "A"]
