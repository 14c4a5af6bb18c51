# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Registry of loaded model files with atomic, incremental updates.

Changed files are parsed into a staging area. ``apply_updates`` builds the
batch of affected files from fresh copies, resolves it in dependency order
and either commits the whole batch or drops it, so the committed model is
always a fully resolved one.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from pathlib import Path

from topmodel.config import MODEL_FILE_SUFFIX, ModelConfig
from topmodel.loaders.file import load_model_file
from topmodel.model.entities import Class, Domain, ModelFile
from topmodel.model.errors import CircularDependencyError, ModelError, ModelException
from topmodel.store.graph import affected_files, sort_files
from topmodel.store.resolver import resolve_references
from topmodel.store.watch import DEFAULT_DEBOUNCE_DELAY, DEFAULT_POLL_INTERVAL, FileWatcher
from topmodel.store.watcher import ModelWatcher

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ModelStore:
    """Holds the committed model and applies file changes to it.

    Attributes:
        load_errors: Files that could not be parsed, by path, with the
            exception raised. An entry is dropped once the file loads again.
    """

    def __init__(self, config: ModelConfig, watchers: Iterable[ModelWatcher] = ()) -> None:
        self._config = config
        self._watchers = list(watchers)
        self._files: dict[str, ModelFile] = {}
        # Parsed but not yet committed files; None marks a removal.
        self._staged: dict[str, ModelFile | None] = {}
        self._pending: set[str] = set()
        self._lock = threading.RLock()
        self.load_errors: dict[str, Exception] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_all(
        self,
        watch: bool = False,
        *,
        delay: float = DEFAULT_DEBOUNCE_DELAY,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> FileWatcher | None:
        """Load every model file under the model root and resolve them.

        Args:
            watch: Also start watching the model root for changes.
            delay: Quiet time before a watched change is applied, in seconds.
            poll_interval: Time between two scans of the model root, in seconds.

        Returns:
            The started FileWatcher when *watch* is set, else ``None``.
            The caller stops it.
        """
        for watcher in self._watchers:
            same_name = [w for w in self._watchers if w.name == watcher.name]
            watcher.number = next(i for i, w in enumerate(same_name, start=1) if w is watcher)
        logger.info("Registered watchers: %s", ", ".join(w.full_name for w in self._watchers))

        file_watcher: FileWatcher | None = None
        if watch:
            logger.info("Watching %s", self._config.model_root)
            file_watcher = FileWatcher(
                self._config.model_root, self.on_file_changed, delay=delay, poll_interval=poll_interval
            )
            file_watcher.start()

        with self._lock:
            self._files.clear()
            self._staged.clear()
            self._pending.clear()
            self.load_errors.clear()

            logger.info("Loading model from %s", self._config.model_root)
            for path in sorted(self._config.model_root.rglob(f"*{MODEL_FILE_SUFFIX}")):
                self._load_file(path)
            self.apply_updates()

        return file_watcher

    def on_file_changed(self, path: str | Path, content: str | None = None) -> bool:
        """Reload or remove one file and apply the resulting batch.

        Args:
            path: The changed file. A missing file is removed from the model.
            content: Text to load instead of reading *path*.

        Returns:
            ``True`` if the model was updated (or nothing had to be done).
        """
        path = Path(path)
        logger.info("Changed: %s", path)
        with self._lock:
            self._load_file(path, content)
            return self.apply_updates()

    def apply_updates(self) -> bool:
        """Resolve and commit the pending files and their dependents.

        Every watcher receives the diagnostics of every affected file. If any
        of them is an error, nothing is committed and the changed files must
        be touched again; removals are kept and retried with the next batch.

        Returns:
            ``True`` if the batch was committed or nothing was pending.
        """
        with self._lock:
            if not self._pending:
                return True
            committed = False
            try:
                committed = self._apply_pending()
            finally:
                removals = {n: f for n, f in self._staged.items() if f is None} if not committed else {}
                self._staged = dict(removals)
                self._pending = set(removals)
            return committed

    # ------------------------------------------------------------------
    # Read views
    # ------------------------------------------------------------------

    @property
    def files(self) -> list[ModelFile]:
        with self._lock:
            return list(self._files.values())

    @property
    def classes(self) -> list[Class]:
        """Every committed class once, re-exported ones included."""
        with self._lock:
            seen: set[int] = set()
            result: list[Class] = []
            for model_file in self._files.values():
                for classe in model_file.classes:
                    if id(classe) not in seen:
                        seen.add(id(classe))
                        result.append(classe)
            return result

    @property
    def domains(self) -> dict[str, Domain]:
        with self._lock:
            return _collect_domains(self._files.values())

    def get_dependencies(self, model_file: ModelFile) -> list[ModelFile]:
        """Return the committed files named in ``model_file.uses`` that exist."""
        with self._lock:
            return [self._files[u.name] for u in model_file.uses if u.name in self._files]

    def get_available_classes(self, model_file: ModelFile) -> list[Class]:
        """Return the classes *model_file* can refer to: its dependencies'
        classes followed by its own.
        """
        result: list[Class] = []
        for dep in self.get_dependencies(model_file):
            result.extend(dep.classes)
        result.extend(model_file.own_classes)
        return result

    # ------------------------------------------------------------------
    # Implementation
    # ------------------------------------------------------------------

    def _load_file(self, path: Path, content: str | None = None) -> None:
        name = self._config.get_file_name(path)
        if content is None and not path.exists():
            self._stage(name, None)
            self.load_errors.pop(str(path), None)
            return
        try:
            model_file = load_model_file(path, content, config=self._config)
        except (ModelException, OSError) as exc:
            logger.error("Failed to load %s: %s", path, exc)
            self.load_errors[str(path)] = exc
            return
        self.load_errors.pop(str(path), None)
        if model_file is None:
            # An empty file keeps its committed version.
            logger.debug("Ignoring empty file %s", path)
            return
        self._stage(name, model_file)

    def _stage(self, name: str, model_file: ModelFile | None) -> None:
        self._staged[name] = model_file
        self._pending.add(name)

    def _apply_pending(self) -> bool:
        view = dict(self._files)
        for name, staged in self._staged.items():
            if staged is None:
                view.pop(name, None)
            else:
                view[name] = staged

        previous = [self._files[n] for n in self._pending if n in self._files]
        batch_names = [f.name for f in affected_files(view, self._pending)]
        # Resolved files get new domain objects, which every other file must
        # then be bound to.
        if any(f.domains for f in previous) or any(view[n].domains for n in batch_names):
            batch_names = list(view)

        # Committed objects are never mutated: unchanged affected files are
        # resolved from a fresh copy of their source.
        for name in batch_names:
            if name not in self._staged:
                fresh = load_model_file(view[name].path, view[name].source, config=self._config)
                if fresh is not None:
                    view[name] = fresh
        batch = [view[name] for name in batch_names]
        domains = _collect_domains(view.values())

        def dependencies_of(model_file: ModelFile) -> list[ModelFile]:
            return [view[u.name] for u in model_file.uses if u.name in view]

        errors: dict[ModelFile, list[ModelError]] = {f: [] for f in batch}
        try:
            ordered = sort_files(batch, dependencies_of)
        except CircularDependencyError as exc:
            cycle_error = exc.model_error
            if cycle_error is not None and cycle_error.file is not None:
                errors.setdefault(cycle_error.file, []).append(cycle_error)
            ordered = []

        for model_file in ordered:
            diagnostics = resolve_references(
                model_file,
                dependencies=dependencies_of(model_file),
                domains=domains,
                allow_composite_primary_key=self._config.allow_composite_primary_key,
            )
            errors[model_file].extend(d for d in diagnostics if d.is_error or not self._config.is_suppressed(d.type))

        for watcher in self._watchers:
            watcher.on_errors(errors)

        all_errors = [e for file_errors in errors.values() for e in file_errors]
        for error in all_errors:
            if error.is_error:
                logger.error("%s", error)
        for error in all_errors:
            if not error.is_error:
                logger.warning("%s", error)

        error_count = sum(1 for e in all_errors if e.is_error)
        if error_count:
            logger.error("Model update failed with %d error(s)", error_count)
            return False

        for name, staged in self._staged.items():
            if staged is None:
                self._files.pop(name, None)
        for model_file in batch:
            self._files[model_file.name] = model_file
        logger.info("Model updated: %d file(s) resolved", len(ordered))

        for watcher in self._watchers:
            watcher.on_files_changed(ordered)
        return True


def _collect_domains(files: Iterable[ModelFile]) -> dict[str, Domain]:
    return {d.name: d for f in files for d in f.domains}
