# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model store: file registry, dependency graph, reference resolution and watching."""

from topmodel.store.graph import affected_files, sort_files
from topmodel.store.resolver import resolve_references
from topmodel.store.store import ModelStore
from topmodel.store.watch import Debouncer, FileWatcher
from topmodel.store.watcher import ModelWatcher

__all__ = [
    "Debouncer",
    "FileWatcher",
    "ModelStore",
    "ModelWatcher",
    "affected_files",
    "resolve_references",
    "sort_files",
]
