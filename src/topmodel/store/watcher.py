# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Interface of the components notified by the model store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from topmodel.model.entities import ModelFile
from topmodel.model.errors import ModelError

# ###############
# Public Interface
# ###############


class ModelWatcher(ABC):
    """Receives diagnostics and committed files from a ModelStore.

    Several watchers may share a name (one per generator configuration);
    the store numbers them from 1 in registration order.
    """

    number: int = 1

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    def full_name(self) -> str:
        return f"{self.name}@{self.number}"

    @abstractmethod
    def on_errors(self, errors: dict[ModelFile, list[ModelError]]) -> None:
        """Called after every batch with the diagnostics of each affected file.

        Files without diagnostics map to an empty list.
        """

    @abstractmethod
    def on_files_changed(self, files: list[ModelFile]) -> None:
        """Called with the files of a committed batch, in dependency order."""
