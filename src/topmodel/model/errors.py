# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostics produced while resolving a model, and model exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from topmodel.model.references import Reference

if TYPE_CHECKING:
    from topmodel.model.entities import ModelFile

# ###############
# Public Interface
# ###############


class ModelErrorType(Enum):
    """Kinds of diagnostics, identified by a stable code."""

    MISSING_FILE = "TMD1001"
    MISSING_CLASS = "TMD1002"
    MISSING_DOMAIN = "TMD1003"
    MISSING_PROPERTY = "TMD1004"
    MISSING_ENDPOINT = "TMD1005"
    MISSING_DECORATOR = "TMD1006"
    ASSOCIATION_PRIMARY_KEY = "TMD1007"
    COMPOSITE_PRIMARY_KEY = "TMD1008"
    CIRCULAR_DEPENDENCY = "TMD1009"
    DUPLICATE_PROPERTY = "TMD1010"
    UNUSED_USE = "TMD9001"
    UNSORTED_USE = "TMD9002"


@dataclass(frozen=True, eq=False)
class ModelError:
    """A diagnostic attached to a model element.

    Attributes:
        file: The model file the diagnostic belongs to.
        owner: The model element the diagnostic is about.
        template: Message text; ``{0}`` is replaced by the reference name.
        reference: Location of the offending name, if there is one.
        type: Kind of diagnostic.
        is_error: ``False`` for warnings, which never block a batch.
    """

    file: ModelFile | None
    owner: object
    template: str
    reference: Reference | None = None
    type: ModelErrorType = ModelErrorType.MISSING_CLASS
    is_error: bool = True

    @property
    def message(self) -> str:
        if self.reference is None:
            return self.template
        return self.template.replace("{0}", self.reference.name)

    @property
    def line(self) -> int:
        return self.reference.line if self.reference is not None else 0

    @property
    def column(self) -> int:
        return self.reference.column if self.reference is not None else 0

    def __str__(self) -> str:
        path = self.file.path if self.file is not None else "<model>"
        return f"{path}[{self.line},{self.column}] - {self.message} ({self.type.value})"


class ModelException(Exception):
    """Raised when a model file cannot be loaded or a batch cannot run.

    Attributes:
        model_error: The diagnostic describing the failure, when there is one.
    """

    def __init__(self, message: str, model_error: ModelError | None = None) -> None:
        super().__init__(message)
        self.model_error = model_error


class CircularDependencyError(ModelException):
    """Raised when the ``uses`` graph of a batch contains a cycle.

    Attributes:
        cycle: File names forming the cycle, first name repeated at the end.
    """

    def __init__(self, cycle: list[str], model_error: ModelError) -> None:
        super().__init__(model_error.message, model_error)
        self.cycle = cycle
