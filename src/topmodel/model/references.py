# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unresolved references carried by loaded entities until resolution."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class Reference(BaseModel):
    """A raw name in a model file, with the location it was written at.

    Attributes:
        name: The referenced name, exactly as written.
        line: 1-based line number of the name.
        column: 1-based column number of the name.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    line: int = 0
    column: int = 0


class AliasReference(Reference):
    """Reference to the class an alias property copies properties from.

    Attributes:
        include: Properties to copy, in order. Empty means all of them.
        exclude: Properties to leave out when ``include`` is empty.
    """

    include: tuple[Reference, ...] = _Field(default_factory=tuple)
    exclude: tuple[Reference, ...] = _Field(default_factory=tuple)

    def find_include(self, name: str) -> Reference | None:
        """Return the include entry for a property name, if any."""
        return next((ref for ref in self.include if ref.name == name), None)
