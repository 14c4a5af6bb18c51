# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Base class of the linked model elements."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# ###############
# Public Interface
# ###############


class ModelElement(BaseModel):
    """A mutable node of the resolved model graph.

    Resolution links elements into a cyclic graph (properties point to their
    owner, classes to their parent) and splices them into lists by position,
    so elements compare and hash by identity.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, protected_namespaces=())

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)
