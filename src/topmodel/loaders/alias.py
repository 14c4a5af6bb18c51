# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for file-level ``alias`` sections."""

from __future__ import annotations

from topmodel.loaders.common import UnknownPropertyError, require
from topmodel.model.entities import Alias
from topmodel.model.references import Reference
from topmodel.parser.events import EventReader

# ###############
# Public Interface
# ###############


def load_alias(reader: EventReader) -> Alias:
    """Load an alias section: ``file`` plus the ``classes`` and ``endpoints``
    to re-export from it.

    Raises:
        ParseError: On unknown keys or a missing ``file``.
    """
    start = reader.current
    file: Reference | None = None
    classes: list[Reference] = []
    endpoints: list[Reference] = []
    for key in reader.iter_mapping():
        if key.value == "file":
            file = reader.expect_scalar().to_reference()
        elif key.value == "classes":
            classes = [e.to_reference() for e in reader.read_scalar_list()]
        elif key.value == "endpoints":
            endpoints = [e.to_reference() for e in reader.read_scalar_list()]
        else:
            raise UnknownPropertyError(key, "alias")
    return Alias(file=require(file, "file", "alias", start), classes=classes, endpoints=endpoints)
