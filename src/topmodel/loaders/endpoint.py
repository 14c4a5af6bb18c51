# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for ``endpoint`` sections."""

from __future__ import annotations

from topmodel.loaders.common import UnknownPropertyError, require
from topmodel.loaders.properties import load_property
from topmodel.model.entities import Endpoint
from topmodel.model.properties import AnyProperty
from topmodel.parser.events import EventReader, ParseError

# ###############
# Public Interface
# ###############

HTTP_METHODS: frozenset[str] = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})


def load_endpoint(reader: EventReader) -> Endpoint:
    """Load an endpoint section.

    ``params`` is a sequence of properties and ``returns`` a single one; both
    may be alias placeholders.

    Raises:
        ParseError: On unknown keys, missing ``name``, ``method`` or
            ``route``, or an unsupported HTTP method.
    """
    start = reader.current
    attrs: dict[str, str] = {}
    params: list[AnyProperty] = []
    returns: AnyProperty | None = None
    for key in reader.iter_mapping():
        if key.value in ("name", "route", "description"):
            attrs[key.value] = reader.expect_string()
        elif key.value == "method":
            method = reader.expect_scalar()
            if method.value not in HTTP_METHODS:
                raise ParseError(f"Unsupported HTTP method {method.value!r}", method.line, method.column)
            attrs["method"] = method.value
        elif key.value == "params":
            for _ in reader.iter_sequence():
                params.append(load_property(reader))
        elif key.value == "returns":
            returns = load_property(reader)
        else:
            raise UnknownPropertyError(key, "endpoint")

    name = require(attrs.get("name"), "name", "endpoint", start)
    section = f"endpoint '{name}'"
    endpoint = Endpoint(
        name=name,
        method=require(attrs.get("method"), "method", section, start),
        route=require(attrs.get("route"), "route", section, start),
        description=attrs.get("description"),
        params=params,
        returns=returns,
    )
    for prop in params:
        prop.owner = endpoint
    if returns is not None:
        returns.owner = endpoint
    return endpoint
