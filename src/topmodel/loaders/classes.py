# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for ``class`` sections."""

from __future__ import annotations

from topmodel.loaders.common import UnknownPropertyError, parse_enum, require
from topmodel.loaders.properties import load_property
from topmodel.model.entities import Class, Stereotype
from topmodel.model.properties import AnyProperty
from topmodel.model.references import Reference
from topmodel.parser.events import EventReader

# ###############
# Public Interface
# ###############


def load_class(reader: EventReader) -> Class:
    """Load a class section.

    Args:
        reader: Event reader positioned on the section's MAPPING_START.

    Returns:
        The loaded class. ``extends``, decorators and property targets are
        left as references; every property's owner is the returned class.

    Raises:
        ParseError: On unknown keys, missing ``name`` or ``comment``, or
            invalid values.
    """
    start = reader.current
    attrs: dict[str, str] = {}
    stereotype = Stereotype.NONE
    is_reference = False
    extends: Reference | None = None
    decorators: list[Reference] = []
    properties: list[AnyProperty] = []

    for key in reader.iter_mapping():
        if key.value in _STRING_ATTRS:
            attrs[key.value] = reader.expect_string()
        elif key.value == "extends":
            extends = reader.expect_scalar().to_reference()
        elif key.value == "stereotype":
            stereotype = parse_enum(Stereotype, reader.expect_scalar())
        elif key.value == "reference":
            is_reference = reader.expect_bool()
        elif key.value == "decorators":
            decorators = [e.to_reference() for e in reader.read_scalar_list()]
        elif key.value == "properties":
            for _ in reader.iter_sequence():
                properties.append(load_property(reader))
        else:
            raise UnknownPropertyError(key, "class")

    name = require(attrs.get("name"), "name", "class", start)
    classe = Class(
        name=name,
        comment=require(attrs.get("comment"), "comment", f"class '{name}'", start),
        label=attrs.get("label"),
        trigram=attrs.get("trigram"),
        plural_name=attrs.get("pluralName"),
        stereotype=stereotype,
        reference=is_reference or stereotype != Stereotype.NONE,
        order_property=attrs.get("orderProperty"),
        default_property=attrs.get("defaultProperty"),
        extends_reference=extends,
        decorator_references=decorators,
        properties=properties,
    )
    for prop in properties:
        prop.owner = classe
    return classe


# ################
# Implementation
# ################

_STRING_ATTRS: frozenset[str] = frozenset(
    {
        "name",
        "label",
        "trigram",
        "comment",
        "pluralName",
        "orderProperty",
        "defaultProperty",
    }
)
