# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for class properties and endpoint parameters.

The first key of a property mapping selects its variant: ``name`` for a
regular property, ``association``, ``composition`` or ``alias``.
"""

from __future__ import annotations

from enum import Enum

from topmodel.loaders.common import MissingPropertyError, UnknownPropertyError, parse_enum, require
from topmodel.model.properties import (
    AliasProperty,
    AnyProperty,
    AssociationKind,
    AssociationProperty,
    CompositionKind,
    CompositionProperty,
    RegularProperty,
)
from topmodel.model.references import AliasReference, Reference
from topmodel.parser.events import EventReader, EventType, ParseError

# ###############
# Public Interface
# ###############


class PropertyKind(Enum):
    """The closed set of property variants, keyed by their leading key."""

    REGULAR = "name"
    ASSOCIATION = "association"
    COMPOSITION = "composition"
    ALIAS = "alias"


def load_property(reader: EventReader) -> AnyProperty:
    """Load one property mapping.

    Args:
        reader: Event reader positioned on the property's MAPPING_START.

    Returns:
        The loaded property, with every target name left as a Reference.

    Raises:
        ParseError: On an unknown variant, unknown key, missing required key,
            or invalid value.
    """
    if not reader.check(EventType.MAPPING_START):
        reader.expect(EventType.MAPPING_START)
    leading = reader.peek()
    kind = next((k for k in PropertyKind if k.value == leading.value), None)
    if leading.type != EventType.SCALAR or kind is None:
        raise ParseError(f"Unknown property kind {leading.value!r}", leading.line, leading.column)

    if kind == PropertyKind.REGULAR:
        prop: AnyProperty = _load_regular(reader)
    elif kind == PropertyKind.ASSOCIATION:
        prop = _load_association(reader)
    elif kind == PropertyKind.COMPOSITION:
        prop = _load_composition(reader)
    else:
        prop = _load_alias(reader)
    prop.location = leading.to_reference()
    return prop


# ################
# Implementation
# ################


def _load_regular(reader: EventReader) -> RegularProperty:
    start = reader.current
    prop = RegularProperty()
    name: str | None = None
    domain: Reference | None = None
    for key in reader.iter_mapping():
        if key.value == "name":
            name = reader.expect_string()
        elif key.value == "domain":
            domain = reader.expect_scalar().to_reference()
        elif key.value == "label":
            prop.label = reader.expect_string()
        elif key.value == "comment":
            prop.comment = reader.expect_string()
        elif key.value == "primaryKey":
            prop.primary_key = reader.expect_bool()
        elif key.value == "unique":
            prop.unique = reader.expect_bool()
        elif key.value == "required":
            prop.required = reader.expect_bool()
        elif key.value == "defaultValue":
            prop.default_value = reader.expect_string()
        else:
            raise UnknownPropertyError(key, "property")

    prop.name = require(name, "name", "property", start)
    section = f"property '{prop.name}'"
    prop.domain_reference = require(domain, "domain", section, start)
    prop.comment = require(prop.comment, "comment", section, start)

    if prop.primary_key:
        prop.required = True
        prop.unique = False
    return prop


def _load_association(reader: EventReader) -> AssociationProperty:
    start = reader.current
    prop = AssociationProperty()
    for key in reader.iter_mapping():
        if key.value == "association":
            prop.reference = reader.expect_scalar().to_reference()
        elif key.value == "role":
            prop.role = reader.expect_string().replace(" ", "")
        elif key.value == "type":
            prop.kind = parse_enum(AssociationKind, reader.expect_scalar())
        elif key.value == "label":
            prop.label = reader.expect_string()
        elif key.value == "comment":
            prop.comment = reader.expect_string()
        elif key.value == "required":
            prop.required = reader.expect_bool()
        elif key.value == "primaryKey":
            prop.primary_key = reader.expect_bool()
        elif key.value == "defaultValue":
            prop.default_value = reader.expect_string()
        else:
            raise UnknownPropertyError(key, "association")

    target = require(prop.reference, "association", "association", start)
    require(prop.comment, "comment", f"association to '{target.name}'", start)
    if prop.primary_key:
        prop.required = True
    return prop


def _load_composition(reader: EventReader) -> CompositionProperty:
    start = reader.current
    prop = CompositionProperty()
    name: str | None = None
    for key in reader.iter_mapping():
        if key.value == "composition":
            prop.reference = reader.expect_scalar().to_reference()
        elif key.value == "name":
            name = reader.expect_string()
        elif key.value == "kind":
            prop.kind = parse_enum(CompositionKind, reader.expect_scalar())
        elif key.value == "domainKind":
            prop.domain_kind_reference = reader.expect_scalar().to_reference()
        elif key.value == "label":
            prop.label = reader.expect_string()
        elif key.value == "comment":
            prop.comment = reader.expect_string()
        else:
            raise UnknownPropertyError(key, "composition")

    require(prop.reference, "composition", "composition", start)
    prop.name = require(name, "name", "composition", start)
    require(prop.comment, "comment", f"composition '{prop.name}'", start)
    return prop


def _load_alias(reader: EventReader) -> AliasProperty:
    start = reader.current
    prop = AliasProperty()
    for key in reader.iter_mapping():
        if key.value == "alias":
            prop.reference = _load_alias_reference(reader)
        elif key.value == "prefix":
            prop.prefix = reader.expect_string()
        elif key.value == "suffix":
            prop.suffix = reader.expect_string()
        elif key.value == "label":
            prop.label = reader.expect_string()
        elif key.value == "comment":
            prop.comment = reader.expect_string()
        elif key.value == "required":
            prop.required = reader.expect_bool()
        elif key.value == "asListWithDomain":
            prop.list_domain_reference = reader.expect_scalar().to_reference()
        else:
            raise UnknownPropertyError(key, "alias")

    require(prop.reference, "alias", "alias", start)
    return prop


def _load_alias_reference(reader: EventReader) -> AliasReference:
    """Load ``{class, include | property, exclude}``."""
    start = reader.current
    target: Reference | None = None
    include: list[Reference] = []
    exclude: list[Reference] = []
    for key in reader.iter_mapping():
        if key.value == "class":
            target = reader.expect_scalar().to_reference()
        elif key.value in ("include", "property"):
            include.extend(e.to_reference() for e in reader.read_scalar_list())
        elif key.value == "exclude":
            exclude.extend(e.to_reference() for e in reader.read_scalar_list())
        else:
            raise UnknownPropertyError(key, "alias reference")

    if target is None:
        raise MissingPropertyError("class", "alias", start)
    return AliasReference(
        name=target.name, line=target.line, column=target.column, include=tuple(include), exclude=tuple(exclude)
    )
