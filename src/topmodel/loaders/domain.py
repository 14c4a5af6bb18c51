# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for ``domain`` sections."""

from __future__ import annotations

from topmodel.loaders.common import MissingPropertyError, UnknownPropertyError, require
from topmodel.model.entities import Domain, DomainConverter, DomainImplementation
from topmodel.parser.events import EventReader

# ###############
# Public Interface
# ###############

DOMAIN_LANGUAGES: tuple[str, ...] = ("csharp", "java", "ts", "sql")


def load_domain(reader: EventReader) -> Domain:
    """Load a domain section.

    Each target language gets an implementation block (``type``, ``imports``,
    ``annotations``). ``converters`` lists the domains values can be converted
    to, with one template per language.

    Raises:
        ParseError: On unknown keys, a missing ``name`` or implementation
            ``type``, or invalid values.
    """
    start = reader.current
    name: str | None = None
    domain = Domain(name="")
    for key in reader.iter_mapping():
        if key.value == "name":
            name = reader.expect_string()
        elif key.value == "label":
            domain.label = reader.expect_string()
        elif key.value == "length":
            domain.length = reader.expect_int()
        elif key.value == "scale":
            domain.scale = reader.expect_int()
        elif key.value == "mediaType":
            domain.media_type = reader.expect_string()
        elif key.value in DOMAIN_LANGUAGES:
            domain.implementations[key.value] = _load_implementation(reader, key.value)
        elif key.value == "converters":
            for _ in reader.iter_sequence():
                domain.converters.append(_load_converter(reader))
        else:
            raise UnknownPropertyError(key, "domain")

    domain.name = require(name, "name", "domain", start)
    return domain


# ################
# Implementation
# ################


def _load_implementation(reader: EventReader, language: str) -> DomainImplementation:
    start = reader.current
    type_name: str | None = None
    imports: list[str] = []
    annotations: list[str] = []
    for key in reader.iter_mapping():
        if key.value == "type":
            type_name = reader.expect_string()
        elif key.value == "imports":
            imports = reader.read_string_list()
        elif key.value == "annotations":
            annotations = reader.read_string_list()
        else:
            raise UnknownPropertyError(key, f"{language} domain implementation")
    return DomainImplementation(
        type=require(type_name, "type", f"{language} domain implementation", start),
        imports=imports,
        annotations=annotations,
    )


def _load_converter(reader: EventReader) -> DomainConverter:
    start = reader.current
    converter = DomainConverter()
    for key in reader.iter_mapping():
        if key.value == "to":
            converter.to_references = [e.to_reference() for e in reader.read_scalar_list()]
        elif key.value in DOMAIN_LANGUAGES:
            converter.templates[key.value] = reader.expect_string()
        else:
            raise UnknownPropertyError(key, "domain converter")
    if not converter.to_references:
        raise MissingPropertyError("to", "domain converter", start)
    return converter
