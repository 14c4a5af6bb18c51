# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for ``decorator`` sections."""

from __future__ import annotations

from topmodel.loaders.common import UnknownPropertyError, require
from topmodel.model.entities import Decorator, DecoratorImplementation
from topmodel.parser.events import EventReader

# ###############
# Public Interface
# ###############

DECORATOR_LANGUAGES: tuple[str, ...] = ("csharp", "java")


def load_decorator(reader: EventReader) -> Decorator:
    """Load a decorator section.

    Raises:
        ParseError: On unknown keys or a missing ``name``.
    """
    start = reader.current
    name: str | None = None
    decorator = Decorator(name="")
    for key in reader.iter_mapping():
        if key.value == "name":
            name = reader.expect_string()
        elif key.value == "description":
            decorator.description = reader.expect_string()
        elif key.value in DECORATOR_LANGUAGES:
            decorator.implementations[key.value] = _load_implementation(reader, key.value)
        else:
            raise UnknownPropertyError(key, "decorator")

    decorator.name = require(name, "name", "decorator", start)
    return decorator


# ################
# Implementation
# ################


def _load_implementation(reader: EventReader, language: str) -> DecoratorImplementation:
    impl = DecoratorImplementation()
    for key in reader.iter_mapping():
        if key.value == "annotations":
            impl.annotations = reader.read_string_list()
        elif key.value == "imports":
            impl.imports = reader.read_string_list()
        elif key.value == "extends":
            impl.extends = reader.expect_string()
        elif key.value == "implements":
            impl.implements = reader.read_string_list()
        else:
            raise UnknownPropertyError(key, f"{language} decorator implementation")
    return impl
