# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loaders turning model file sections into entities with unresolved references."""

from topmodel.loaders.alias import load_alias
from topmodel.loaders.classes import load_class
from topmodel.loaders.common import MissingPropertyError, UnknownPropertyError, UnknownSectionError
from topmodel.loaders.decorator import load_decorator
from topmodel.loaders.domain import load_domain
from topmodel.loaders.endpoint import load_endpoint
from topmodel.loaders.file import SectionKind, load_model_file
from topmodel.loaders.properties import PropertyKind, load_property

__all__ = [
    # Errors
    "MissingPropertyError",
    "UnknownPropertyError",
    "UnknownSectionError",
    # Section loaders
    "PropertyKind",
    "load_alias",
    "load_class",
    "load_decorator",
    "load_domain",
    "load_endpoint",
    "load_property",
    # File loader
    "SectionKind",
    "load_model_file",
]
