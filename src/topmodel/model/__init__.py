# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Semantic model for TopModel (files, classes, properties, domains, etc.)."""

from topmodel.model.element import ModelElement
from topmodel.model.entities import (
    Alias,
    Class,
    Decorator,
    DecoratorImplementation,
    Domain,
    DomainConverter,
    DomainImplementation,
    Endpoint,
    ModelFile,
    Namespace,
    Stereotype,
)
from topmodel.model.errors import CircularDependencyError, ModelError, ModelErrorType, ModelException
from topmodel.model.properties import (
    FIELD_PROPERTY_TYPES,
    AliasProperty,
    AnyProperty,
    AssociationKind,
    AssociationProperty,
    CompositionKind,
    CompositionProperty,
    FieldProperty,
    Property,
    RegularProperty,
)
from topmodel.model.references import AliasReference, Reference

__all__ = [
    "ModelElement",
    # References
    "Reference",
    "AliasReference",
    # Properties
    "Property",
    "RegularProperty",
    "AssociationKind",
    "AssociationProperty",
    "CompositionKind",
    "CompositionProperty",
    "AliasProperty",
    "FieldProperty",
    "AnyProperty",
    "FIELD_PROPERTY_TYPES",
    # Entities
    "Stereotype",
    "Namespace",
    "DomainImplementation",
    "DomainConverter",
    "Domain",
    "DecoratorImplementation",
    "Decorator",
    "Class",
    "Endpoint",
    "Alias",
    "ModelFile",
    # Diagnostics
    "ModelErrorType",
    "ModelError",
    "ModelException",
    "CircularDependencyError",
]
