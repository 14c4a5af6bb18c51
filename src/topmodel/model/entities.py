# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core model entities: files, classes, domains, decorators, endpoints, aliases."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from topmodel.model.element import ModelElement
from topmodel.model.properties import (
    AliasProperty,
    AnyProperty,
    AssociationProperty,
    CompositionProperty,
    RegularProperty,
)
from topmodel.model.references import Reference

# ###############
# Public Interface
# ###############


class Stereotype(Enum):
    """Classification of a class."""

    NONE = "None"
    STATIC = "Static"
    REFERENCE = "Reference"


class Namespace(BaseModel):
    """Application and module a class or endpoint is generated into."""

    model_config = ConfigDict(frozen=True)

    app: str
    module: str


class DomainImplementation(ModelElement):
    """Type mapping of a domain in one target language."""

    type: str
    imports: list[str] = _Field(default_factory=list)
    annotations: list[str] = _Field(default_factory=list)


class DomainConverter(ModelElement):
    """Conversion templates from a domain to other domains, per language."""

    to_references: list[Reference] = _Field(default_factory=list)
    to: list[Domain] = _Field(default_factory=list, repr=False)
    templates: dict[str, str] = _Field(default_factory=dict)


class Domain(ModelElement):
    """A globally visible value type."""

    name: str
    label: str | None = None
    length: int | None = None
    scale: int | None = None
    media_type: str | None = None
    implementations: dict[str, DomainImplementation] = _Field(default_factory=dict)
    converters: list[DomainConverter] = _Field(default_factory=list)
    model_file: ModelFile | None = _Field(default=None, repr=False)
    location: Reference | None = _Field(default=None, repr=False)


class DecoratorImplementation(ModelElement):
    """What a decorator adds to a generated class in one target language."""

    annotations: list[str] = _Field(default_factory=list)
    imports: list[str] = _Field(default_factory=list)
    extends: str | None = None
    implements: list[str] = _Field(default_factory=list)


class Decorator(ModelElement):
    """A named, reusable set of generated-class customisations."""

    name: str
    description: str | None = None
    implementations: dict[str, DecoratorImplementation] = _Field(default_factory=dict)
    model_file: ModelFile | None = _Field(default=None, repr=False)
    location: Reference | None = _Field(default=None, repr=False)


class Class(ModelElement):
    """A model class and its ordered properties."""

    name: str
    comment: str
    label: str | None = None
    trigram: str | None = None
    plural_name: str | None = None
    stereotype: Stereotype = Stereotype.NONE
    reference: bool = False
    order_property: str | None = None
    default_property: str | None = None
    extends_reference: Reference | None = None
    extends: Class | None = _Field(default=None, repr=False)
    decorator_references: list[Reference] = _Field(default_factory=list)
    decorators: list[Decorator] = _Field(default_factory=list, repr=False)
    properties: list[AnyProperty] = _Field(default_factory=list)
    namespace: Namespace | None = None
    model_file: ModelFile | None = _Field(default=None, repr=False)
    location: Reference | None = _Field(default=None, repr=False)

    @property
    def primary_keys(self) -> list[AnyProperty]:
        return [p for p in self.properties if p.primary_key]

    def __str__(self) -> str:
        return self.name


class Endpoint(ModelElement):
    """An HTTP endpoint with its parameters and return value."""

    name: str
    method: str
    route: str
    description: str | None = None
    params: list[AnyProperty] = _Field(default_factory=list)
    returns: AnyProperty | None = None
    namespace: Namespace | None = None
    model_file: ModelFile | None = _Field(default=None, repr=False)
    location: Reference | None = _Field(default=None, repr=False)

    def __str__(self) -> str:
        return self.name


class Alias(ModelElement):
    """Re-export of classes and endpoints from another model file."""

    file: Reference
    classes: list[Reference] = _Field(default_factory=list)
    endpoints: list[Reference] = _Field(default_factory=list)
    model_file: ModelFile | None = _Field(default=None, repr=False)
    location: Reference | None = _Field(default=None, repr=False)


class ModelFile(ModelElement):
    """Everything loaded from one model file.

    Attributes:
        name: Path relative to the model root, without extension, using ``/``.
        path: Path of the file on disk.
        module: Module declared in the file header.
        source: The text the file was loaded from.
        resolved_aliases: Classes and endpoints re-exported from other files.
    """

    name: str
    path: str
    module: str
    source: str = _Field(default="", repr=False)
    tags: list[str] = _Field(default_factory=list)
    uses: list[Reference] = _Field(default_factory=list)
    classes: list[Class] = _Field(default_factory=list)
    domains: list[Domain] = _Field(default_factory=list)
    decorators: list[Decorator] = _Field(default_factory=list)
    endpoints: list[Endpoint] = _Field(default_factory=list)
    aliases: list[Alias] = _Field(default_factory=list)
    resolved_aliases: set[Class | Endpoint] = _Field(default_factory=set, repr=False)

    @property
    def own_classes(self) -> list[Class]:
        """Classes declared in this file, without the re-exported ones."""
        return [c for c in self.classes if c not in self.resolved_aliases]

    @property
    def own_endpoints(self) -> list[Endpoint]:
        return [e for e in self.endpoints if e not in self.resolved_aliases]

    @property
    def properties(self) -> list[AnyProperty]:
        """All properties of own classes and endpoints, in declaration order."""
        result: list[AnyProperty] = []
        for classe in self.own_classes:
            result.extend(classe.properties)
        for endpoint in self.own_endpoints:
            result.extend(endpoint.params)
            if endpoint.returns is not None:
                result.append(endpoint.returns)
        return result

    @property
    def alias_properties(self) -> list[AliasProperty]:
        return [p for p in self.properties if isinstance(p, AliasProperty)]

    def __str__(self) -> str:
        return self.name


# Properties and entities refer to each other, so their forward references
# can only be completed once every class above exists.
RegularProperty.model_rebuild()
AssociationProperty.model_rebuild()
CompositionProperty.model_rebuild()
AliasProperty.model_rebuild()
DomainConverter.model_rebuild()
Domain.model_rebuild()
Decorator.model_rebuild()
Class.model_rebuild()
Endpoint.model_rebuild()
Alias.model_rebuild()
ModelFile.model_rebuild()
