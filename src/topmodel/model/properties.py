# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Property variants of classes and endpoints."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import Field as _Field

from topmodel.model.element import ModelElement
from topmodel.model.references import AliasReference, Reference

if TYPE_CHECKING:
    from topmodel.model.entities import Class, Domain, Endpoint

# ###############
# Public Interface
# ###############


class AssociationKind(Enum):
    """Multiplicity of an association."""

    ONE_TO_ONE = "oneToOne"
    MANY_TO_ONE = "manyToOne"
    ONE_TO_MANY = "oneToMany"
    MANY_TO_MANY = "manyToMany"

    @property
    def is_to_many(self) -> bool:
        return self in (AssociationKind.ONE_TO_MANY, AssociationKind.MANY_TO_MANY)


class CompositionKind(Enum):
    """Shape of a composed sub-object."""

    OBJECT = "object"
    LIST = "list"


class Property(ModelElement):
    """Common part of every property variant.

    Attributes:
        label: Display label.
        comment: Documentation comment.
        owner: The class or endpoint the property belongs to.
        original_alias: The alias placeholder this property was expanded
            from, or ``None`` for a declared property.
        location: Where the property was declared.
        primary_key: Only ever set on regular and association properties.
    """

    label: str | None = None
    comment: str | None = None
    owner: Class | Endpoint | None = _Field(default=None, repr=False)
    original_alias: AliasProperty | None = _Field(default=None, repr=False)
    location: Reference | None = _Field(default=None, repr=False)
    primary_key: bool = False


class RegularProperty(Property):
    """A scalar property typed by a domain."""

    name: str = ""
    domain_reference: Reference | None = None
    domain: Domain | None = _Field(default=None, repr=False)
    unique: bool = False
    required: bool = False
    default_value: str | None = None


class AssociationProperty(Property):
    """A foreign-key style link to the single primary key of another class.

    The property name joins the target class name, the target's primary key
    and the role, unless an alias expansion gave it an explicit one.
    """

    reference: Reference | None = None
    association: Class | None = _Field(default=None, repr=False)
    role: str | None = None
    kind: AssociationKind = AssociationKind.MANY_TO_ONE
    required: bool = False
    default_value: str | None = None
    name_override: str | None = None

    @property
    def name(self) -> str:
        if self.name_override is not None:
            return self.name_override
        role = self.role or ""
        if self.association is not None and len(self.association.primary_keys) == 1:
            return f"{self.association.name}{self.association.primary_keys[0].name}{role}"
        target = self.reference.name if self.reference is not None else ""
        return f"{target}{role}"


class CompositionProperty(Property):
    """An owned sub-object, or list of sub-objects, of another class."""

    name: str = ""
    reference: Reference | None = None
    composition: Class | None = _Field(default=None, repr=False)
    kind: CompositionKind = CompositionKind.OBJECT
    domain_kind_reference: Reference | None = None
    domain_kind: Domain | None = _Field(default=None, repr=False)


class AliasProperty(Property):
    """Placeholder that expands into copies of another class's properties.

    Never part of a resolved model: resolution replaces it by its clones.
    """

    reference: AliasReference | None = None
    prefix: str = ""
    suffix: str = ""
    required: bool | None = None
    list_domain_reference: Reference | None = None
    list_domain: Domain | None = _Field(default=None, repr=False)

    @property
    def name(self) -> str:
        target = self.reference.name if self.reference is not None else ""
        return f"{self.prefix}{target}{self.suffix}"

    def clone(self, source: FieldProperty, include: Reference | None = None) -> FieldProperty:
        """Return a copy of *source* owned by this alias's owner.

        Prefix and suffix are applied to the copied name, and the alias's own
        label, comment and required flag take precedence over the source's.
        Copies never carry key or uniqueness constraints.
        """
        changes: dict[str, object] = {
            "label": self.label or source.label,
            "comment": self.comment or source.comment,
            "owner": self.owner,
            "original_alias": self,
            "location": include or self.location,
            "primary_key": False,
        }
        if self.required is not None:
            changes["required"] = self.required
        if isinstance(source, RegularProperty):
            changes["name"] = f"{self.prefix}{source.name}{self.suffix}"
            changes["unique"] = False
            if self.list_domain is not None:
                changes["domain"] = self.list_domain
                changes["domain_reference"] = self.list_domain_reference
        else:
            changes["name_override"] = f"{self.prefix}{source.name}{self.suffix}"
        return source.model_copy(update=changes)


FieldProperty = RegularProperty | AssociationProperty

FIELD_PROPERTY_TYPES = (RegularProperty, AssociationProperty)

AnyProperty = RegularProperty | AssociationProperty | CompositionProperty | AliasProperty
