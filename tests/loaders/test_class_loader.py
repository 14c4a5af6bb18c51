# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the class and property loaders."""

import pytest

from topmodel.loaders.classes import load_class
from topmodel.loaders.common import MissingPropertyError, UnknownPropertyError
from topmodel.model.entities import Class, Stereotype
from topmodel.model.properties import (
    AliasProperty,
    AssociationKind,
    AssociationProperty,
    CompositionKind,
    CompositionProperty,
    RegularProperty,
)
from topmodel.parser.events import EventReader, EventType, ParseError

# ###############
# Test Helpers
# ###############


def _load(source: str) -> Class:
    """Load the ``class`` section of a single-document source."""
    reader = EventReader.from_source(source)
    reader.expect(EventType.STREAM_START)
    reader.expect(EventType.DOCUMENT_START)
    reader.expect(EventType.MAPPING_START)
    assert reader.expect_string() == "class"
    return load_class(reader)


def _class(*properties: str, header: str = "") -> str:
    """Build a class section named Utilisateur with the given property items."""
    body = "class:\n  name: Utilisateur\n  comment: Un utilisateur.\n" + header
    if properties:
        body += "  properties:\n" + "".join(properties)
    return body


_ID = "    - name: Id\n      domain: DO_ID\n      primaryKey: true\n      comment: Identifiant.\n"


# ###############
# Class Attributes
# ###############


class TestClassAttributes:
    def test_minimal_class(self) -> None:
        classe = _load(_class())
        assert classe.name == "Utilisateur"
        assert classe.comment == "Un utilisateur."
        assert classe.properties == []
        assert classe.stereotype == Stereotype.NONE
        assert classe.reference is False

    def test_optional_attributes(self) -> None:
        header = (
            "  label: Utilisateur\n"
            "  trigram: UTI\n"
            "  pluralName: Utilisateurs\n"
            "  orderProperty: Nom\n"
            "  defaultProperty: Libelle\n"
        )
        classe = _load(_class(header=header))
        assert classe.label == "Utilisateur"
        assert classe.trigram == "UTI"
        assert classe.plural_name == "Utilisateurs"
        assert classe.order_property == "Nom"
        assert classe.default_property == "Libelle"

    def test_extends_is_kept_as_reference(self) -> None:
        classe = _load(_class(header="  extends: Base\n"))
        assert classe.extends is None
        assert classe.extends_reference is not None
        assert classe.extends_reference.name == "Base"
        assert classe.extends_reference.line == 4

    def test_decorators_are_references(self) -> None:
        classe = _load(_class(header="  decorators: [Audited, Versioned]\n"))
        assert [r.name for r in classe.decorator_references] == ["Audited", "Versioned"]

    def test_stereotype_implies_reference(self) -> None:
        classe = _load(_class(header="  stereotype: Static\n"))
        assert classe.stereotype == Stereotype.STATIC
        assert classe.reference is True

    def test_reference_flag(self) -> None:
        assert _load(_class(header="  reference: true\n")).reference is True

    def test_invalid_stereotype(self) -> None:
        with pytest.raises(ParseError, match="Invalid value 'Dynamic'"):
            _load(_class(header="  stereotype: Dynamic\n"))

    def test_unknown_key(self) -> None:
        with pytest.raises(UnknownPropertyError) as exc_info:
            _load(_class(header="  color: blue\n"))
        assert exc_info.value.key == "color"
        assert exc_info.value.line == 4

    def test_missing_comment(self) -> None:
        with pytest.raises(MissingPropertyError) as exc_info:
            _load("class:\n  name: Utilisateur\n")
        assert exc_info.value.key == "comment"

    def test_missing_name(self) -> None:
        with pytest.raises(MissingPropertyError, match="'name'"):
            _load("class:\n  comment: Sans nom.\n")


# ###############
# Properties
# ###############


class TestRegularProperty:
    def test_primary_key_forces_required(self) -> None:
        prop = _load(_class(_ID)).properties[0]
        assert isinstance(prop, RegularProperty)
        assert prop.name == "Id"
        assert prop.domain_reference is not None
        assert prop.domain_reference.name == "DO_ID"
        assert prop.primary_key is True
        assert prop.required is True
        assert prop.unique is False

    def test_primary_key_clears_unique(self) -> None:
        source = _class("    - name: Id\n      domain: DO_ID\n      primaryKey: true\n      unique: true\n      comment: Id.\n")
        assert _load(source).properties[0].unique is False

    def test_owner_is_the_class(self) -> None:
        classe = _load(_class(_ID))
        assert classe.properties[0].owner is classe

    def test_location_is_the_leading_key(self) -> None:
        prop = _load(_class(_ID)).properties[0]
        assert prop.location is not None
        assert (prop.location.line, prop.location.column) == (5, 7)

    def test_default_value(self) -> None:
        source = _class("    - name: Actif\n      domain: DO_BOOLEEN\n      defaultValue: 'true'\n      comment: Actif.\n")
        assert _load(source).properties[0].default_value == "true"

    def test_missing_domain(self) -> None:
        with pytest.raises(MissingPropertyError, match="'domain'"):
            _load(_class("    - name: Id\n      comment: Id.\n"))

    def test_missing_comment(self) -> None:
        with pytest.raises(MissingPropertyError, match="'comment'"):
            _load(_class("    - name: Id\n      domain: DO_ID\n"))

    def test_invalid_boolean(self) -> None:
        with pytest.raises(ParseError, match="'true' or 'false'"):
            _load(_class("    - name: Id\n      domain: DO_ID\n      required: oui\n      comment: Id.\n"))


class TestAssociationProperty:
    def test_association(self) -> None:
        source = _class(
            "    - association: Profil\n"
            "      role: Principal Actif\n"
            "      type: oneToMany\n"
            "      required: true\n"
            "      comment: Profil.\n"
        )
        prop = _load(source).properties[0]
        assert isinstance(prop, AssociationProperty)
        assert prop.reference is not None
        assert prop.reference.name == "Profil"
        assert prop.role == "PrincipalActif"
        assert prop.kind == AssociationKind.ONE_TO_MANY
        assert prop.kind.is_to_many
        assert prop.required is True

    def test_default_kind_is_many_to_one(self) -> None:
        prop = _load(_class("    - association: Profil\n      comment: Profil.\n")).properties[0]
        assert isinstance(prop, AssociationProperty)
        assert prop.kind == AssociationKind.MANY_TO_ONE

    def test_unbound_name_uses_target_and_role(self) -> None:
        prop = _load(_class("    - association: Profil\n      role: Parent\n      comment: Profil.\n")).properties[0]
        assert prop.name == "ProfilParent"

    def test_invalid_kind(self) -> None:
        with pytest.raises(ParseError, match="manyToOne"):
            _load(_class("    - association: Profil\n      type: several\n      comment: Profil.\n"))


class TestCompositionProperty:
    def test_composition(self) -> None:
        source = _class(
            "    - composition: Adresse\n"
            "      name: Adresses\n"
            "      kind: list\n"
            "      domainKind: DO_LISTE\n"
            "      comment: Adresses.\n"
        )
        prop = _load(source).properties[0]
        assert isinstance(prop, CompositionProperty)
        assert prop.name == "Adresses"
        assert prop.kind == CompositionKind.LIST
        assert prop.domain_kind_reference is not None
        assert prop.domain_kind_reference.name == "DO_LISTE"

    def test_missing_name(self) -> None:
        with pytest.raises(MissingPropertyError, match="'name'"):
            _load(_class("    - composition: Adresse\n      comment: Adresse.\n"))


class TestAliasProperty:
    def test_alias_with_include(self) -> None:
        source = _class(
            "    - alias:\n"
            "        class: Profil\n"
            "        include: [Code, Libelle]\n"
            "      prefix: Profil\n"
            "      suffix: Actuel\n"
            "      required: false\n"
            "      asListWithDomain: DO_CODE_LISTE\n"
        )
        prop = _load(source).properties[0]
        assert isinstance(prop, AliasProperty)
        assert prop.reference is not None
        assert prop.reference.name == "Profil"
        assert [r.name for r in prop.reference.include] == ["Code", "Libelle"]
        assert prop.reference.exclude == ()
        assert prop.prefix == "Profil"
        assert prop.suffix == "Actuel"
        assert prop.required is False
        assert prop.list_domain_reference is not None

    def test_single_property_shorthand(self) -> None:
        prop = _load(_class("    - alias:\n        class: Profil\n        property: Code\n")).properties[0]
        assert isinstance(prop, AliasProperty)
        assert prop.reference is not None
        assert [r.name for r in prop.reference.include] == ["Code"]

    def test_exclude(self) -> None:
        prop = _load(_class("    - alias:\n        class: Profil\n        exclude: Id\n")).properties[0]
        assert isinstance(prop, AliasProperty)
        assert prop.reference is not None
        assert [r.name for r in prop.reference.exclude] == ["Id"]
        assert prop.required is None

    def test_missing_class(self) -> None:
        with pytest.raises(MissingPropertyError, match="'class'"):
            _load(_class("    - alias:\n        include: Code\n"))


class TestPropertyKinds:
    def test_unknown_leading_key(self) -> None:
        with pytest.raises(ParseError, match="Unknown property kind 'field'"):
            _load(_class("    - field: Id\n"))

    def test_property_order_is_kept(self) -> None:
        source = _class(
            _ID,
            "    - association: Profil\n      comment: Profil.\n",
            "    - name: Nom\n      domain: DO_LIBELLE\n      comment: Nom.\n",
        )
        props = _load(source).properties
        assert [type(p) for p in props] == [RegularProperty, AssociationProperty, RegularProperty]
