# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reference resolution for loaded model files.

Binds every name a file refers to (parent classes, decorators, domains,
association and composition targets, aliased properties, re-exported
classes and endpoints) to the entity it designates, expands alias
placeholders, and reports what cannot be bound. Resolution never raises:
every problem becomes a ModelError.
"""

from __future__ import annotations

from topmodel.model.entities import Class, Decorator, Domain, Endpoint, ModelFile
from topmodel.model.errors import ModelError, ModelErrorType
from topmodel.model.properties import (
    FIELD_PROPERTY_TYPES,
    AliasProperty,
    AnyProperty,
    AssociationProperty,
    CompositionProperty,
    FieldProperty,
    RegularProperty,
)
from topmodel.model.references import AliasReference, Reference

# ###############
# Public Interface
# ###############


def resolve_references(
    file: ModelFile,
    *,
    dependencies: list[ModelFile],
    domains: dict[str, Domain],
    allow_composite_primary_key: bool = False,
) -> list[ModelError]:
    """Resolve every reference of *file* in place.

    Running it again on the same file gives the same result: previously
    expanded aliases are collapsed back into their placeholder first.

    Args:
        file: The file to resolve. Its entities are mutated.
        dependencies: The already resolved files named in ``file.uses``.
        domains: Every known domain, by name.
        allow_composite_primary_key: Accept classes with several primary keys.

    Returns:
        Errors and warnings, in the order the checks run. An empty list
        means the file is fully resolved.
    """
    resolver = _Resolver(file, dependencies, domains, allow_composite_primary_key)
    return resolver.resolve()


# ################
# Implementation
# ################


class _Resolver:
    """Resolves a single ModelFile against its dependencies."""

    def __init__(
        self,
        file: ModelFile,
        dependencies: list[ModelFile],
        domains: dict[str, Domain],
        allow_composite_primary_key: bool,
    ) -> None:
        self._file = file
        self._dependencies = {d.name: d for d in dependencies}
        self._domains = domains
        self._allow_composite_primary_key = allow_composite_primary_key
        self._errors: list[ModelError] = []
        # Names of the files some bound reference was found in.
        self._used_files: set[str] = set()

        # Visible classes and decorators, with the file that provides each one.
        self._classes: dict[str, tuple[Class, str]] = {}
        self._decorators: dict[str, tuple[Decorator, str]] = {}
        for dep in dependencies:
            for classe in dep.classes:
                self._classes[classe.name] = (classe, dep.name)
            for decorator in dep.decorators:
                self._decorators[decorator.name] = (decorator, dep.name)
        for classe in file.own_classes:
            self._classes[classe.name] = (classe, file.name)
        for decorator in file.decorators:
            self._decorators[decorator.name] = (decorator, file.name)

    def resolve(self) -> list[ModelError]:
        missing_uses = self._check_uses()
        self._reset_aliases()
        self._bind_extends()
        self._bind_decorators()
        self._bind_properties()
        self._bind_converters()
        self._expand_aliases()
        self._resolve_file_aliases()
        if not self._allow_composite_primary_key:
            self._check_composite_keys()
        self._check_duplicate_properties()
        self._check_unused_uses(missing_uses)
        self._check_uses_order(missing_uses)
        return self._errors

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    def _error(
        self,
        owner: object,
        template: str,
        reference: Reference | None,
        error_type: ModelErrorType,
        *,
        is_error: bool = True,
    ) -> None:
        self._errors.append(
            ModelError(
                file=self._file,
                owner=owner,
                template=template,
                reference=reference,
                type=error_type,
                is_error=is_error,
            )
        )

    def _find_class(self, owner: object, reference: Reference) -> Class | None:
        found = self._classes.get(reference.name)
        if found is None:
            self._error(
                owner,
                "Class '{0}' cannot be found in the file or its dependencies.",
                reference,
                ModelErrorType.MISSING_CLASS,
            )
            return None
        self._used_files.add(found[1])
        return found[0]

    def _find_domain(self, owner: object, reference: Reference) -> Domain | None:
        domain = self._domains.get(reference.name)
        if domain is None:
            self._error(owner, "Domain '{0}' cannot be found.", reference, ModelErrorType.MISSING_DOMAIN)
            return None
        if domain.model_file is not None:
            self._used_files.add(domain.model_file.name)
        return domain

    # ------------------------------------------------------------------
    # Binding
    # ------------------------------------------------------------------

    def _check_uses(self) -> list[Reference]:
        missing = [use for use in self._file.uses if use.name not in self._dependencies]
        for use in missing:
            self._error(
                self._file,
                "The referenced file '{0}' cannot be found.",
                use,
                ModelErrorType.MISSING_FILE,
            )
        return missing

    def _bind_extends(self) -> None:
        for classe in self._file.own_classes:
            if classe.extends_reference is not None:
                classe.extends = self._find_class(classe, classe.extends_reference)

    def _bind_decorators(self) -> None:
        for classe in self._file.own_classes:
            classe.decorators = []
            for reference in classe.decorator_references:
                found = self._decorators.get(reference.name)
                if found is None:
                    self._error(
                        classe,
                        "Decorator '{0}' cannot be found in the file or its dependencies.",
                        reference,
                        ModelErrorType.MISSING_DECORATOR,
                    )
                    continue
                self._used_files.add(found[1])
                classe.decorators.append(found[0])

    def _bind_properties(self) -> None:
        for prop in self._file.properties:
            if isinstance(prop, RegularProperty):
                if prop.domain_reference is not None:
                    prop.domain = self._find_domain(prop, prop.domain_reference)
            elif isinstance(prop, AssociationProperty):
                if prop.reference is not None:
                    prop.association = self._bind_association(prop, prop.reference)
            elif isinstance(prop, CompositionProperty):
                if prop.reference is not None:
                    prop.composition = self._find_class(prop, prop.reference)
                if prop.domain_kind_reference is not None:
                    prop.domain_kind = self._find_domain(prop, prop.domain_kind_reference)
            elif prop.list_domain_reference is not None:
                prop.list_domain = self._find_domain(prop, prop.list_domain_reference)

    def _bind_association(self, prop: AssociationProperty, reference: Reference) -> Class | None:
        target = self._find_class(prop, reference)
        if target is None:
            return None
        if len(target.primary_keys) != 1:
            self._error(
                prop,
                "Class '{0}' must have exactly one primary key to be the target of an association.",
                reference,
                ModelErrorType.ASSOCIATION_PRIMARY_KEY,
            )
            return None
        return target

    def _bind_converters(self) -> None:
        for domain in self._file.domains:
            for converter in domain.converters:
                converter.to = []
                for reference in converter.to_references:
                    target = self._find_domain(domain, reference)
                    if target is not None:
                        converter.to.append(target)

    # ------------------------------------------------------------------
    # Alias expansion
    # ------------------------------------------------------------------

    def _reset_aliases(self) -> None:
        """Collapse previously expanded copies back into their placeholder."""
        for classe in self._file.own_classes:
            _collapse(classe.properties)
        for endpoint in self._file.own_endpoints:
            _collapse(endpoint.params)
            if endpoint.returns is not None and endpoint.returns.original_alias is not None:
                endpoint.returns = endpoint.returns.original_alias

    def _expand_aliases(self) -> None:
        for alias in self._file.alias_properties:
            if alias.reference is None:
                continue
            target = self._find_class(alias, alias.reference)
            if target is None:
                continue
            sources = self._select_alias_sources(alias, alias.reference, target)
            if sources is None:
                continue
            _splice(alias, sources)

    def _select_alias_sources(
        self, alias: AliasProperty, reference: AliasReference, target: Class
    ) -> list[AnyProperty] | None:
        by_name: dict[str, AnyProperty] = {}
        for prop in target.properties:
            by_name.setdefault(prop.name, prop)

        valid = True
        for name_ref in reference.include + reference.exclude:
            if name_ref.name not in by_name:
                self._error(
                    alias,
                    f"Property '{{0}}' cannot be found on class '{target.name}'.",
                    name_ref,
                    ModelErrorType.MISSING_PROPERTY,
                )
                valid = False
        if not valid:
            return None

        if reference.include:
            return [by_name[r.name] for r in reference.include]
        excluded = {r.name for r in reference.exclude}
        return [p for p in target.properties if p.name not in excluded]

    # ------------------------------------------------------------------
    # File aliases
    # ------------------------------------------------------------------

    def _resolve_file_aliases(self) -> None:
        for alias in self._file.aliases:
            source = self._dependencies.get(alias.file.name)
            if source is None:
                self._error(
                    alias,
                    "File '{0}' cannot be found in the dependencies of the file.",
                    alias.file,
                    ModelErrorType.MISSING_FILE,
                )
                continue
            self._used_files.add(source.name)

            for reference in alias.classes:
                classe = next((c for c in source.classes if c.name == reference.name), None)
                if classe is None:
                    self._error(
                        alias,
                        f"Class '{{0}}' cannot be found in file '{source.name}'.",
                        reference,
                        ModelErrorType.MISSING_CLASS,
                    )
                    continue
                _replace_or_append(self._file.classes, classe)
                self._file.resolved_aliases.add(classe)

            for reference in alias.endpoints:
                endpoint = next((e for e in source.endpoints if e.name == reference.name), None)
                if endpoint is None:
                    self._error(
                        alias,
                        f"Endpoint '{{0}}' cannot be found in file '{source.name}'.",
                        reference,
                        ModelErrorType.MISSING_ENDPOINT,
                    )
                    continue
                _replace_or_append(self._file.endpoints, endpoint)
                self._file.resolved_aliases.add(endpoint)

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _check_composite_keys(self) -> None:
        for classe in self._file.own_classes:
            keys = classe.primary_keys
            if len(keys) > 1:
                names = ", ".join(p.name for p in keys)
                self._error(
                    classe,
                    f"Class '{classe.name}' must have a single primary key ({names} found).",
                    classe.location,
                    ModelErrorType.COMPOSITE_PRIMARY_KEY,
                )

    def _check_duplicate_properties(self) -> None:
        for classe in self._file.own_classes:
            seen = set(_inherited_property_names(classe))
            for prop in classe.properties:
                if isinstance(prop, AliasProperty):
                    continue
                if prop.name in seen:
                    self._error(
                        prop,
                        f"Property '{prop.name}' is declared more than once in class '{classe.name}'.",
                        prop.location,
                        ModelErrorType.DUPLICATE_PROPERTY,
                    )
                seen.add(prop.name)

    def _check_unused_uses(self, missing: list[Reference]) -> None:
        for use in self._file.uses:
            if use in missing or use.name in self._used_files:
                continue
            self._error(
                self._file,
                "Import '{0}' is not used.",
                use,
                ModelErrorType.UNUSED_USE,
                is_error=False,
            )

    def _check_uses_order(self, missing: list[Reference]) -> None:
        existing = [use for use in self._file.uses if use not in missing]
        expected = sorted(existing, key=lambda u: u.name)
        for use, wanted in zip(existing, expected):
            if use.name != wanted.name:
                self._error(
                    self._file,
                    "Import '{0}' is out of order.",
                    use,
                    ModelErrorType.UNSORTED_USE,
                    is_error=False,
                )


def _collapse(properties: list[AnyProperty]) -> None:
    """Replace expanded copies by the placeholder they came from, in place."""
    for prop in list(properties):
        if prop.original_alias is None:
            continue
        index = properties.index(prop)
        del properties[index]
        if prop.original_alias not in properties:
            properties.insert(index, prop.original_alias)


def _splice(alias: AliasProperty, sources: list[AnyProperty]) -> None:
    """Insert copies of *sources* right after *alias* and drop the placeholder."""
    owner = alias.owner
    fields = [p for p in sources if isinstance(p, FIELD_PROPERTY_TYPES)]

    def _copy(source: FieldProperty) -> FieldProperty:
        at = alias.reference.find_include(source.name) if alias.reference is not None else None
        return alias.clone(source, at)

    if isinstance(owner, Class):
        properties = owner.properties
    elif isinstance(owner, Endpoint) and any(p is alias for p in owner.params):
        properties = owner.params
    elif isinstance(owner, Endpoint) and owner.returns is alias:
        if fields:
            owner.returns = _copy(fields[0])
        return
    else:
        return

    index = properties.index(alias)
    for source in reversed(fields):
        properties.insert(index + 1, _copy(source))
    properties.remove(alias)


def _replace_or_append(entries: list, entity: Class | Endpoint) -> None:
    for index, existing in enumerate(entries):
        if existing.name == entity.name:
            entries[index] = entity
            return
    entries.append(entity)


def _inherited_property_names(classe: Class) -> list[str]:
    names: list[str] = []
    seen: set[int] = {id(classe)}
    parent = classe.extends
    while parent is not None and id(parent) not in seen:
        seen.add(id(parent))
        names.extend(p.name for p in parent.properties if not isinstance(p, AliasProperty))
        parent = parent.extends
    return names
