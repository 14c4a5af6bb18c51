# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for complete model files.

A model file is a stream of YAML documents. The first one is the header
(``module``, ``tags``, ``uses``); each following document holds exactly one
section, selected by its single top-level key.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from topmodel.config import ModelConfig
from topmodel.loaders.alias import load_alias
from topmodel.loaders.classes import load_class
from topmodel.loaders.common import UnknownPropertyError, UnknownSectionError, require
from topmodel.loaders.decorator import load_decorator
from topmodel.loaders.domain import load_domain
from topmodel.loaders.endpoint import load_endpoint
from topmodel.model.entities import ModelFile, Namespace
from topmodel.model.references import Reference
from topmodel.parser.events import Event, EventReader, EventType, ParseError

# ###############
# Public Interface
# ###############


class SectionKind(Enum):
    """Top-level key of a section document."""

    DOMAIN = "domain"
    DECORATOR = "decorator"
    CLASS = "class"
    ENDPOINT = "endpoint"
    ALIAS = "alias"


def load_model_file(path: str | Path, content: str | None = None, *, config: ModelConfig) -> ModelFile | None:
    """Load one model file into a ModelFile with unresolved references.

    Args:
        path: Location of the file; its logical name is derived from it.
        content: Text to load instead of reading *path*.
        config: Provides the model root and the application name.

    Returns:
        The loaded file, or ``None`` if the text holds no document at all.

    Raises:
        ParseError: If the text is malformed or a section is invalid, or the
            file is not valid UTF-8.
        OSError: If *content* is ``None`` and the file cannot be read.
    """
    path = Path(path)
    if content is None:
        content = _read_text(path)

    reader = EventReader.from_source(content)
    reader.expect(EventType.STREAM_START)
    if reader.check(EventType.STREAM_END):
        return None

    model_file = _load_header(reader, config.get_file_name(path), str(path))
    model_file.source = content
    namespace = Namespace(app=config.app, module=model_file.module)

    while reader.accept(EventType.DOCUMENT_START) is not None:
        _load_section(reader, model_file, namespace)
        reader.expect(EventType.DOCUMENT_END)
    reader.expect(EventType.STREAM_END)
    return model_file


# ################
# Implementation
# ################


def _read_text(path: Path) -> str:
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        before = data[: exc.start]
        line = before.count(b"\n") + 1
        column = exc.start - before.rfind(b"\n")
        raise ParseError(f"Invalid UTF-8 byte 0x{data[exc.start]:02x}", line, column) from exc


def _load_header(reader: EventReader, name: str, path: str) -> ModelFile:
    reader.expect(EventType.DOCUMENT_START)
    start = reader.current
    module: str | None = None
    tags: list[str] = []
    uses: list[Reference] = []
    for key in reader.iter_mapping():
        if key.value == "module":
            module = reader.expect_string()
        elif key.value == "tags":
            for tag in reader.read_string_list():
                if tag not in tags:
                    tags.append(tag)
        elif key.value == "uses":
            uses = [e.to_reference() for e in reader.read_scalar_list()]
        else:
            raise UnknownPropertyError(key, "file header")
    reader.expect(EventType.DOCUMENT_END)
    return ModelFile(
        name=name,
        path=path,
        module=require(module, "module", "file header", start),
        tags=tags,
        uses=uses,
    )


def _load_section(reader: EventReader, model_file: ModelFile, namespace: Namespace) -> None:
    reader.expect(EventType.MAPPING_START)
    key = reader.expect_scalar()
    kind = _section_kind(key)
    location = key.to_reference()

    if kind == SectionKind.DOMAIN:
        domain = load_domain(reader)
        domain.model_file, domain.location = model_file, location
        model_file.domains.append(domain)
    elif kind == SectionKind.DECORATOR:
        decorator = load_decorator(reader)
        decorator.model_file, decorator.location = model_file, location
        model_file.decorators.append(decorator)
    elif kind == SectionKind.CLASS:
        classe = load_class(reader)
        classe.model_file, classe.location = model_file, location
        classe.namespace = namespace
        model_file.classes.append(classe)
    elif kind == SectionKind.ENDPOINT:
        endpoint = load_endpoint(reader)
        endpoint.model_file, endpoint.location = model_file, location
        endpoint.namespace = namespace
        model_file.endpoints.append(endpoint)
    else:
        alias = load_alias(reader)
        alias.model_file, alias.location = model_file, location
        model_file.aliases.append(alias)

    reader.expect(EventType.MAPPING_END)


def _section_kind(key: Event) -> SectionKind:
    for kind in SectionKind:
        if kind.value == key.value:
            return kind
    raise UnknownSectionError(key)
