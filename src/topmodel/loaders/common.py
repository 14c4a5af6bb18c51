# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Errors and helpers shared by the section loaders."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from topmodel.parser.events import Event, ParseError

_E = TypeVar("_E", bound=Enum)
_T = TypeVar("_T")

# ###############
# Public Interface
# ###############


class UnknownPropertyError(ParseError):
    """Raised when a section contains a key it does not define."""

    def __init__(self, key: Event, section: str) -> None:
        super().__init__(f"Unknown property '{key.value}' in {section}", key.line, key.column)
        self.key = key.value


class MissingPropertyError(ParseError):
    """Raised when a section lacks a required key."""

    def __init__(self, key: str, section: str, start: Event) -> None:
        super().__init__(f"Missing required property '{key}' in {section}", start.line, start.column)
        self.key = key


class UnknownSectionError(ParseError):
    """Raised when a document does not start with a known section kind."""

    def __init__(self, key: Event) -> None:
        super().__init__(f"Unknown document type '{key.value}'", key.line, key.column)
        self.key = key.value


def require(value: _T | None, key: str, section: str, start: Event) -> _T:
    """Return *value*, or raise MissingPropertyError if it was never set."""
    if value is None:
        raise MissingPropertyError(key, section, start)
    return value


def parse_enum(enum_type: type[_E], event: Event) -> _E:
    """Return the member of *enum_type* whose value is the scalar's text."""
    for member in enum_type:
        if member.value == event.value:
            return member
    allowed = ", ".join(repr(m.value) for m in enum_type)
    raise ParseError(f"Invalid value {event.value!r}, expected one of {allowed}", event.line, event.column)
