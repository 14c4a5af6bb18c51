# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural event stream for model files.

Converts raw model file text into a flat sequence of parse events (stream,
document, mapping, sequence boundaries and scalars), and offers a pull reader
over those events for the section loaders.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator
from dataclasses import dataclass

import yaml

from topmodel.model.errors import ModelException
from topmodel.model.references import Reference

# ###############
# Public Interface
# ###############


class EventType(enum.Enum):
    """All structural events produced by the event reader."""

    STREAM_START = "stream start"
    STREAM_END = "stream end"
    DOCUMENT_START = "document start"
    DOCUMENT_END = "document end"
    MAPPING_START = "mapping start"
    MAPPING_END = "mapping end"
    SEQUENCE_START = "sequence start"
    SEQUENCE_END = "sequence end"
    SCALAR = "scalar"


@dataclass(frozen=True)
class Event:
    """A structural event with its source location.

    Attributes:
        type: The kind of event.
        value: The scalar text for SCALAR events, otherwise ``""``.
        line: 1-based line number where the event starts.
        column: 1-based column number where the event starts.
    """

    type: EventType
    value: str
    line: int
    column: int

    def to_reference(self) -> Reference:
        """Return a reference to the scalar value at this event's location."""
        return Reference(name=self.value, line=self.line, column=self.column)


class ParseError(ModelException):
    """Raised when a model file is structurally invalid.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


def read_events(source: str) -> list[Event]:
    """Read model file text into a list of structural events.

    The first event is always STREAM_START and the last STREAM_END.

    Args:
        source: The full text of a model file.

    Returns:
        The list of events in document order.

    Raises:
        ParseError: If the text is not well-formed, or uses YAML aliases.
    """
    events: list[Event] = []
    try:
        for raw in yaml.parse(source, Loader=yaml.SafeLoader):
            events.append(_convert(raw))
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        line, column = (mark.line + 1, mark.column + 1) if mark is not None else (1, 1)
        raise ParseError(exc.problem or str(exc), line, column) from exc
    except yaml.YAMLError as exc:
        raise ParseError(str(exc), 1, 1) from exc
    return events


class EventReader:
    """Pull reader over a list of events, with structural expectations."""

    def __init__(self, events: list[Event]) -> None:
        self._events = events
        self._pos = 0

    @classmethod
    def from_source(cls, source: str) -> EventReader:
        return cls(read_events(source))

    # ------------------------------------------------------------------
    # Event access helpers
    # ------------------------------------------------------------------

    @property
    def current(self) -> Event:
        """Return the current (un-consumed) event."""
        return self._events[self._pos]

    def peek(self, offset: int = 1) -> Event:
        """Return the event *offset* positions ahead, or the last one."""
        return self._events[min(self._pos + offset, len(self._events) - 1)]

    def check(self, *types: EventType) -> bool:
        """Return True if the current event matches any of the given types."""
        return self.current.type in types

    def advance(self) -> Event:
        """Consume and return the current event, stopping at the last one."""
        event = self._events[self._pos]
        if self._pos < len(self._events) - 1:
            self._pos += 1
        return event

    def expect(self, *types: EventType) -> Event:
        """Consume the current event if it matches any of the given types.

        Raises ParseError if the current event does not match.
        """
        event = self.current
        if event.type not in types:
            expected = ", ".join(t.value for t in types)
            raise ParseError(f"Expected {expected}, got {_describe(event)}", event.line, event.column)
        return self.advance()

    def accept(self, event_type: EventType) -> Event | None:
        """Consume the current event if it has the given type, else return None."""
        if self.check(event_type):
            return self.advance()
        return None

    # ------------------------------------------------------------------
    # Scalar readers
    # ------------------------------------------------------------------

    def expect_scalar(self) -> Event:
        return self.expect(EventType.SCALAR)

    def expect_string(self) -> str:
        return self.expect_scalar().value

    def expect_bool(self) -> bool:
        """Consume a ``true`` / ``false`` scalar."""
        event = self.expect_scalar()
        if event.value not in ("true", "false"):
            raise ParseError(f"Expected 'true' or 'false', got {event.value!r}", event.line, event.column)
        return event.value == "true"

    def expect_int(self) -> int:
        event = self.expect_scalar()
        try:
            return int(event.value)
        except ValueError:
            raise ParseError(f"Expected an integer, got {event.value!r}", event.line, event.column) from None

    def read_scalar_list(self) -> list[Event]:
        """Consume a single scalar or a sequence of scalars."""
        if self.check(EventType.SCALAR):
            return [self.advance()]
        return [self.expect_scalar() for _ in self.iter_sequence()]

    def read_string_list(self) -> list[str]:
        return [event.value for event in self.read_scalar_list()]

    # ------------------------------------------------------------------
    # Collection iteration
    # ------------------------------------------------------------------

    def iter_mapping(self) -> Iterator[Event]:
        """Iterate over a mapping, yielding each key scalar.

        The caller must consume the value of each key before resuming.
        """
        self.expect(EventType.MAPPING_START)
        while not self.check(EventType.MAPPING_END):
            yield self.expect_scalar()
        self.expect(EventType.MAPPING_END)

    def iter_sequence(self) -> Iterator[Event]:
        """Iterate over a sequence, yielding (without consuming) each item's first event.

        The caller must consume each item before resuming.
        """
        self.expect(EventType.SEQUENCE_START)
        while not self.check(EventType.SEQUENCE_END):
            yield self.current
        self.expect(EventType.SEQUENCE_END)


# ################
# Implementation
# ################

_EVENT_TYPES: dict[type[yaml.Event], EventType] = {
    yaml.StreamStartEvent: EventType.STREAM_START,
    yaml.StreamEndEvent: EventType.STREAM_END,
    yaml.DocumentStartEvent: EventType.DOCUMENT_START,
    yaml.DocumentEndEvent: EventType.DOCUMENT_END,
    yaml.MappingStartEvent: EventType.MAPPING_START,
    yaml.MappingEndEvent: EventType.MAPPING_END,
    yaml.SequenceStartEvent: EventType.SEQUENCE_START,
    yaml.SequenceEndEvent: EventType.SEQUENCE_END,
    yaml.ScalarEvent: EventType.SCALAR,
}


def _convert(raw: yaml.Event) -> Event:
    """Map a PyYAML event onto an Event with 1-based coordinates."""
    line = raw.start_mark.line + 1
    column = raw.start_mark.column + 1
    event_type = _EVENT_TYPES.get(type(raw))
    if event_type is None:
        raise ParseError("YAML aliases are not supported in model files", line, column)
    value = raw.value if isinstance(raw, yaml.ScalarEvent) else ""
    return Event(event_type, value, line, column)


def _describe(event: Event) -> str:
    if event.type == EventType.SCALAR:
        return f"scalar {event.value!r}"
    return event.type.value
