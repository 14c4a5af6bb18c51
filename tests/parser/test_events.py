# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the structural event reader."""

import pytest

from topmodel.parser.events import Event, EventReader, EventType, ParseError, read_events

# ###############
# Test Helpers
# ###############


def _types(source: str) -> list[EventType]:
    return [e.type for e in read_events(source)]


def _reader(source: str) -> EventReader:
    """Return a reader positioned on the first document's content."""
    reader = EventReader.from_source(source)
    reader.expect(EventType.STREAM_START)
    reader.expect(EventType.DOCUMENT_START)
    return reader


# ###############
# Event Stream
# ###############


class TestReadEvents:
    def test_empty_source_is_an_empty_stream(self) -> None:
        assert _types("") == [EventType.STREAM_START, EventType.STREAM_END]

    def test_single_mapping(self) -> None:
        assert _types("a: b\n") == [
            EventType.STREAM_START,
            EventType.DOCUMENT_START,
            EventType.MAPPING_START,
            EventType.SCALAR,
            EventType.SCALAR,
            EventType.MAPPING_END,
            EventType.DOCUMENT_END,
            EventType.STREAM_END,
        ]

    def test_sequence_events(self) -> None:
        types = _types("- a\n- b\n")
        assert types[2] == EventType.SEQUENCE_START
        assert types[-3] == EventType.SEQUENCE_END

    def test_multiple_documents(self) -> None:
        types = _types("---\na: 1\n---\nb: 2\n")
        assert types.count(EventType.DOCUMENT_START) == 2
        assert types.count(EventType.DOCUMENT_END) == 2

    def test_scalar_values(self) -> None:
        scalars = [e.value for e in read_events("name: Utilisateur\nrequired: true\n") if e.type == EventType.SCALAR]
        assert scalars == ["name", "Utilisateur", "required", "true"]

    def test_non_scalar_events_have_empty_value(self) -> None:
        assert all(e.value == "" for e in read_events("a: [1]\n") if e.type != EventType.SCALAR)

    def test_positions_are_one_based(self) -> None:
        scalars = [e for e in read_events("first: 1\nsecond: two\n") if e.type == EventType.SCALAR]
        assert (scalars[0].line, scalars[0].column) == (1, 1)
        assert (scalars[2].line, scalars[2].column) == (2, 1)
        assert (scalars[3].line, scalars[3].column) == (2, 9)

    def test_to_reference_keeps_value_and_location(self) -> None:
        event = Event(EventType.SCALAR, "Profil", 4, 18)
        ref = event.to_reference()
        assert (ref.name, ref.line, ref.column) == ("Profil", 4, 18)


class TestReadEventsErrors:
    def test_unclosed_flow_sequence(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            read_events("a: [1, 2\nb: 3\n")
        assert exc_info.value.line >= 1
        assert str(exc_info.value).startswith("Line ")

    def test_bad_indentation(self) -> None:
        with pytest.raises(ParseError):
            read_events("a:\n  b: 1\n c: 2\n")

    def test_aliases_are_rejected(self) -> None:
        with pytest.raises(ParseError, match="aliases"):
            read_events("a: &x 1\nb: *x\n")

    def test_alias_error_location(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            read_events("a: &x 1\nb: *x\n")
        assert (exc_info.value.line, exc_info.value.column) == (2, 4)


# ###############
# Event Reader
# ###############


class TestEventReader:
    def test_expect_wrong_type_raises(self) -> None:
        reader = _reader("a: b\n")
        with pytest.raises(ParseError, match="Expected sequence start, got mapping start"):
            reader.expect(EventType.SEQUENCE_START)

    def test_expect_reports_scalar_value(self) -> None:
        reader = _reader("a: b\n")
        reader.expect(EventType.MAPPING_START)
        with pytest.raises(ParseError, match="scalar 'a'"):
            reader.expect(EventType.MAPPING_START)

    def test_accept_returns_none_on_mismatch(self) -> None:
        reader = _reader("a: b\n")
        assert reader.accept(EventType.SCALAR) is None
        assert reader.accept(EventType.MAPPING_START) is not None

    def test_peek_does_not_consume(self) -> None:
        reader = _reader("a: b\n")
        assert reader.peek().value == "a"
        assert reader.current.type == EventType.MAPPING_START

    def test_advance_stops_at_stream_end(self) -> None:
        reader = EventReader.from_source("")
        reader.advance()
        assert reader.advance().type == EventType.STREAM_END
        assert reader.current.type == EventType.STREAM_END

    def test_iter_mapping_yields_keys(self) -> None:
        reader = _reader("a: 1\nb: 2\n")
        seen = {}
        for key in reader.iter_mapping():
            seen[key.value] = reader.expect_string()
        assert seen == {"a": "1", "b": "2"}
        assert reader.current.type == EventType.DOCUMENT_END

    def test_iter_sequence_yields_each_item(self) -> None:
        reader = _reader("- x\n- y\n")
        items = []
        for _ in reader.iter_sequence():
            items.append(reader.expect_string())
        assert items == ["x", "y"]

    def test_read_scalar_list_accepts_single_scalar(self) -> None:
        reader = _reader("Common/Domains\n")
        assert reader.read_string_list() == ["Common/Domains"]

    def test_read_scalar_list_accepts_sequence(self) -> None:
        reader = _reader("[Code, Libelle]\n")
        assert reader.read_string_list() == ["Code", "Libelle"]

    def test_read_scalar_list_rejects_nested_mapping(self) -> None:
        reader = _reader("- a: 1\n")
        with pytest.raises(ParseError):
            reader.read_scalar_list()

    @pytest.mark.parametrize(("text", "expected"), [("true", True), ("false", False)])
    def test_expect_bool(self, text: str, expected: bool) -> None:
        assert _reader(f"{text}\n").expect_bool() is expected

    def test_expect_bool_rejects_other_values(self) -> None:
        with pytest.raises(ParseError, match="'true' or 'false'"):
            _reader("yes\n").expect_bool()

    def test_expect_int(self) -> None:
        assert _reader("42\n").expect_int() == 42

    def test_expect_int_rejects_text(self) -> None:
        with pytest.raises(ParseError, match="integer"):
            _reader("forty\n").expect_int()
