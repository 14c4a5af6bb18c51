# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Structural event stream for model files."""

from topmodel.parser.events import Event, EventReader, EventType, ParseError, read_events

__all__ = [
    "Event",
    "EventReader",
    "EventType",
    "ParseError",
    "read_events",
]
