# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the console log handler."""

import io
import logging
import sys
from collections.abc import Iterator

import pytest

from topmodel.console import ConsoleHandler, configure_logging

# ###############
# Helpers
# ###############


@pytest.fixture
def topmodel_logger() -> Iterator[logging.Logger]:
    """Yield the package logger and restore its handlers afterwards."""
    logger = logging.getLogger("topmodel")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def _record(name: str, level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, message, None, None)


# ###############
# Formatting
# ###############


def test_message_keeps_its_text() -> None:
    """The formatted line contains the message and the logger category."""
    line = ConsoleHandler(io.StringIO()).format(_record("topmodel.store.store", logging.INFO, "Loading model"))
    assert "Loading model" in line
    assert "[store]" in line


@pytest.mark.parametrize("level", [logging.ERROR, logging.WARNING])
def test_levels_are_formatted(level: int) -> None:
    """Errors and warnings are written with their message."""
    line = ConsoleHandler(io.StringIO()).format(_record("topmodel.store.store", level, "Something happened"))
    assert "Something happened" in line


def test_exception_is_appended() -> None:
    """A record with exception info carries the traceback."""
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.LogRecord("topmodel.x", logging.ERROR, __file__, 1, "Failed", None, sys.exc_info())
    line = ConsoleHandler(io.StringIO()).format(record)
    assert "ValueError: boom" in line


# ###############
# Configuration
# ###############


def test_configure_logging_writes_to_stream(topmodel_logger: logging.Logger) -> None:
    """Records of package loggers reach the configured stream."""
    stream = io.StringIO()
    configure_logging(stream=stream)
    logging.getLogger("topmodel.store.store").info("Model updated: %d file(s) resolved", 3)
    assert "Model updated: 3 file(s) resolved" in stream.getvalue()


def test_debug_requires_verbose(topmodel_logger: logging.Logger) -> None:
    """Debug records are only written in verbose mode."""
    stream = io.StringIO()
    configure_logging(stream=stream)
    logging.getLogger("topmodel.x").debug("hidden")
    configure_logging(verbose=True, stream=stream)
    logging.getLogger("topmodel.x").debug("shown")
    assert "hidden" not in stream.getvalue()
    assert "shown" in stream.getvalue()


def test_configure_logging_replaces_handler(topmodel_logger: logging.Logger) -> None:
    """Calling configure_logging twice leaves a single console handler."""
    configure_logging(stream=io.StringIO())
    handler = configure_logging(stream=io.StringIO())
    console_handlers = [h for h in topmodel_logger.handlers if isinstance(h, ConsoleHandler)]
    assert console_handlers == [handler]
