# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Coloured console output for log records."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from yachalk import chalk

# ###############
# Public Interface
# ###############


class ConsoleHandler(logging.StreamHandler):
    """Writes log records as single coloured lines.

    Errors are red and warnings yellow. The logger's last name component is
    shown as a grey prefix, and change notifications are highlighted.
    """

    def __init__(self, stream: TextIO | None = None, level: int = logging.INFO) -> None:
        super().__init__(stream if stream is not None else sys.stderr)
        self.setLevel(level)

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            body = chalk.red(message)
        elif record.levelno >= logging.WARNING:
            body = chalk.yellow(message)
        elif message.startswith("Changed:"):
            body = chalk.magenta(message)
        elif message.startswith("Model updated"):
            body = chalk.green(message)
        else:
            body = message
        category = chalk.gray(f"[{record.name.rsplit('.', 1)[-1]}]")
        line = f"{category} {body}"
        if record.exc_info:
            line = f"{line}\n{logging.Formatter().formatException(record.exc_info)}"
        return line


def configure_logging(verbose: bool = False, stream: TextIO | None = None) -> ConsoleHandler:
    """Attach a ConsoleHandler to the ``topmodel`` logger.

    Replaces a ConsoleHandler attached by an earlier call.
    """
    root = logging.getLogger("topmodel")
    for handler in list(root.handlers):
        if isinstance(handler, ConsoleHandler):
            root.removeHandler(handler)
    handler = ConsoleHandler(stream, logging.DEBUG if verbose else logging.INFO)
    root.addHandler(handler)
    root.setLevel(handler.level)
    return handler
