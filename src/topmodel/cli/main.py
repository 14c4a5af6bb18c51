# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the TopModel command-line interface."""

import argparse
import sys
import time
from pathlib import Path

from topmodel.config import CONFIG_FILE_NAME, ModelConfigError, load_model_config
from topmodel.console import configure_logging
from topmodel.model.entities import ModelFile
from topmodel.model.errors import ModelError
from topmodel.store.store import ModelStore
from topmodel.store.watcher import ModelWatcher

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the TopModel CLI."""
    parser = argparse.ArgumentParser(
        prog="topmodel",
        description="TopModel: model loading and checking",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Load and resolve the model once",
        description="Load every model file, resolve references and report diagnostics.",
    )
    check_parser.add_argument(
        "config",
        nargs="?",
        default=CONFIG_FILE_NAME,
        help=f"Path to the configuration file (default: {CONFIG_FILE_NAME})",
    )

    # watch subcommand
    watch_parser = subparsers.add_parser(
        "watch",
        help="Load the model and reload it on every change",
        description="Load the model, then watch the model root until interrupted.",
    )
    watch_parser.add_argument(
        "config",
        nargs="?",
        default=CONFIG_FILE_NAME,
        help=f"Path to the configuration file (default: {CONFIG_FILE_NAME})",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


class _SummaryWatcher(ModelWatcher):
    """Tracks whether the latest batch had errors."""

    def __init__(self) -> None:
        self.error_count = 0
        self.warning_count = 0
        self.committed = 0

    @property
    def name(self) -> str:
        return "cli"

    def on_errors(self, errors: dict[ModelFile, list[ModelError]]) -> None:
        all_errors = [e for file_errors in errors.values() for e in file_errors]
        self.error_count = sum(1 for e in all_errors if e.is_error)
        self.warning_count = len(all_errors) - self.error_count

    def on_files_changed(self, files: list[ModelFile]) -> None:
        self.committed = len(files)


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    configure_logging(verbose=args.verbose)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "watch":
        return _cmd_watch(args)
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    store, summary = _create_store(Path(args.config))
    if store is None:
        return 1

    store.load_all()
    if store.load_errors or summary.error_count:
        print(
            f"Error: {len(store.load_errors)} file(s) could not be loaded, "
            f"{summary.error_count} resolution error(s).",
            file=sys.stderr,
        )
        return 1

    print(f"Checked {len(store.files)} model file(s), {summary.warning_count} warning(s). No errors found.")
    return 0


def _cmd_watch(args: argparse.Namespace) -> int:
    """Handle the watch subcommand."""
    store, _ = _create_store(Path(args.config))
    if store is None:
        return 1

    file_watcher = store.load_all(watch=True)
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("Stopping.")
    finally:
        if file_watcher is not None:
            file_watcher.stop()
    return 0


def _create_store(config_path: Path) -> tuple[ModelStore | None, _SummaryWatcher]:
    summary = _SummaryWatcher()
    try:
        config = load_model_config(config_path)
    except ModelConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None, summary

    if not config.model_root.is_dir():
        print(f"Error: model root '{config.model_root}' does not exist.", file=sys.stderr)
        return None, summary

    return ModelStore(config, [summary]), summary
