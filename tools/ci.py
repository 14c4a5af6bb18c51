#!/usr/bin/env python3
# Copyright 2026 TopModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the CI checks locally: format, lint, type check, tests, build.

Usage: ``tools/ci.py [STEP ...]`` runs the named steps only (by key, e.g.
``tools/ci.py lint tests``).
"""

import argparse
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Step:
    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/topmodel"]),
    Step("tests", "Tests", ["uv", "run", "pytest", "--cov=topmodel", "--cov-report=term-missing"]),
    Step("build", "Build", ["uv", "build"]),
]


def main(argv: list[str] | None = None) -> int:
    """Run the selected CI steps and print a summary.

    Returns:
        0 if every step passed, 1 otherwise.
    """
    parser = argparse.ArgumentParser(prog="ci", description="Run CI checks locally.")
    parser.add_argument("steps", nargs="*", metavar="STEP", help="Steps to run (default: all)")
    args = parser.parse_args(argv)
    unknown = set(args.steps) - {s.key for s in STEPS}
    if unknown:
        parser.error(f"unknown step(s): {', '.join(sorted(unknown))}")
    selected = [s for s in STEPS if not args.steps or s.key in args.steps]

    results: list[tuple[Step, int, float]] = []
    for step in selected:
        _banner(step.title)
        start = time.monotonic()
        returncode = subprocess.run(step.command, cwd=_REPO_ROOT).returncode
        results.append((step, returncode, time.monotonic() - start))

    _banner("Summary")
    for step, returncode, elapsed in results:
        colour = chalk.green if returncode == 0 else chalk.red
        status = "PASS" if returncode == 0 else f"FAIL ({returncode})"
        print(colour(f"  {status:<10} {step.title} ({elapsed:.1f}s)"))
    print()
    return 0 if all(code == 0 for _, code, _ in results) else 1


# ################
# Implementation
# ################

_REPO_ROOT = Path(__file__).resolve().parent.parent


def _banner(title: str) -> None:
    rule = chalk.blue("=" * 60)
    print(f"\n{rule}\n{chalk.blue(title)}\n{rule}")


if __name__ == "__main__":
    sys.exit(main())
