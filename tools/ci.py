#!/usr/bin/env python3
# Copyright 2026 Declgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, generation smoke test and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

SAMPLE_CATALOG = "samples/catalog.yaml"

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=declgen", "--cov-report=term-missing"]),
    ("Generate view models", ["uv", "run", "declgen", "view-models", SAMPLE_CATALOG, "--strict"]),
    ("Generate enums", ["uv", "run", "declgen", "enums", SAMPLE_CATALOG, "--strict"]),
    ("Generate system guids", ["uv", "run", "declgen", "system-guids", SAMPLE_CATALOG]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run all CI steps and report results."""
    results: list[tuple[str, bool, float]] = []

    for name, cmd in STEPS:
        _banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))

    _banner("  Summary")
    for name, passed, elapsed in results:
        status = chalk.green("PASS") if passed else chalk.red("FAIL")
        color = chalk.green if passed else chalk.red
        print(color(f"  {status}  {name} ({elapsed:.1f}s)"))

    print()
    return 0 if all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> str:
    return str(Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())
