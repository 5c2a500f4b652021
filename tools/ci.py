#!/usr/bin/env python3
# Copyright 2026 ctoresolve Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, metamodel self-check and build."""

import argparse
import pathlib
import subprocess
import sys
import time

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=ctoresolve", "--cov-report=term-missing"]),
    ("Metamodel", ["uv", "run", "ctoresolve", "metamodel"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and report results."""
    parser = argparse.ArgumentParser(description="Run the ctoresolve CI steps.")
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Stop after the first failing step",
    )
    parser.add_argument(
        "steps",
        nargs="*",
        metavar="STEP",
        help="Names of the steps to run (default: all)",
    )
    args = parser.parse_args()

    selected = _select_steps(args.steps)
    if selected is None:
        return 2

    results: list[tuple[str, bool, float]] = []
    for name, cmd in selected:
        _print_banner(name)
        start = time.monotonic()
        proc = subprocess.run(cmd, cwd=_repo_root())
        results.append((name, proc.returncode == 0, time.monotonic() - start))
        if args.fail_fast and proc.returncode != 0:
            break

    _print_banner("  Summary")
    for name, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(color(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if results and all(passed for _, passed, _ in results) else 1


# ################
# Implementation
# ################


def _select_steps(names: list[str]) -> list[tuple[str, list[str]]] | None:
    if not names:
        return STEPS
    known = {name.lower(): (name, cmd) for name, cmd in STEPS}
    unknown = [n for n in names if n.lower() not in known]
    if unknown:
        print(chalk.red(f"Unknown step(s): {', '.join(unknown)}"), file=sys.stderr)
        return None
    return [known[n.lower()] for n in names]


def _print_banner(title: str) -> None:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(title))
    print(sep)


def _repo_root() -> str:
    return str(pathlib.Path(__file__).parent.parent)


if __name__ == "__main__":
    sys.exit(main())
