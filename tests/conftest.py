"""Pytest configuration, shared fixtures & custom summary hook.

Also ensures the project root is on sys.path so 'import treeseed' works
without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from treeseed.models import Job, Resource  # noqa: E402


@pytest.fixture
def small_jobs() -> list[Job]:
    lengths = [4000, 2500, 9000, 1200, 7000, 3300, 5100, 800]
    return [Job(id=i, length=float(length)) for i, length in enumerate(lengths)]


@pytest.fixture
def mixed_resources() -> list[Resource]:
    return [Resource(index=i, speed=s) for i, s in enumerate([1000.0, 500.0, 2000.0])]


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        "Collected: "
        f"{collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
