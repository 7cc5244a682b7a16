"""Pytest configuration and fixtures for constraintkit tests."""

from __future__ import annotations

import os

# Set a fixed terminal width to prevent line wrapping in report output.
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

import pytest  # noqa: E402

from constraintkit import Constraint, Context, Violation  # noqa: E402


class CountingConstraint(Constraint):
    """Constraint that always reports one violation and counts its calls."""

    def __init__(self) -> None:
        self.calls = 0
        self.seen: list[Context] = []

    def violations(self, ctx: Context) -> list[Violation]:
        self.calls += 1
        self.seen.append(ctx)
        return [ctx.violation("test violation")]


@pytest.fixture
def always_violate() -> CountingConstraint:
    """A fresh always-violating constraint."""
    return CountingConstraint()
