"""Rich rendering of violations for terminal output."""

from __future__ import annotations

import json

from rich.console import Console
from rich.table import Table

from constraintkit.violation import Violation


def violations_table(violations: list[Violation], title: str = "Violations") -> Table:
    """Build a table with one row per violation.

    Args:
        violations: Violations to render.
        title: Table title.

    Returns:
        A Rich Table with path, message and details columns.
    """
    table = Table(title=title)
    table.add_column("Path", style="cyan", no_wrap=True)
    table.add_column("Message", style="red")
    table.add_column("Details", style="dim")

    for violation in violations:
        details = json.dumps(violation.details, sort_keys=True, default=str) if violation.details else ""
        table.add_row(violation.path or ".", violation.message, details)

    return table


def print_violations(violations: list[Violation], console: Console | None = None) -> None:
    """Print violations to a console.

    Args:
        violations: Violations to print.
        console: Console to print to. Defaults to a new stdout console.
    """
    console = console or Console()
    if not violations:
        console.print("[green]No violations[/green]")
        return

    console.print(violations_table(violations))
    console.print(f"Found {len(violations)} violation(s)")
