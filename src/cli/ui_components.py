"""Rich UI components for the CLI.

Keeps command functions free of presentation details; everything printed
here is plain text (no markup interpretation of registry data).
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from core.services.publish_orchestrator import PublishResult


def print_lines(console: Console, lines: list[str]) -> None:
    for line in lines:
        console.print(line, markup=False)


def print_publish_result(console: Console, result: PublishResult) -> None:
    """Outcome line followed by the advisories (world-readable, dev expiry)."""

    console.print(result.message, markup=False)
    for advisory in result.advisories:
        console.print(f"[dim]{escape(advisory)}[/dim]")


def print_error(console: Console, message: str) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def build_checks_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
