"""Console helpers shared by the CLI commands."""

from typing import Iterable

import click
from rich.console import Console
from rich.markup import escape

from tager.core.exceptions import TagerError
from tager.core.models import BatchResult, DanglingReport

# Data (tag names, file paths) goes to stdout through click.echo so it can be
# piped; messages go to stderr through rich.
console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def echo_lines(lines: Iterable[str]) -> None:
    for line in lines:
        click.echo(line)


def success(message: str) -> None:
    err_console.print(f"[green]✓ {escape(message)}[/green]")


def warn(message: str) -> None:
    err_console.print(f"[yellow]{escape(message)}[/yellow]")


def error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]")


def report_item_errors(errors: Iterable) -> None:
    """Print per-item failures of a batch as warnings."""
    for item, exc in errors:
        if isinstance(exc, TagerError):
            warn(f"{item}: {exc.message}")
        else:
            warn(f"{item}: {exc}")


def report_batch(result: BatchResult, verb: str, tag: str) -> None:
    report_item_errors(result.errors)
    if result.applied:
        success(f"{verb} {len(result.applied)} item(s) on '{tag}'")


def report_dangling(report: DanglingReport, removed: bool) -> None:
    """Print a reconciliation report, one line per dangling edge."""
    report_item_errors(report.errors)
    for tag, items in report.dangling.items():
        for item in items:
            if removed:
                console.print(f"Removed {report.kind} {escape(item)} from {escape(tag)}", highlight=False)
            else:
                console.print(f"{escape(tag)}: {report.kind} link broken: {escape(item)}", highlight=False)
