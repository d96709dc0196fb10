"""Console rendering of analysis results."""

from __future__ import annotations

import click

from .models import AnalysisResult, DependencyAnalysis

HEADER = "Analysis:"
RULE = "-" * 24
EMPTY_MESSAGE = "No dependency was analysed successfully."
STATUS_OUTDATED = "outdated"
STATUS_UP_TO_DATE = "up to date"


def format_entry(entry: DependencyAnalysis) -> str:
    """Render one record as ``name: current -> latest (status)``."""
    status = STATUS_OUTDATED if entry.is_outdated else STATUS_UP_TO_DATE
    return f"{entry.name}: {entry.current_version} -> {entry.latest_version} ({status})"


def print_report(result: AnalysisResult) -> None:
    """Print the analysed dependencies; skipped ones are not listed."""
    click.echo(f"\n{HEADER}")
    click.echo(RULE)

    if not result.entries:
        click.echo(EMPTY_MESSAGE)
        return

    for entry in result.entries:
        click.echo(format_entry(entry))
    click.echo(RULE)


__all__ = [
    "format_entry",
    "print_report",
]
