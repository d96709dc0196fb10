"""Command-line interface.

Purpose
-------
Expose the analyzer as ``cargo-dep-analyse [OPTIONS] [MANIFEST]``. The
command resolves settings, attaches console logging, runs the analysis,
prints the report and optionally writes the result as JSON.

System Role
-----------
Thin adapter over :mod:`cargo_dep_analyse.analyzer`. ``OSError`` and
``ValueError`` (TOML, manifest or analyzer settings) become
``click`` exceptions so they reach stderr with a non-zero exit code;
per-dependency failures never do.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

import click

from . import __init__conf__
from .analyzer import run_analysis, write_analysis_json
from .config import get_analyzer_settings
from .config_show import display_config
from .manifest_reader import parse_sources
from .report import print_report

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
DEFAULT_MANIFEST = "Cargo.toml"


@contextmanager
def _console_logging(level_name: str) -> Iterator[None]:
    """Send package log records to stdout for the duration of a run."""
    level = logging.getLevelNamesMapping().get(level_name.upper())
    if level is None:
        raise click.ClickException(f"unknown logging level: {level_name}")

    package_logger = logging.getLogger(__init__conf__.name)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    try:
        yield
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


@click.command(context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.argument(
    "manifest",
    required=False,
    default=DEFAULT_MANIFEST,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for each registry response (overrides config).",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum simultaneous registry requests (overrides config).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the result as JSON to this file.",
)
@click.option("--show-config", is_flag=True, help="Print the merged configuration and exit.")
@click.option(
    "--format",
    "config_format",
    type=click.Choice(["human", "json"], case_sensitive=False),
    default="human",
    show_default=True,
    help="Output format for --show-config.",
)
@click.option("--section", default=None, help="Only show this configuration section.")
@click.option("--info", "show_info", is_flag=True, help="Print package information and exit.")
def cli(
    manifest: Path,
    timeout: float | None,
    concurrency: int | None,
    output: Path | None,
    show_config: bool,
    config_format: str,
    section: str | None,
    show_info: bool,
) -> None:
    """Report which dependencies of MANIFEST (default: ./Cargo.toml) are outdated on crates.io."""
    if show_info:
        __init__conf__.print_info()
        return

    if show_config:
        display_config(format=config_format, section=section)
        return

    if not manifest.exists():
        raise click.BadParameter(f"{manifest} does not exist", param_hint="MANIFEST")

    settings = get_analyzer_settings()
    try:
        sources = parse_sources(settings.sections)
    except ValueError as exc:
        raise click.ClickException(f"invalid manifest.sections setting: {exc}") from exc

    with _console_logging(settings.log_level):
        click.echo(f"Analysing file: {manifest}")
        try:
            result = run_analysis(
                manifest,
                timeout=timeout if timeout is not None else settings.timeout,
                concurrency=concurrency if concurrency is not None else settings.concurrency,
                sources=sources,
            )
        except (OSError, ValueError) as exc:
            raise click.ClickException(f"cannot analyse {manifest}: {exc}") from exc

        print_report(result)

        if output is not None:
            try:
                write_analysis_json(result, output)
            except (OSError, ValueError) as exc:
                raise click.ClickException(f"cannot write {output}: {exc}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Run the CLI; exits the process with click's exit code."""
    cli.main(args=list(argv) if argv is not None else None, prog_name=__init__conf__.shell_command)


__all__ = [
    "cli",
    "main",
]
