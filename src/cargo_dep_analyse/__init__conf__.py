"""Static package metadata and configuration identifiers.

The values here are shared by the CLI (``--version``), the registry client
(``User-Agent`` header) and the layered configuration loader (vendor, app
and slug that select the platform-specific config directories).
"""

from __future__ import annotations

import click

name = "cargo_dep_analyse"
title = "Analyse Cargo.toml dependencies against the latest crates.io releases"
version = "1.0.0"
author = "bitranox"
shell_command = "cargo-dep-analyse"

LAYEREDCONF_VENDOR = "bitranox"
LAYEREDCONF_APP = "cargo_dep_analyse"
LAYEREDCONF_SLUG = "cargo-dep-analyse"


def print_info() -> None:
    """Print the package metadata as an aligned block."""
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("shell_command", shell_command),
    )
    pad = max(len(label) for label, _ in fields)
    click.echo(f"Info for {name}:\n")
    for label, value in fields:
        click.echo(f"    {label.ljust(pad)} = {value}")


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "author",
    "name",
    "print_info",
    "shell_command",
    "title",
    "version",
]
