"""Display of the merged configuration for ``--show-config``.

Keeps formatting out of the CLI module: the CLI only forwards the requested
format and section.
"""

from __future__ import annotations

import json
from typing import Any

import click

from .config import get_config


def _format_value(value: Any) -> str:
    """Render a value the way it would be written in TOML."""
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return str(value)


def _render_section(name: str, data: Any) -> list[str]:
    lines = [f"[{name}]"]
    if isinstance(data, dict):
        lines.extend(f"{key} = {_format_value(value)}" for key, value in data.items())
    else:
        lines.append(_format_value(data))
    return lines


def _select(data: dict[str, Any], section: str | None) -> dict[str, Any]:
    """Return the whole config or only ``section``; exit 1 when it is missing."""
    if section is None:
        return data
    selected = data.get(section)
    if not selected:
        click.echo(f"Section '{section}' not found or empty", err=True)
        raise SystemExit(1)
    return {section: selected}


def display_config(*, format: str = "human", section: str | None = None) -> None:
    """Print the merged configuration from all sources.

    Args:
        format: ``"human"`` for TOML-like output or ``"json"``.
        section: Optional section name to restrict the output to.

    Side Effects:
        Writes to stdout. Raises SystemExit(1) if ``section`` does not exist.

    Example:
        >>> display_config(section="analyzer")  # doctest: +SKIP
        [analyzer]
        timeout = 30.0
        concurrency = 10
    """
    data = _select(get_config().as_dict(), section)

    if format.lower() == "json":
        click.echo(json.dumps(data, indent=2))
        return

    blocks = ["\n".join(_render_section(name, value)) for name, value in data.items()]
    click.echo("\n\n".join(blocks))


__all__ = [
    "display_config",
]
