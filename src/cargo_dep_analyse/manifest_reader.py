"""Extractor for dependencies from Cargo.toml files.

Purpose
-------
Load a Cargo manifest and turn its dependency tables into
:class:`~cargo_dep_analyse.models.DependencyInfo` records.

Contents
--------
* :func:`load_manifest` - Load and parse a Cargo.toml file
* :func:`extract_dependencies` - Collect dependencies from the selected tables
* :class:`DependencySource` - Enum of known dependency tables
* :class:`ManifestError` - Raised for structurally invalid dependency tables

System Role
-----------
The first stage of the analysis pipeline. Versions are not validated here;
that happens when each dependency is analysed.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any, cast

from pydantic import ValidationError

from .models import DependencyInfo
from .schemas import CargoDependencySpec

logger = logging.getLogger(__name__)


class ManifestError(ValueError):
    """A Cargo.toml whose dependency tables cannot be decoded."""


class DependencySource(str, Enum):
    """Tables of a Cargo.toml that declare dependencies."""

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "dev-dependencies"
    BUILD_DEPENDENCIES = "build-dependencies"


DEFAULT_SOURCES: tuple[DependencySource, ...] = (DependencySource.DEPENDENCIES,)


def load_manifest(path: Path | str) -> dict[str, Any]:
    """Load and parse a Cargo.toml file.

    Args:
        path: Path to the Cargo.toml file.

    Returns:
        Parsed TOML content.

    Raises:
        FileNotFoundError: If the file does not exist.
        OSError: If the file cannot be read.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    path = Path(path)
    with path.open("rb") as f:
        data = tomllib.load(f)
    logger.debug("Parsed %s", path)
    return data


def _parse_table_item(name: str, spec: Any, source: str) -> DependencyInfo:
    """Parse one ``name = spec`` entry of a dependency table."""
    if isinstance(spec, str):
        return DependencyInfo(name=name, version=spec, source=source)
    if isinstance(spec, dict):
        try:
            cargo_spec = CargoDependencySpec.model_validate(spec)
        except ValidationError as exc:
            raise ManifestError(f"invalid declaration for {name!r} in [{source}]: {exc}") from exc
        return DependencyInfo(
            name=name,
            version=cargo_spec.version,
            source=source,
            package=cargo_spec.package,
        )
    raise ManifestError(f"invalid declaration for {name!r} in [{source}]: expected a string or a table")


def _extract_from_table(data: dict[str, Any], source: DependencySource) -> list[DependencyInfo]:
    """Extract dependencies from one top-level table, if present."""
    table = data.get(source.value)
    if table is None:
        return []
    if not isinstance(table, dict):
        raise ManifestError(f"[{source.value}] must be a table")

    return [_parse_table_item(name, spec, source.value) for name, spec in cast("dict[str, Any]", table).items()]


def extract_dependencies(
    data: dict[str, Any],
    sources: Iterable[DependencySource] = DEFAULT_SOURCES,
) -> list[DependencyInfo]:
    """Extract dependencies from a parsed Cargo.toml.

    Args:
        data: Parsed Cargo.toml content.
        sources: Tables to read, in order.

    Returns:
        Dependencies in table order. Missing tables contribute nothing.

    Raises:
        ManifestError: If a table or one of its declarations has the wrong shape.
    """
    result: list[DependencyInfo] = []
    for source in sources:
        result.extend(_extract_from_table(data, source))

    logger.debug("Extracted %d dependencies from Cargo.toml", len(result))
    return result


def parse_sources(names: Iterable[str]) -> tuple[DependencySource, ...]:
    """Convert configured table names to :class:`DependencySource` members.

    Raises:
        ValueError: If a name is not a known dependency table.
    """
    return tuple(DependencySource(name) for name in names)


__all__ = [
    "DEFAULT_SOURCES",
    "DependencySource",
    "ManifestError",
    "extract_dependencies",
    "load_manifest",
    "parse_sources",
]
