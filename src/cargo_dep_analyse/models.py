"""Domain models for dependency analysis (dataclasses).

Purpose
-------
Define core data structures for the dependency analysis domain layer.
These are pure dataclasses used for internal business logic.

For external data serialization, use the Pydantic schemas in schemas.py.

Contents
--------
* :class:`SkipReason` - Why a dependency produced no analysis record
* :class:`DependencyInfo` - A dependency declared in Cargo.toml
* :class:`DependencyAnalysis` - Comparison of declared and latest version
* :class:`SkippedDependency` - A dependency left out of the report
* :class:`AnalysisResult` - Complete analysis result

Data Flow Pattern
-----------------
Cargo.toml → Pydantic (validate) → Dataclass (domain) → Pydantic (serialize) → Output

System Role
-----------
Provides the canonical data structures that flow through the analysis pipeline.
These dataclasses are dependency-free and used for pure business logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SkipReason(str, Enum):
    """Reasons a dependency is left out of the report.

    Attributes:
        NO_VERSION: The declaration carries no version (path/git/workspace).
        NO_RELEASES: The registry returned no published versions.
        REGISTRY_ERROR: The registry request or its response was unusable.
        INVALID_VERSION: The declared or latest version is not a semantic version.
    """

    NO_VERSION = "no version declared"
    NO_RELEASES = "no published versions"
    REGISTRY_ERROR = "registry error"
    INVALID_VERSION = "invalid version"


@dataclass(frozen=True, slots=True)
class DependencyInfo:
    """A single dependency as declared in the manifest.

    Attributes:
        name: The key of the dependency in the manifest table.
        version: The declared version constraint, or None when the
            declaration has no version (path, git or workspace dependency).
        source: The manifest table the dependency was found in.
        package: The crate name on the registry when the dependency is
            renamed with ``package = "..."``.
    """

    name: str
    version: str | None
    source: str = "dependencies"
    package: str | None = None


@dataclass(frozen=True, slots=True)
class DependencyAnalysis:
    """Comparison of a declared dependency version with the latest release.

    Attributes:
        name: The dependency name.
        current_version: The declared version with a leading caret removed,
            kept in the shape the user wrote it.
        latest_version: The latest published version in canonical form.
        is_outdated: Whether the latest version is newer than the declared one.
    """

    name: str
    current_version: str
    latest_version: str
    is_outdated: bool


@dataclass(frozen=True, slots=True)
class SkippedDependency:
    """A dependency that produced no analysis record.

    Attributes:
        name: The dependency name.
        reason: Why it was skipped.
        detail: Optional human-readable detail (error text, offending version).
    """

    name: str
    reason: SkipReason
    detail: str | None = None


def _empty_analysis_list() -> list[DependencyAnalysis]:
    """Return an empty DependencyAnalysis list for dataclass defaults."""
    return []


def _empty_skipped_list() -> list[SkippedDependency]:
    """Return an empty SkippedDependency list for dataclass defaults."""
    return []


@dataclass(slots=True)
class AnalysisResult:
    """Complete result of analyzing a Cargo.toml file.

    Attributes:
        entries: Successfully analyzed dependencies, in manifest order.
        skipped: Dependencies that produced no record, with the reason.
        total_dependencies: Number of dependencies found in the manifest.
        outdated_count: Number of entries with a newer release available.
    """

    entries: list[DependencyAnalysis] = field(default_factory=_empty_analysis_list)
    skipped: list[SkippedDependency] = field(default_factory=_empty_skipped_list)
    total_dependencies: int = 0
    outdated_count: int = 0


__all__ = [
    "AnalysisResult",
    "DependencyAnalysis",
    "DependencyInfo",
    "SkipReason",
    "SkippedDependency",
]
