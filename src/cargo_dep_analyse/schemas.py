"""Pydantic schemas for external data boundaries.

Purpose
-------
Define Pydantic models for data that crosses system boundaries:
- Input: Cargo.toml dependency tables and crates.io API responses
- Output: JSON serialization of analysis results

These models handle validation, coercion, and serialization at the edges
while internal business logic uses lightweight dataclasses.

Data Flow Pattern
-----------------
External Input → Pydantic (validate) → Dataclass (domain) → Pydantic (serialize) → External Output
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .models import SkipReason


class DependencyAnalysisSchema(BaseModel):
    """Pydantic schema for serializing one analysis record to JSON."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The dependency name")
    current_version: str = Field(description="Declared version without caret")
    latest_version: str = Field(description="Latest published version")
    is_outdated: bool = Field(description="Whether a newer version exists")


class SkippedDependencySchema(BaseModel):
    """Pydantic schema for serializing a skipped dependency to JSON."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    name: str
    reason: SkipReason
    detail: str | None = None


def _empty_entry_list() -> list[DependencyAnalysisSchema]:
    """Return empty list for default factory."""
    return []


def _empty_skipped_list() -> list[SkippedDependencySchema]:
    """Return empty list for default factory."""
    return []


class AnalysisResultSchema(BaseModel):
    """Pydantic schema for complete analysis result serialization."""

    model_config = ConfigDict(frozen=True)

    entries: list[DependencyAnalysisSchema] = Field(default_factory=_empty_entry_list)
    skipped: list[SkippedDependencySchema] = Field(default_factory=_empty_skipped_list)
    total_dependencies: int = 0
    outdated_count: int = 0


class CrateResponseSchema(BaseModel):
    """Schema for the crates.io ``/api/v1/crates/{name}`` response.

    ``versions`` is required: a response without it fails validation. Its
    elements are checked one by one by the client, so a malformed entry
    only drops that entry.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    versions: list[Any]


class CargoDependencySpec(BaseModel):
    """Schema for a Cargo dependency specification in table form.

    Handles detailed Cargo dependencies like:
    serde = {version = "1.0", features = ["derive"]}
    local = {path = "../local"}
    tokio_02 = {package = "tokio", version = "0.2"}

    Only ``version`` and ``package`` are read; every other key is ignored.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: str | None = None
    package: str | None = None


__all__ = [
    "AnalysisResultSchema",
    "CargoDependencySpec",
    "CrateResponseSchema",
    "DependencyAnalysisSchema",
    "SkippedDependencySchema",
]
