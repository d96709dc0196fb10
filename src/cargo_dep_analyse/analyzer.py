"""Core analyzer that compares declared dependencies with crates.io releases.

Purpose
-------
Orchestrate the dependency analysis pipeline: parse the Cargo.toml, extract
dependencies, fetch their published versions concurrently and compare each
declared version with the latest release.

Contents
--------
* :func:`analyze_manifest` - Main API function for analyzing a Cargo.toml
* :func:`analyze_dependency_async` - Analyze a single dependency
* :class:`Analyzer` - Analyzer holding the registry and concurrency settings

System Role
-----------
The central component that coordinates all other modules to produce
the final analysis results. This is the main entry point for the library.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from .manifest_reader import DEFAULT_SOURCES, DependencySource, extract_dependencies, load_manifest
from .models import AnalysisResult, DependencyAnalysis, DependencyInfo, SkippedDependency, SkipReason
from .registry_client import DEFAULT_TIMEOUT, RegistryClient
from .schemas import AnalysisResultSchema, DependencyAnalysisSchema, SkippedDependencySchema
from .version_normalizer import normalize_version, parse_semver, strip_caret

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 10

Outcome = DependencyAnalysis | SkippedDependency


async def analyze_dependency_async(
    client: RegistryClient,
    name: str,
    current_version: str,
    *,
    package: str | None = None,
) -> Outcome:
    """Compare one declared dependency with its latest published version.

    The first version returned by the registry is taken as the latest.

    Args:
        client: Registry client used to fetch published versions.
        name: The dependency name as written in the manifest.
        current_version: The declared version requirement.
        package: Registry name when the dependency is renamed.

    Returns:
        The analysis record, or a :class:`SkippedDependency` when the
        registry has no versions or a version does not parse.

    Raises:
        httpx.HTTPError: On transport failures.
        ValueError: On malformed registry responses.
    """
    logger.info("Analysing dependency %s version %s", name, current_version)
    versions = await client.fetch_versions_async(package or name)

    if not versions:
        logger.info("No version found for %s", name)
        return SkippedDependency(name=name, reason=SkipReason.NO_RELEASES)

    latest_raw = versions[0]
    normalized_current = normalize_version(current_version)
    normalized_latest = normalize_version(latest_raw)
    logger.debug("Normalized versions for %s: %s -> %s", name, normalized_current, normalized_latest)

    try:
        current = parse_semver(normalized_current)
        latest = parse_semver(normalized_latest)
    except ValueError as exc:
        logger.warning("Version parsing error for %s: %s", name, exc)
        return SkippedDependency(name=name, reason=SkipReason.INVALID_VERSION, detail=str(exc))

    return DependencyAnalysis(
        name=name,
        current_version=strip_caret(current_version),
        latest_version=str(latest),
        is_outdated=latest > current,
    )


def _outcome_from_exception(dep: DependencyInfo, exc: BaseException) -> SkippedDependency:
    """Turn an exception raised by one analysis into a skip entry."""
    logger.warning("Registry lookup failed for %s: %s", dep.name, exc)
    return SkippedDependency(name=dep.name, reason=SkipReason.REGISTRY_ERROR, detail=str(exc) or type(exc).__name__)


def _build_result(dependencies: list[DependencyInfo], outcomes: Iterable[Outcome]) -> AnalysisResult:
    """Split outcomes into entries and skipped dependencies."""
    result = AnalysisResult(total_dependencies=len(dependencies))
    for outcome in outcomes:
        if isinstance(outcome, DependencyAnalysis):
            result.entries.append(outcome)
        else:
            result.skipped.append(outcome)
    result.outdated_count = sum(1 for entry in result.entries if entry.is_outdated)
    return result


@dataclass
class Analyzer:
    """Analyzer for Cargo.toml dependency analysis.

    Attributes:
        timeout: Request timeout in seconds.
        concurrency: Maximum concurrent registry requests.
        sources: Manifest tables to read dependencies from.
        transport: Optional httpx transport handed to the registry client.
    """

    timeout: float = DEFAULT_TIMEOUT
    concurrency: int = DEFAULT_CONCURRENCY
    sources: tuple[DependencySource, ...] = DEFAULT_SOURCES
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate the analyzer configuration."""
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.concurrency <= 0:
            raise ValueError(f"concurrency must be positive, got {self.concurrency}")

    def _registry_client(self) -> RegistryClient:
        return RegistryClient(timeout=self.timeout, transport=self.transport)

    async def analyze_dependencies_async(self, dependencies: list[DependencyInfo]) -> AnalysisResult:
        """Analyze already extracted dependencies concurrently.

        Every dependency with a declared version is analysed; the batch
        waits for all of them. Failures of one dependency never affect the
        others.
        """
        skipped: list[SkippedDependency] = []
        candidates: list[DependencyInfo] = []
        for dep in dependencies:
            if dep.version is None:
                logger.info("Skipping %s: no version declared", dep.name)
                skipped.append(SkippedDependency(name=dep.name, reason=SkipReason.NO_VERSION))
            else:
                candidates.append(dep)

        semaphore = asyncio.Semaphore(self.concurrency)

        async with self._registry_client() as client:

            async def run_one(dep: DependencyInfo) -> Outcome:
                async with semaphore:
                    return await analyze_dependency_async(
                        client,
                        dep.name,
                        dep.version or "",
                        package=dep.package,
                    )

            raw = await asyncio.gather(*(run_one(dep) for dep in candidates), return_exceptions=True)

        outcomes: list[Outcome] = list(skipped)
        for dep, item in zip(candidates, raw):
            if isinstance(item, Exception):
                outcomes.append(_outcome_from_exception(dep, item))
            elif isinstance(item, BaseException):
                raise item
            else:
                outcomes.append(item)

        return _build_result(dependencies, outcomes)

    async def analyze_async(self, manifest_path: Path | str) -> AnalysisResult:
        """Analyze a Cargo.toml file asynchronously.

        Raises:
            OSError: If the manifest cannot be read.
            tomllib.TOMLDecodeError: If the manifest is not valid TOML.
            ManifestError: If a dependency table has the wrong shape.
        """
        path = Path(manifest_path)
        logger.info("Analysing %s", path)

        data = load_manifest(path)
        dependencies = extract_dependencies(data, self.sources)
        logger.info("Found %d dependencies", len(dependencies))
        for dep in dependencies:
            logger.debug("- %s: %s", dep.name, dep.version)

        return await self.analyze_dependencies_async(dependencies)

    def analyze(self, manifest_path: Path | str) -> AnalysisResult:
        """Synchronous wrapper for analyze_async.

        Args:
            manifest_path: Path to the Cargo.toml file.

        Returns:
            Complete analysis result.
        """
        return asyncio.run(self.analyze_async(manifest_path))


def create_analyzer(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
    sources: tuple[DependencySource, ...] = DEFAULT_SOURCES,
) -> Analyzer:
    """Create an Analyzer instance with the given configuration."""
    return Analyzer(timeout=timeout, concurrency=concurrency, sources=sources)


def run_analysis(
    manifest_path: Path | str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
    sources: tuple[DependencySource, ...] = DEFAULT_SOURCES,
) -> AnalysisResult:
    """Analyze a Cargo.toml file and return the full result.

    Args:
        manifest_path: Path to the Cargo.toml file.
        timeout: Request timeout in seconds.
        concurrency: Maximum concurrent registry requests.
        sources: Manifest tables to read dependencies from.

    Returns:
        Complete analysis result with entries, skipped dependencies and counts.
    """
    analyzer = create_analyzer(timeout=timeout, concurrency=concurrency, sources=sources)
    return analyzer.analyze(manifest_path)


def analyze_manifest(
    manifest_path: Path | str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[DependencyAnalysis]:
    """Analyze a Cargo.toml file and return the successfully analysed dependencies.

    This is the main API function for the library.

    Example:
        >>> entries = analyze_manifest("Cargo.toml")  # doctest: +SKIP
        >>> for entry in entries:  # doctest: +SKIP
        ...     if entry.is_outdated:  # doctest: +SKIP
        ...         print(f"{entry.name}: {entry.current_version} -> {entry.latest_version}")  # doctest: +SKIP
    """
    return run_analysis(manifest_path, timeout=timeout, concurrency=concurrency).entries


def result_to_dict(result: AnalysisResult) -> dict[str, object]:
    """Convert an AnalysisResult to a dictionary for JSON serialization."""
    schema = AnalysisResultSchema(
        entries=[
            DependencyAnalysisSchema(
                name=entry.name,
                current_version=entry.current_version,
                latest_version=entry.latest_version,
                is_outdated=entry.is_outdated,
            )
            for entry in result.entries
        ],
        skipped=[
            SkippedDependencySchema(name=item.name, reason=item.reason, detail=item.detail) for item in result.skipped
        ],
        total_dependencies=result.total_dependencies,
        outdated_count=result.outdated_count,
    )
    return schema.model_dump()


def write_analysis_json(result: AnalysisResult, output_path: Path | str) -> None:
    """Write an analysis result to a JSON file.

    Raises:
        ValueError: If output_path is a directory.
    """
    path = Path(output_path).resolve()

    if path.is_dir():
        raise ValueError(f"Output path must be a file, not a directory: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        json.dump(result_to_dict(result), f, indent=2)

    logger.info("Wrote %d entries to %s", len(result.entries), path)


__all__ = [
    "Analyzer",
    "analyze_dependency_async",
    "analyze_manifest",
    "create_analyzer",
    "result_to_dict",
    "run_analysis",
    "write_analysis_json",
]
