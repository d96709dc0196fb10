"""Public package surface for Cargo dependency analysis and configuration.

This package reads a Cargo.toml, looks up the latest published version of
every dependency on crates.io and reports which ones are outdated.

Main API
--------
* :func:`analyze_manifest` - Analyze a Cargo.toml and return the analysed dependencies
* :class:`DependencyAnalysis` - Data class for one analysis result
* :class:`Analyzer` - Analyzer holding registry and concurrency settings
"""

from __future__ import annotations

from .__init__conf__ import print_info
from .analyzer import Analyzer, analyze_manifest, run_analysis, write_analysis_json
from .config import get_config
from .manifest_reader import ManifestError
from .models import (
    AnalysisResult,
    DependencyAnalysis,
    DependencyInfo,
    SkippedDependency,
    SkipReason,
)
from .version_normalizer import normalize_version

__all__ = [
    "Analyzer",
    "AnalysisResult",
    "DependencyAnalysis",
    "DependencyInfo",
    "ManifestError",
    "SkipReason",
    "SkippedDependency",
    "analyze_manifest",
    "get_config",
    "normalize_version",
    "print_info",
    "run_analysis",
    "write_analysis_json",
]
