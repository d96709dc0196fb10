"""Configuration management using lib_layered_config.

Purpose
-------
Provides a centralized configuration loader that merges defaults, application
configs, host configs, user configs, .env files, and environment variables
following a deterministic precedence order.

Contents
--------
* :func:`get_config` – loads configuration with lib_layered_config
* :func:`get_default_config_path` – returns path to bundled default config
* :func:`get_analyzer_settings` – returns analyzer-specific settings

Configuration identifiers (vendor, app, slug) are imported from
:mod:`cargo_dep_analyse.__init__conf__` as LAYEREDCONF_* constants.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lib_layered_config import Config, read_config

from . import __init__conf__

# Environment variable prefix for native (short) env vars
_ENV_PREFIX = "CARGO_DEP_ANALYSE_"

_DEFAULT_TIMEOUT = 30.0
_DEFAULT_CONCURRENCY = 10
_DEFAULT_SECTIONS = ("dependencies",)
_DEFAULT_LOG_LEVEL = "INFO"


def get_default_config_path() -> Path:
    """Return the path to the bundled default configuration file.

    Example:
        >>> path = get_default_config_path()
        >>> path.name
        'defaultconfig.toml'
        >>> path.exists()
        True
    """
    return Path(__file__).parent / "defaultconfig.toml"


@lru_cache(maxsize=1)
def get_config(*, start_dir: str | None = None) -> Config:
    """Load layered configuration with application defaults.

    Loads configuration from multiple sources in precedence order:
    defaults → app → host → user → dotenv → env

    Args:
        start_dir: Optional directory that seeds .env discovery. Defaults to
            current working directory when None.

    Returns:
        Immutable configuration object with provenance tracking.

    Note:
        Cached with maxsize=1; call ``get_config.cache_clear()`` to reload.
    """
    return read_config(
        vendor=__init__conf__.LAYEREDCONF_VENDOR,
        app=__init__conf__.LAYEREDCONF_APP,
        slug=__init__conf__.LAYEREDCONF_SLUG,
        default_file=get_default_config_path(),
        start_dir=start_dir,
    )


@dataclass(frozen=True, slots=True)
class AnalyzerSettings:
    """Immutable settings for the dependency analyzer.

    Attributes:
        timeout: Maximum seconds to wait for registry responses.
        concurrency: Maximum number of simultaneous registry requests.
        sections: Cargo.toml tables to read dependencies from.
        log_level: Name of the console logging level.
    """

    timeout: float
    concurrency: int
    sections: tuple[str, ...]
    log_level: str


def _positive(value: float, fallback: float) -> float:
    """Return ``value`` when it is positive, otherwise ``fallback``."""
    return value if value > 0 else fallback


def _env_override(name: str, current: float, convert: type[float] | type[int]) -> float:
    """Return the converted native env var, or ``current`` when unset, invalid or not positive."""
    raw = os.environ.get(f"{_ENV_PREFIX}{name}")
    if not raw:
        return current
    try:
        return _positive(convert(raw), current)
    except ValueError:
        return current


def get_analyzer_settings() -> AnalyzerSettings:
    """Get analyzer settings from configuration with environment variable overrides.

    Settings are resolved in the following precedence order (highest wins):
    1. Native environment variables (CARGO_DEP_ANALYSE_TIMEOUT, CARGO_DEP_ANALYSE_CONCURRENCY)
    2. lib_layered_config environment variables (CARGO_DEP_ANALYSE___ANALYZER__*, etc.)
    3. User config file (~/.config/cargo-dep-analyse/config.toml)
    4. Host config file
    5. Application config file
    6. Default config (bundled defaultconfig.toml)

    A non-positive timeout or concurrency is ignored at every layer.

    Example:
        >>> settings = get_analyzer_settings()
        >>> settings.sections
        ('dependencies',)
    """
    config = get_config()

    analyzer_section = config.get("analyzer", default={})
    manifest_section = config.get("manifest", default={})
    logging_section = config.get("logging", default={})

    configured_timeout = _positive(float(analyzer_section.get("timeout", _DEFAULT_TIMEOUT)), _DEFAULT_TIMEOUT)
    configured_concurrency = _positive(
        int(analyzer_section.get("concurrency", _DEFAULT_CONCURRENCY)),
        _DEFAULT_CONCURRENCY,
    )
    timeout = _env_override("TIMEOUT", configured_timeout, float)
    concurrency = _env_override("CONCURRENCY", configured_concurrency, int)
    sections = manifest_section.get("sections", list(_DEFAULT_SECTIONS))
    log_level = logging_section.get("level", _DEFAULT_LOG_LEVEL)

    return AnalyzerSettings(
        timeout=float(timeout),
        concurrency=int(concurrency),
        sections=tuple(str(section) for section in sections),
        log_level=str(log_level).upper(),
    )


__all__ = [
    "AnalyzerSettings",
    "get_analyzer_settings",
    "get_config",
    "get_default_config_path",
]
