"""Normalization of Cargo version requirements into semantic versions.

Purpose
-------
Cargo lets a requirement be written as ``"1"``, ``"1.2"`` or ``"^1.2.3"``.
Comparing it with a registry release needs a full ``major.minor.patch``
string, which is what this module produces.

Contents
--------
* :func:`strip_caret` - Remove a single leading caret
* :func:`normalize_version` - Zero-fill a version to three components
* :func:`parse_semver` - Parse a normalized string as a semantic version
"""

from __future__ import annotations

from functools import lru_cache

import semver


def strip_caret(version: str) -> str:
    """Remove a single leading ``^`` from a version requirement.

    Example:
        >>> strip_caret("^0.4.3")
        '0.4.3'
        >>> strip_caret("1.2")
        '1.2'
    """
    return version[1:] if version.startswith("^") else version


@lru_cache(maxsize=512)
def normalize_version(version: str) -> str:
    """Coerce a version requirement to three dot-separated components.

    Components are not checked for being numeric; an invalid result is
    rejected later by :func:`parse_semver`.

    Args:
        version: A requirement like ``"1"``, ``"1.2"`` or ``"^1.2.3"``.

    Returns:
        The caret-stripped version, zero-filled to ``major.minor.patch``
        when it has fewer than three components.

    Example:
        >>> normalize_version("^1")
        '1.0.0'
        >>> normalize_version("1.2")
        '1.2.0'
        >>> normalize_version("1.2.3-beta.1")
        '1.2.3-beta.1'
    """
    stripped = strip_caret(version)
    parts = stripped.split(".")
    if len(parts) == 1:
        return f"{parts[0]}.0.0"
    if len(parts) == 2:
        return f"{parts[0]}.{parts[1]}.0"
    return stripped


def parse_semver(version: str) -> semver.Version:
    """Parse a normalized version string.

    Raises:
        ValueError: If the string is not a valid semantic version.
    """
    return semver.Version.parse(version)


__all__ = [
    "normalize_version",
    "parse_semver",
    "strip_caret",
]
