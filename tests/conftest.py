"""Shared fixtures: a fake crates.io and the testdata directory."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

import httpx
import pytest

TESTDATA_DIR = Path(__file__).parent / "testdata"

CratesTransportFactory = Callable[[Mapping[str, Sequence[str] | None]], httpx.MockTransport]


def _build_crates_transport(versions_by_name: Mapping[str, Sequence[str] | None]) -> httpx.MockTransport:
    """Answer ``/api/v1/crates/{name}`` from a name → versions mapping.

    Names mapped to None, or not mapped at all, get a 404.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        versions = versions_by_name.get(name)
        if versions is None:
            return httpx.Response(404, json={"errors": [{"detail": "Not Found"}]})
        return httpx.Response(200, json={"versions": [{"num": num, "yanked": False} for num in versions]})

    return httpx.MockTransport(handler)


@pytest.fixture
def crates_transport() -> CratesTransportFactory:
    return _build_crates_transport


@pytest.fixture
def testdata_dir() -> Path:
    return TESTDATA_DIR
