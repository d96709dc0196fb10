"""Client for the crates.io registry API.

Purpose
-------
Fetch the published versions of a crate from crates.io. Only the
``/api/v1/crates/{name}`` endpoint is used; the response is validated with
:class:`~cargo_dep_analyse.schemas.CrateResponseSchema`.

Contents
--------
* :class:`RegistryClient` - Async client returning published version strings

System Role
-----------
The network edge of the analysis pipeline. Non-success responses mean "no
versions"; malformed responses and transport failures raise so the caller
can skip that one dependency.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from types import TracebackType

import httpx

from . import __init__conf__
from .schemas import CrateResponseSchema

logger = logging.getLogger(__name__)

CRATES_IO_API_URL = "https://crates.io/api/v1/crates/{name}"
DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"{__init__conf__.shell_command}/{__init__conf__.version}"


@dataclass
class RegistryClient:
    """Async crates.io client.

    Used as an async context manager, one ``httpx.AsyncClient`` is shared by
    every request made inside the block. Outside a block each request opens
    its own connection.

    Attributes:
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used to route requests through
            a mock in tests.
    """

    timeout: float = DEFAULT_TIMEOUT
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    _client: httpx.AsyncClient | None = field(default=None, init=False, repr=False)

    def _get_headers(self) -> dict[str, str]:
        """Build request headers; crates.io rejects requests without a User-Agent."""
        return {
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        }

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._get_headers(),
            transport=self.transport,
        )

    async def __aenter__(self) -> RegistryClient:
        self._client = self._build_client()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(url)
        async with self._build_client() as client:
            return await client.get(url)

    async def fetch_versions_async(self, name: str) -> list[str]:
        """Fetch the published versions of a crate, newest first.

        The registry's ordering is returned as-is.

        Args:
            name: The crate name, interpolated into the URL unescaped.

        Returns:
            Version strings, or an empty list when the registry answers with
            a non-success status.

        Raises:
            httpx.HTTPError: On transport failures.
            ValueError: If the body is not JSON or lacks a ``versions`` array
                (``pydantic.ValidationError`` is a ``ValueError``).
        """
        url = CRATES_IO_API_URL.format(name=name)
        logger.info("Requesting %s: %s", name, url)

        response = await self._get(url)
        if not response.is_success:
            logger.warning(
                "HTTP %d for %s: %s",
                response.status_code,
                name,
                response.reason_phrase or "Unknown error",
            )
            return []

        return self._parse_versions_response(name, response)

    def _parse_versions_response(self, name: str, response: httpx.Response) -> list[str]:
        """Extract ``num`` from every entry of the ``versions`` array.

        Entries that are not objects or whose ``num`` is not a string are dropped.
        """
        payload = CrateResponseSchema.model_validate(response.json())
        versions = [
            entry["num"] for entry in payload.versions if isinstance(entry, dict) and isinstance(entry.get("num"), str)
        ]
        logger.debug("Registry lists %d versions for %s", len(versions), name)
        return versions

    def fetch_versions(self, name: str) -> list[str]:
        """Synchronous wrapper for :meth:`fetch_versions_async`."""
        return asyncio.run(self.fetch_versions_async(name))


__all__ = [
    "CRATES_IO_API_URL",
    "DEFAULT_TIMEOUT",
    "RegistryClient",
    "USER_AGENT",
]
