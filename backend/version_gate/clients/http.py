from __future__ import annotations

import asyncio
import logging
from typing import Mapping

import httpx

from version_gate import __version__
from version_gate.models.descriptor import VersionDescriptor
from version_gate.models.errors import BadStatusError, DecodeError, TransportError

_log = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)
_DEFAULT_HEADERS: Mapping[str, str] = {
    "User-Agent": f"version-gate/{__version__}",
    "Accept": "application/json",
}


def _coerce_timeout(value: httpx.Timeout | float | int | None) -> httpx.Timeout:
    if isinstance(value, httpx.Timeout):
        return value
    if isinstance(value, (int, float)):
        return httpx.Timeout(value)
    return _DEFAULT_TIMEOUT


class HttpVersionFetcher:
    """Fetches a ``VersionDescriptor`` over HTTP with a lazily created httpx client.

    Failures surface as ``TransportError``, ``BadStatusError`` or
    ``DecodeError``. Transport timeouts are enforced here; the controller
    imposes none of its own.
    """

    def __init__(
        self,
        *,
        timeout: httpx.Timeout | float | int | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        follow_redirects: bool = True,
    ) -> None:
        self._timeout = _coerce_timeout(timeout)
        merged = dict(_DEFAULT_HEADERS)
        if headers:
            merged.update(headers)
        self._headers = merged
        self._transport = transport
        self._follow_redirects = follow_redirects
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            async with self._client_lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        timeout=self._timeout,
                        headers=self._headers,
                        follow_redirects=self._follow_redirects,
                        transport=self._transport,
                    )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpVersionFetcher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def fetch(self, url: str) -> VersionDescriptor:
        client = await self._get_client()
        try:
            response = await client.get(url)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"{exc.__class__.__name__}: {exc}") from exc
        if not 200 <= response.status_code <= 299:
            raise BadStatusError(response.status_code, url)
        if not response.content:
            raise DecodeError("empty response body")
        descriptor = VersionDescriptor.from_json(response.content)
        _log.debug(
            "fetched descriptor required=%s recommended=%s eol=%s",
            descriptor.required_version,
            descriptor.recommended_version,
            descriptor.end_of_life,
        )
        return descriptor
