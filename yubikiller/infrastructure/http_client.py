"""Shared async HTTP client with configurable timeout."""

from typing import Any, Optional

import httpx


class HttpClient:
    """Thin async wrapper around httpx.AsyncClient with a configurable timeout.

    The underlying connection pool is safe to share between concurrent
    invalidations.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def stream_get(self, url: str, **kwargs: Any) -> httpx.Response:
        """GET *url* without reading the body. The caller must ``aclose()`` it."""
        request = self._client.build_request("GET", url, **kwargs)
        return await self._client.send(request, stream=True)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
