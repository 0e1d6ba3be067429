"""HTTP client for a running sunset server.

Used by the CLI's ``get``/``set``/``brighter``/``darker`` commands.
"""

from __future__ import annotations

import logging

import httpx

from sunset.domain.models import format_value

logger = logging.getLogger(__name__)


class SunsetClientError(Exception):
    """Raised when a request to the sunset server fails."""


class SunsetClient:
    """Async client for the sunset HTTP endpoints.

    Example usage::

        async with SunsetClient("http://localhost:12321") as client:
            await client.brighter()
            print(await client.get())
    """

    def __init__(
        self,
        base_url: str = "http://localhost:12321",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def disconnect(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get(self) -> float:
        """Return the server's current brightness value."""
        resp = await self._get("/get")
        try:
            return float(resp.text.strip())
        except ValueError as e:
            raise SunsetClientError(f"Unexpected /get response: {resp.text!r}") from e

    async def set(self, value: float) -> float:
        await self._get("/set", params={"brightness": format_value(value)})
        return await self.get()

    async def brighter(self) -> float:
        await self._get("/brighter")
        return await self.get()

    async def darker(self) -> float:
        await self._get("/darker")
        return await self.get()

    async def _get(self, path: str, params: dict[str, str] | None = None) -> httpx.Response:
        if self._client is None:
            raise SunsetClientError("Client is not connected")
        try:
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            detail = e.response.text
            raise SunsetClientError(
                f"GET {path} failed with {e.response.status_code}: {detail}"
            ) from e
        except httpx.HTTPError as e:
            raise SunsetClientError(f"GET {path} failed: {e}") from e
        logger.debug("GET %s -> %d", path, resp.status_code)
        return resp

    async def __aenter__(self) -> SunsetClient:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        await self.disconnect()
