from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from rentdesk.services.exceptions import DownstreamServiceError

logger = logging.getLogger(__name__)

JsonBody = Dict[str, Any]


class BackendClient:
    """Async HTTP client for the remote rental backend (products, rentals, orders).

    Without a base URL the client stays in mock mode and refuses to make
    network calls; services then use the in-memory store instead.
    """

    def __init__(
        self,
        base_url: Any = None,
        *,
        timeout: float = 10.0,
        use_mock_data: bool = True,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = str(base_url).rstrip("/") if base_url else None
        self.use_mock_data = use_mock_data or self.base_url is None
        self._timeout = httpx.Timeout(timeout)
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        self._transport = transport
        self._http: Optional[httpx.AsyncClient] = None

    @property
    def http(self) -> httpx.AsyncClient:
        if self.use_mock_data:
            raise RuntimeError("Rental backend is not configured; running in mock mode")
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                headers=self._headers,
                transport=self._transport,
            )
        return self._http

    async def close(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: JsonBody | None = None,
        params: Dict[str, Any] | None = None,
    ) -> JsonBody:
        logger.debug("%s %s%s", method, self.base_url or "", path)
        try:
            response = await self.http.request(method, path, json=json, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.error("Rental backend answered %s %s with %d", method, path, status)
            raise DownstreamServiceError(
                f"Rental backend rejected {method} {path}",
                status_code=status,
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Rental backend unreachable for %s %s: %s", method, path, exc)
            raise DownstreamServiceError(
                "Unable to reach rental backend", cause=exc
            ) from exc

        if not response.content:
            return {}
        return response.json()

    async def get(self, path: str, params: Dict[str, Any] | None = None) -> JsonBody:
        return await self._send("GET", path, params=params)

    async def post(self, path: str, payload: JsonBody) -> JsonBody:
        return await self._send("POST", path, json=payload)

    async def put(self, path: str, payload: JsonBody) -> JsonBody:
        return await self._send("PUT", path, json=payload)

    async def delete(self, path: str) -> JsonBody:
        return await self._send("DELETE", path)

    async def simulate_latency(self) -> None:
        """Yield to the event loop so mock calls behave like awaited I/O."""

        await asyncio.sleep(0)
