"""
HTTP client for the InfoHub backend.

Used by the client shell and widgets. Every failure is raised as a
``ClientError`` whose message is what the UI shows: the backend's
``error`` field when there is one, otherwise the transport error text.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

STATUS_TIMEOUT_SECONDS = 2.5


class ClientError(Exception):
    """A backend call failed; ``message`` is ready for display."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            body = exc.response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    return str(exc) or fallback


class InfoHubClient:
    """Thin async wrapper over the ``/api`` routes."""

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=None)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> InfoHubClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get(
        self,
        path: str,
        *,
        fallback: str,
        params: dict | None = None,
        timeout: float | None = None,
    ) -> Any:
        try:
            resp = await self._http.get(path, params=params, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            status_code = (
                exc.response.status_code if isinstance(exc, httpx.HTTPStatusError) else None
            )
            logger.debug("GET %s failed: %s", path, exc)
            raise ClientError(_error_message(exc, fallback), status_code) from exc

    async def health(self) -> dict:
        return await self._get(
            "/api/health", fallback="Health check failed", timeout=STATUS_TIMEOUT_SECONDS,
        )

    async def config(self) -> dict:
        return await self._get(
            "/api/config", fallback="Config check failed", timeout=STATUS_TIMEOUT_SECONDS,
        )

    async def weather(self, city: str) -> dict:
        return await self._get(
            "/api/weather", params={"city": city}, fallback="Failed to load weather",
        )

    async def currency(self, amount: float) -> dict:
        return await self._get(
            "/api/currency", params={"amount": amount}, fallback="Failed to convert currency",
        )

    async def quote(self) -> dict:
        return await self._get("/api/quote", fallback="Failed to load quote")
