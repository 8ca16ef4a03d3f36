"""
Shared test fixtures for InfoHub.

Provides explicit test settings, a fake upstream (httpx.MockTransport)
standing in for the third-party providers, and an async test client
wired to both through FastAPI dependency overrides.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_upstream_transport
from app.config import Settings
from app.main import create_app


# --- Fake upstream providers ---


class FakeUpstream:
    """
    Routes outbound requests by host to a canned response or a handler.

    A handler is any callable taking the ``httpx.Request``; it may return
    an ``httpx.Response`` or raise an httpx exception. Requests to an
    unregistered host fail with ``httpx.ConnectError``.
    """

    def __init__(self):
        self.routes: dict = {}
        self.requests: list[httpx.Request] = []

    def route(self, host: str, response=None, *, handler=None) -> None:
        self.routes[host] = handler if handler is not None else response

    def json(self, host: str, payload, status_code: int = 200) -> None:
        self.route(host, httpx.Response(status_code, json=payload))

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        target = self.routes.get(request.url.host)
        if target is None:
            raise httpx.ConnectError("connection refused", request=request)
        if callable(target):
            return target(request)
        return target

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream():
    return FakeUpstream()


# --- Settings ---


@pytest.fixture
def settings():
    """Settings with every credential set explicitly, ignoring .env and the environment."""
    return Settings(
        _env_file=None,
        OPENWEATHER_API_KEY="test-weather-key",
        EXCHANGE_RATE_API_KEY="",
        QUOTE_API_URL="",
        QUOTABLE_API_URL="",
        UPSTREAM_TIMEOUT_SECONDS=None,
    )


# --- App and HTTP client ---


@pytest.fixture
def app(settings, upstream):
    application = create_app(settings)
    application.dependency_overrides[get_upstream_transport] = lambda: upstream.transport
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP test client against the app with fake upstreams."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# --- Client shell doubles ---


@pytest.fixture
def api():
    """AsyncMock standing in for InfoHubClient."""
    api = AsyncMock()
    api.health = AsyncMock(return_value={"status": "ok"})
    api.config = AsyncMock(return_value={
        "openWeatherKeyPresent": True,
        "exchangeRateKeyPresent": False,
        "quoteApiUrlPresent": True,
    })
    api.weather = AsyncMock(return_value={
        "city": "London",
        "temperature": 15.5,
        "description": "overcast clouds",
        "raw": {},
    })
    api.currency = AsyncMock(return_value={
        "amountINR": 100,
        "usd": 1.2,
        "eur": 1.1,
        "ratesSource": "exchangerate.host",
    })
    api.quote = AsyncMock(return_value={
        "quote": {"text": "Stay hungry, stay foolish.", "author": "Steve Jobs"},
        "source": "mock",
    })
    return api
