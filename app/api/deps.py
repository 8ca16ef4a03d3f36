"""
Reusable FastAPI dependencies.

Dependencies:
  - get_settings            — the Settings instance built at startup
  - get_upstream_transport  — httpx transport for outbound calls (None = network)
  - get_weather_service / get_currency_service / get_quote_service
                            — services wired from the two above
"""

import httpx
from fastapi import Depends, Request

from app.config import Settings
from app.services.currency_service import CurrencyService, select_rates_provider
from app.services.quote_service import QuoteService
from app.services.weather_service import WeatherService


def get_settings(request: Request) -> Settings:
    """Return the configuration attached to the running app."""
    return request.app.state.settings


def get_upstream_transport() -> httpx.AsyncBaseTransport | None:
    """
    Transport used for third-party calls.

    ``None`` lets httpx open real connections; tests override this
    dependency with an ``httpx.MockTransport``.
    """
    return None


def get_weather_service(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_upstream_transport),
) -> WeatherService:
    return WeatherService.from_settings(settings, transport)


def get_currency_service(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_upstream_transport),
) -> CurrencyService:
    return CurrencyService(select_rates_provider(settings, transport))


def get_quote_service(
    settings: Settings = Depends(get_settings),
    transport: httpx.AsyncBaseTransport | None = Depends(get_upstream_transport),
) -> QuoteService:
    return QuoteService.from_settings(settings, transport)
