"""
Weather service — current conditions from OpenWeatherMap.

Each call makes exactly one request with metric units and reshapes the
upstream payload into a ``WeatherResult``. Nothing is cached or retried.

Failure mapping:
  - no API key configured      -> ConfigurationError (500)
  - upstream 401               -> UpstreamError (502), invalid-key message
  - any other upstream status  -> UpstreamError (502), status + upstream message
  - network / decoding errors  -> InfoHubError (500), generic message
  - mistyped payload fields    -> InfoHubError (500), generic message
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from app.config import Settings
from app.core.errors import ConfigurationError, InfoHubError, UpstreamError

logger = logging.getLogger(__name__)

DEFAULT_CITY = "London"

MISSING_KEY_MESSAGE = "Weather API key not configured on the server."
INVALID_KEY_MESSAGE = (
    "Invalid or unauthorized OpenWeather API key. "
    "Please check your OPENWEATHER_API_KEY."
)
GENERIC_FAILURE_MESSAGE = "Could not fetch weather data."


@dataclass(frozen=True)
class WeatherResult:
    """Simplified weather reading. Temperature is left unrounded."""
    city: str | None
    temperature: float | None
    description: str | None


def _optional(value, types: tuple[type, ...], field: str):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, types):
        raise ValueError(f"unexpected {field}: {value!r}")
    return value


def parse_weather(data: dict) -> WeatherResult:
    """
    Map an OpenWeatherMap ``/weather`` payload onto a ``WeatherResult``.

    Missing sections become None; present fields of the wrong type raise
    ``ValueError``.
    """
    main = data.get("main")
    conditions = data.get("weather")
    first = conditions[0] if isinstance(conditions, list) and conditions else None
    temperature = _optional(
        main.get("temp") if isinstance(main, dict) else None, (int, float), "temperature",
    )
    return WeatherResult(
        city=_optional(data.get("name"), (str,), "city"),
        temperature=temperature,
        description=_optional(
            first.get("description") if isinstance(first, dict) else None, (str,), "description",
        ),
    )


def _upstream_message(response: httpx.Response) -> str:
    """Extract OpenWeatherMap's ``message`` field, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase or "Unknown error"


class WeatherService:
    """Fetches current weather for a city."""

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = "https://api.openweathermap.org/data/2.5/weather",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
    ) -> WeatherService:
        return cls(
            settings.OPENWEATHER_API_KEY,
            api_url=settings.OPENWEATHER_API_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def get_weather(self, city: str = DEFAULT_CITY) -> WeatherResult:
        if not self._api_key:
            raise ConfigurationError(MISSING_KEY_MESSAGE)

        params = {"q": city, "units": "metric", "appid": self._api_key}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport, follow_redirects=True,
            ) as client:
                resp = await client.get(self._api_url, params=params)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            message = _upstream_message(exc.response)
            logger.error("Error fetching weather (%s): %s", status_code, message)
            if status_code == 401:
                raise UpstreamError(INVALID_KEY_MESSAGE) from exc
            raise UpstreamError(
                f"OpenWeather API error (status {status_code}): {message}"
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error("Error fetching weather: %s", exc)
            raise InfoHubError(GENERIC_FAILURE_MESSAGE) from exc

        if not isinstance(data, dict):
            logger.error("Unexpected weather payload type: %s", type(data).__name__)
            raise InfoHubError(GENERIC_FAILURE_MESSAGE)

        try:
            return parse_weather(data)
        except ValueError as exc:
            logger.error("Malformed weather payload: %s", exc)
            raise InfoHubError(GENERIC_FAILURE_MESSAGE) from exc
