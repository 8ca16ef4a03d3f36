"""
Weather endpoint.

Proxies OpenWeatherMap current conditions for a single city and returns a
simplified payload. Errors are rendered as ``{"error": ...}`` by the
handlers in ``app.core.errors``.
"""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_weather_service
from app.schemas.weather import WeatherResponse
from app.services.weather_service import DEFAULT_CITY, WeatherService

router = APIRouter()


@router.get("/weather", response_model=WeatherResponse)
async def get_weather(
    city: str | None = Query(
        None, description="City name (defaults to London)", examples=["Paris"],
    ),
    svc: WeatherService = Depends(get_weather_service),
):
    """
    Get current weather for ``city`` in metric units.

    Returns 500 when no OpenWeather key is configured, 502 when
    OpenWeatherMap rejects the request, 500 for any other failure.
    """
    result = await svc.get_weather(city or DEFAULT_CITY)
    return WeatherResponse(
        city=result.city,
        temperature=result.temperature,
        description=result.description,
        raw={},
    )
