"""
Health and configuration-flag endpoints.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_settings
from app.config import Settings
from app.schemas.system import ConfigFlagsResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness signal for the client shell."""
    return HealthResponse()


@router.get("/config", response_model=ConfigFlagsResponse)
async def get_config_flags(settings: Settings = Depends(get_settings)):
    """Report which credentials are configured, without revealing them."""
    return ConfigFlagsResponse(
        open_weather_key_present=settings.open_weather_key_present,
        exchange_rate_key_present=settings.exchange_rate_key_present,
        quote_api_url_present=settings.quote_api_url_present,
    )
