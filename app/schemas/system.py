"""
Pydantic schemas for health and configuration flags.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"


class ConfigFlagsResponse(BaseModel):
    """Which credentials are configured. Presence only, never values."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    open_weather_key_present: bool
    exchange_rate_key_present: bool
    quote_api_url_present: bool
