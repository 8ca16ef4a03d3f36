"""
Pydantic schemas for the weather endpoint.
"""

from pydantic import BaseModel, Field


class WeatherResponse(BaseModel):
    """Current conditions for a single city, temperatures in °C."""
    city: str | None
    temperature: float | None
    description: str | None
    raw: dict = Field(default_factory=dict)
