"""
Pydantic schemas for the quote endpoint.
"""

from typing import Literal

from pydantic import BaseModel


class QuoteData(BaseModel):
    text: str
    author: str | None = None


class QuoteResponse(BaseModel):
    """A quote tagged with where it came from."""
    quote: QuoteData
    source: Literal["external", "mock"]
