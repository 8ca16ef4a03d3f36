"""
Pydantic schemas for INR currency conversion.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CurrencyResponse(BaseModel):
    """An INR amount converted to USD and EUR."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    amount_inr: float = Field(alias="amountINR")
    usd: float
    eur: float
    rates_source: str
