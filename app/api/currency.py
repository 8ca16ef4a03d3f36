"""
INR currency conversion endpoint.
"""

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_currency_service
from app.schemas.currency import CurrencyResponse
from app.services.currency_service import CurrencyService, parse_amount

router = APIRouter()


@router.get("/currency", response_model=CurrencyResponse)
async def convert_currency(
    amount: str | None = Query(
        None, description="Amount in INR (invalid or missing -> 1)", examples=["100"],
    ),
    svc: CurrencyService = Depends(get_currency_service),
):
    """
    Convert an INR amount to USD and EUR.

    Rates come from exchangerate-api.com when EXCHANGE_RATE_API_KEY is set,
    otherwise from exchangerate.host. Rates are fetched on every request.
    """
    result = await svc.convert(parse_amount(amount))
    return CurrencyResponse(
        amount_inr=result.amount_inr,
        usd=result.usd,
        eur=result.eur,
        rates_source=result.rates_source,
    )
