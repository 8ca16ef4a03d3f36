"""
Quote endpoint. Never fails outward: any external failure degrades to a
built-in quote tagged ``source="mock"``.
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_quote_service
from app.schemas.quote import QuoteData, QuoteResponse
from app.services.quote_service import QuoteService

router = APIRouter()


@router.get("/quote", response_model=QuoteResponse)
async def get_quote(svc: QuoteService = Depends(get_quote_service)):
    result = await svc.get_quote()
    return QuoteResponse(
        quote=QuoteData(text=result.quote.text, author=result.quote.author),
        source=result.source,
    )
