"""
Quote service — external quote provider with a built-in fallback set.

When a quote URL is configured the service calls it once (5 second cap)
and runs the payload through ``QUOTE_MATCHERS`` in order; the first
matcher that recognises the shape wins. Any failure along the way
(timeout, transport error, non-2xx, non-JSON, unknown shape) is logged
and absorbed: the caller always gets a quote, tagged ``"external"`` or
``"mock"``.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Literal

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)

QuoteSource = Literal["external", "mock"]

QUOTABLE_HOST = "quotable.io"
QUOTABLE_RANDOM_PATH = "/random"


@dataclass(frozen=True)
class Quote:
    text: str
    author: str | None = None


@dataclass(frozen=True)
class QuoteResult:
    quote: Quote
    source: QuoteSource


MOCK_QUOTES: tuple[Quote, ...] = (
    Quote(
        text="The greatest glory in living lies not in never falling, but in rising every time we fall.",
        author="Nelson Mandela",
    ),
    Quote(text="The way to get started is to quit talking and begin doing.", author="Walt Disney"),
    Quote(
        text="The future belongs to those who believe in the beauty of their dreams.",
        author="Eleanor Roosevelt",
    ),
    Quote(text="Stay hungry, stay foolish.", author="Steve Jobs"),
    Quote(
        text="It does not matter how slowly you go as long as you do not stop.",
        author="Confucius",
    ),
)


# ---------------------------------------------------------------------------
# Shape matchers: raw JSON -> Quote | None
# ---------------------------------------------------------------------------


def match_content_author(data: Any) -> Quote | None:
    """quotable.io style: ``{"content": ..., "author": ...}``."""
    if isinstance(data, dict) and data.get("content") and data.get("author"):
        return Quote(text=str(data["content"]), author=str(data["author"]))
    return None


def match_quote_author(data: Any) -> Quote | None:
    """``{"quote": ..., "author": ...}`` as served by several free APIs."""
    if isinstance(data, dict) and data.get("quote") and data.get("author"):
        return Quote(text=str(data["quote"]), author=str(data["author"]))
    return None


def match_results_array(data: Any) -> Quote | None:
    """Search-style ``{"results": [item, ...]}``; uses the first item."""
    if not isinstance(data, dict):
        return None
    results = data.get("results")
    if not isinstance(results, list) or not results or not isinstance(results[0], dict):
        return None

    item = results[0]
    text = item.get("content") or item.get("quote") or item.get("text")
    if not text:
        return None
    author = item.get("author") or item.get("authorName")
    return Quote(text=str(text), author=str(author) if author else None)


QuoteMatcher = Callable[[Any], Quote | None]

QUOTE_MATCHERS: tuple[QuoteMatcher, ...] = (
    match_content_author,
    match_quote_author,
    match_results_array,
)


def normalize_quote(data: Any, matchers: Sequence[QuoteMatcher] = QUOTE_MATCHERS) -> Quote | None:
    """Return the first matcher's result, or None if no shape is recognised."""
    for matcher in matchers:
        quote = matcher(data)
        if quote is not None:
            return quote
    return None


def resolve_quote_url(url: str) -> str:
    """Point a bare quotable.io base URL at its ``/random`` endpoint."""
    if QUOTABLE_HOST in url and not url.endswith(QUOTABLE_RANDOM_PATH):
        return url.rstrip("/") + QUOTABLE_RANDOM_PATH
    return url


# ---------------------------------------------------------------------------
# QuoteService
# ---------------------------------------------------------------------------


class QuoteService:
    """Serves an external quote when possible, a built-in one otherwise."""

    def __init__(
        self,
        api_url: str = "",
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ):
        self._api_url = api_url
        self._timeout = timeout
        self._transport = transport
        self._rng = rng or random.Random()

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
    ) -> QuoteService:
        return cls(
            settings.quote_api_url,
            timeout=settings.QUOTE_TIMEOUT_SECONDS,
            transport=transport,
        )

    def mock_quote(self) -> QuoteResult:
        return QuoteResult(quote=self._rng.choice(MOCK_QUOTES), source="mock")

    async def fetch_external(self) -> Quote | None:
        """Call the configured provider. Returns None on any failure."""
        url = resolve_quote_url(self._api_url)
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport, follow_redirects=True,
            ) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error("External quote fetch failed: %s", exc)
            return None

        quote = normalize_quote(data)
        if quote is None:
            logger.warning("External quote API returned unexpected shape, falling back to mock")
        return quote

    async def get_quote(self) -> QuoteResult:
        if self._api_url:
            quote = await self.fetch_external()
            if quote is not None:
                return QuoteResult(quote=quote, source="external")
        return self.mock_quote()
