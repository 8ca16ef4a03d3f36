"""
Currency service — converts INR amounts to USD and EUR.

Architecture:
  - RatesProvider (protocol) yields INR-based USD/EUR rates
  - ExchangeRateAPIProvider calls exchangerate-api.com (needs a key)
  - ExchangeRateHostProvider calls exchangerate.host (keyless fallback)
  - EXCHANGE_RATE_API_KEY present selects the keyed provider

Rates are fetched on every conversion; nothing is cached or retried.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Protocol

import httpx

from app.config import Settings
from app.core.errors import InfoHubError

logger = logging.getLogger(__name__)

DEFAULT_AMOUNT = 1.0
RESULT_QUANTUM = Decimal("0.0001")

MISSING_RATE_MESSAGE = "Missing USD or EUR rate from exchange API"
GENERIC_FAILURE_MESSAGE = "Could not fetch currency conversion data."


class MissingRateError(InfoHubError):
    """The provider answered but did not include both USD and EUR."""

    def __init__(self):
        super().__init__(MISSING_RATE_MESSAGE)


@dataclass(frozen=True)
class CurrencyResult:
    amount_inr: float
    usd: float
    eur: float
    rates_source: str


def round_rate(value: float) -> float:
    """Round to 4 decimal places, ties away from zero on the exact binary value."""
    return float(Decimal(value).quantize(RESULT_QUANTUM, rounding=ROUND_HALF_UP))


def parse_amount(raw: str | None) -> float:
    """
    Parse the ``amount`` query parameter.

    Missing, unparseable, non-finite, zero or negative values all fall
    back to ``DEFAULT_AMOUNT``.
    """
    if raw is None:
        return DEFAULT_AMOUNT
    try:
        amount = float(raw.strip())
    except ValueError:
        return DEFAULT_AMOUNT
    if not math.isfinite(amount) or amount <= 0:
        return DEFAULT_AMOUNT
    return amount


# ---------------------------------------------------------------------------
# Rate providers
# ---------------------------------------------------------------------------


class RatesProvider(Protocol):
    source: str

    async def fetch_rates(self) -> dict | None:
        """Return the provider's rates object keyed by currency code (INR base)."""
        ...


class _HTTPRatesProvider:
    """Shared GET-and-decode logic; subclasses name the URL and rates field."""

    source = ""
    rates_field = ""

    def __init__(
        self,
        *,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout = timeout
        self._transport = transport

    def _request(self) -> tuple[str, dict | None]:
        raise NotImplementedError

    async def fetch_rates(self) -> dict | None:
        url, params = self._request()
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport, follow_redirects=True,
        ) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            data = resp.json()

        if not isinstance(data, dict):
            return None
        return data.get(self.rates_field)


class ExchangeRateAPIProvider(_HTTPRatesProvider):
    """exchangerate-api.com v6, INR base, requires an API key."""

    source = "exchangerate-api.com"
    rates_field = "conversion_rates"

    def __init__(self, api_key: str, *, api_url: str = "https://v6.exchangerate-api.com/v6", **kwargs):
        super().__init__(**kwargs)
        self._api_key = api_key
        self._api_url = api_url.rstrip("/")

    def _request(self) -> tuple[str, dict | None]:
        return f"{self._api_url}/{self._api_key}/latest/INR", None


class ExchangeRateHostProvider(_HTTPRatesProvider):
    """exchangerate.host, no key required."""

    source = "exchangerate.host"
    rates_field = "rates"

    def __init__(self, *, api_url: str = "https://api.exchangerate.host/latest", **kwargs):
        super().__init__(**kwargs)
        self._api_url = api_url

    def _request(self) -> tuple[str, dict | None]:
        return self._api_url, {"base": "INR", "symbols": "USD,EUR"}


def select_rates_provider(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None,
) -> RatesProvider:
    """Keyed provider when EXCHANGE_RATE_API_KEY is set, keyless fallback otherwise."""
    timeout = settings.UPSTREAM_TIMEOUT_SECONDS
    if settings.EXCHANGE_RATE_API_KEY:
        return ExchangeRateAPIProvider(
            settings.EXCHANGE_RATE_API_KEY,
            api_url=settings.EXCHANGE_RATE_API_URL,
            timeout=timeout,
            transport=transport,
        )
    return ExchangeRateHostProvider(
        api_url=settings.EXCHANGE_RATE_HOST_URL,
        timeout=timeout,
        transport=transport,
    )


# ---------------------------------------------------------------------------
# CurrencyService
# ---------------------------------------------------------------------------


class CurrencyService:
    """Converts INR into USD and EUR using a single rates provider."""

    def __init__(self, provider: RatesProvider):
        self.provider = provider

    async def convert(self, amount: float) -> CurrencyResult:
        try:
            rates = await self.provider.fetch_rates()
        except httpx.HTTPStatusError as exc:
            # str(exc) includes the request URL, which holds the API key
            logger.error(
                "Error fetching currency rates from %s (%s %s)",
                self.provider.source,
                exc.response.status_code,
                exc.response.reason_phrase,
            )
            raise InfoHubError(GENERIC_FAILURE_MESSAGE) from exc
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.error("Error fetching currency rates from %s: %s", self.provider.source, exc)
            raise InfoHubError(GENERIC_FAILURE_MESSAGE) from exc

        try:
            usd_rate = float(rates["USD"])
            eur_rate = float(rates["EUR"])
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("%s returned rates without USD/EUR: %r", self.provider.source, rates)
            raise MissingRateError() from exc

        return CurrencyResult(
            amount_inr=amount,
            usd=round_rate(amount * usd_rate),
            eur=round_rate(amount * eur_rate),
            rates_source=self.provider.source,
        )
