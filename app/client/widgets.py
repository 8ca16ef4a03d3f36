"""
Weather, currency and quote widgets.

Each widget owns its own ``loading`` / ``error`` / ``data`` state and
never shares it with the others. Starting a fetch clears the previous
data and error; finishing one sets exactly one of them. Every fetch
takes a sequence number and a response from a superseded fetch (or one
arriving after ``unmount()``) is discarded instead of overwriting newer
state.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable
from typing import Any

from app.client.api import ClientError, InfoHubClient

logger = logging.getLogger(__name__)


def _format_number(value: float) -> str:
    text = f"{value:,.4f}".rstrip("0").rstrip(".")
    return text or "0"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class Widget:
    """Shared fetch/loading/error bookkeeping."""

    title = ""
    loading_text = "Loading..."

    def __init__(self, api: InfoHubClient):
        self.api = api
        self.loading = False
        self.error = ""
        self.data: Any = None
        self.mounted = False
        self._seq = 0

    async def mount(self) -> None:
        self.mounted = True

    def unmount(self) -> None:
        self.mounted = False
        self._seq += 1
        self.loading = False

    def _reject(self, message: str) -> None:
        """Validation failure: supersede any in-flight fetch and show ``message``."""
        self._seq += 1
        self.loading = False
        self.data = None
        self.error = message

    def unwrap(self, payload: Any) -> Any:
        return payload

    async def _fetch(self, call: Callable[[], Awaitable[Any]]) -> None:
        self._seq += 1
        seq = self._seq
        self.loading = True
        self.error = ""
        self.data = None

        try:
            data, error = self.unwrap(await call()), ""
        except ClientError as exc:
            logger.debug("%s fetch failed: %s", self.title, exc.message)
            data, error = None, exc.message

        if seq != self._seq:
            logger.debug("Dropping stale %s response", self.title)
            return
        self.data, self.error = data, error
        self.loading = False

    def render_body(self) -> list[str]:
        return []

    def render(self) -> str:
        lines = [self.title]
        if self.error:
            lines.append(f"Error: {self.error}")
        elif self.loading:
            lines.append(self.loading_text)
        elif self.data is not None:
            lines.extend(self.render_body())
        return "\n".join(lines)


class WeatherWidget(Widget):
    """Current weather for one city. Fetches London on mount."""

    title = "Weather Forecast"
    loading_text = "Fetching weather data..."
    default_city = "London"

    def __init__(self, api: InfoHubClient):
        super().__init__(api)
        self.city = self.default_city

    async def mount(self) -> None:
        await super().mount()
        await self.fetch()

    async def fetch(self, city: str | None = None) -> None:
        if city is not None:
            self.city = city
        if not self.city.strip():
            self._reject("Please enter a city name")
            return
        query = self.city
        await self._fetch(lambda: self.api.weather(query))

    def render_body(self) -> list[str]:
        lines = [str(self.data.get("city") or self.city)]
        temperature = self.data.get("temperature")
        if temperature is not None:
            lines.append(f"{_round_half_up(temperature)}°C")
        if self.data.get("description"):
            lines.append(str(self.data["description"]))
        return lines


class CurrencyWidget(Widget):
    """INR to USD/EUR conversion. Only fetches when asked."""

    title = "Currency Converter"
    loading_text = "Converting currencies..."
    invalid_amount_message = "Please enter a valid amount greater than 0"

    def __init__(self, api: InfoHubClient, amount: float = 100):
        super().__init__(api)
        self.amount: Any = amount

    async def convert(self, amount: Any = None) -> None:
        if amount is not None:
            self.amount = amount
        try:
            value = float(self.amount)
        except (TypeError, ValueError):
            value = math.nan
        if not math.isfinite(value) or value <= 0:
            self._reject(self.invalid_amount_message)
            return
        await self._fetch(lambda: self.api.currency(value))

    def render_body(self) -> list[str]:
        data = self.data
        return [
            f"INR Amount: ₹{_format_number(data['amountINR'])}",
            f"US Dollar: ${_format_number(data['usd'])}",
            f"Euro: €{_format_number(data['eur'])}",
            f"Source: {data['ratesSource']}",
        ]


class QuoteWidget(Widget):
    """A single quote. Fetches on mount; ``refresh()`` fetches another."""

    title = "Daily Inspiration"
    loading_text = "Finding inspiration..."

    async def mount(self) -> None:
        await super().mount()
        await self.refresh()

    async def refresh(self) -> None:
        await self._fetch(self.api.quote)

    def unwrap(self, payload: Any) -> Any:
        if not isinstance(payload, dict) or not payload.get("quote"):
            raise ClientError("Invalid quote response")
        return payload["quote"]

    def render_body(self) -> list[str]:
        author = self.data.get("author") or "Unknown"
        return [f'"{self.data.get("text", "")}"', f"— {author}"]
