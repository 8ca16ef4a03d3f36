"""
Client shell — backend status, banners and tab selection.

While mounted, the shell polls ``/api/health`` and ``/api/config``
concurrently every ``poll_interval`` seconds (first check immediately)
and keeps the last outcome:

  - backend_healthy  None until the first check, then True/False
  - backend_config   the config flags, or None when unreachable
  - show_warning     drives which banner (if any) is shown

Switching tabs only changes ``active_tab``; it never triggers a request.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass

from app.client.api import ClientError, InfoHubClient
from app.client.poller import PeriodicTask
from app.client.widgets import CurrencyWidget, QuoteWidget, WeatherWidget, Widget

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 10.0


class Tab(str, enum.Enum):
    WEATHER = "Weather"
    CURRENCY = "Currency"
    QUOTE = "Quote"


TAB_LABELS = {
    Tab.WEATHER: "Weather",
    Tab.CURRENCY: "Currency",
    Tab.QUOTE: "Quotes",
}


@dataclass(frozen=True)
class Banner:
    title: str
    detail: str


OFFLINE_BANNER = Banner(
    "Cannot connect to backend server",
    "Make sure the server is running on port 3001 and try again.",
)
NO_KEYS_BANNER = Banner(
    "API Keys Not Configured",
    "Some features may not work. Please check the server's .env file.",
)


@dataclass(frozen=True)
class BackendStatus:
    """Outcome of one health/config check."""
    reachable: bool
    healthy: bool
    config: dict | None


class ClientShell:
    """Owns the status poller and the three widgets."""

    def __init__(self, api: InfoHubClient, *, poll_interval: float = DEFAULT_POLL_INTERVAL):
        self.api = api
        self.backend_healthy: bool | None = None
        self.backend_config: dict | None = None
        self.show_warning = True
        self.active_tab = Tab.WEATHER
        self.widgets: dict[Tab, Widget] = {
            Tab.WEATHER: WeatherWidget(api),
            Tab.CURRENCY: CurrencyWidget(api),
            Tab.QUOTE: QuoteWidget(api),
        }
        self._poller: PeriodicTask[BackendStatus] = PeriodicTask(
            self.check_backend,
            poll_interval,
            self.apply_status,
            name="backend-status",
        )

    # --- Lifecycle ---

    @property
    def mounted(self) -> bool:
        return self._poller.running

    async def mount(self) -> None:
        """Start status polling and let each widget run its on-mount fetch."""
        self._poller.start()
        await asyncio.gather(*(widget.mount() for widget in self.widgets.values()))

    async def unmount(self) -> None:
        """Stop polling. Late results from in-flight calls are ignored."""
        await self._poller.stop()
        for widget in self.widgets.values():
            widget.unmount()

    # --- Status polling ---

    async def check_backend(self) -> BackendStatus:
        try:
            health, config = await asyncio.gather(self.api.health(), self.api.config())
        except ClientError as exc:
            logger.info("Backend unreachable: %s", exc.message)
            return BackendStatus(reachable=False, healthy=False, config=None)

        healthy = isinstance(health, dict) and health.get("status") == "ok"
        return BackendStatus(
            reachable=True,
            healthy=healthy,
            config=config if isinstance(config, dict) else None,
        )

    def apply_status(self, status: BackendStatus) -> None:
        self.backend_healthy = status.healthy
        if not status.reachable:
            self.backend_config = None
            self.show_warning = True
            return

        self.backend_config = status.config
        self.show_warning = bool(
            status.healthy
            and status.config is not None
            and not status.config.get("openWeatherKeyPresent")
            and not status.config.get("exchangeRateKeyPresent")
        )

    # --- Derived UI state ---

    @property
    def status_label(self) -> str:
        if self.backend_healthy is None:
            return "Checking..."
        return "Online ●" if self.backend_healthy else "Offline ●"

    @property
    def feature_summary(self) -> str:
        """Configured features, e.g. ``Weather · Quotes``. Empty unless online."""
        if not (self.backend_healthy and self.backend_config):
            return ""
        flags = [
            ("openWeatherKeyPresent", "Weather"),
            ("exchangeRateKeyPresent", "Currency"),
            ("quoteApiUrlPresent", "Quotes"),
        ]
        return " · ".join(label for key, label in flags if self.backend_config.get(key))

    @property
    def banner(self) -> Banner | None:
        if not self.show_warning or self.backend_healthy is None:
            return None
        return NO_KEYS_BANNER if self.backend_healthy else OFFLINE_BANNER

    # --- Tabs ---

    def select_tab(self, tab: Tab | str) -> None:
        self.active_tab = Tab(tab)

    @property
    def active_widget(self) -> Widget:
        return self.widgets[self.active_tab]

    def render(self, tab: Tab | str | None = None) -> str:
        """Text rendering of the header, any banner, and one widget panel."""
        tab = Tab(tab) if tab is not None else self.active_tab
        status_line = f"Status: {self.status_label}"
        if self.feature_summary:
            status_line = f"{status_line}  {self.feature_summary}"
        tabs = "  ".join(
            f"[{TAB_LABELS[t]}]" if t is tab else TAB_LABELS[t] for t in Tab
        )

        lines = ["InfoHub", status_line, tabs, ""]
        if self.banner is not None:
            lines.extend([self.banner.title, self.banner.detail, ""])
        lines.append(self.widgets[tab].render())
        return "\n".join(lines)
