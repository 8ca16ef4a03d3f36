"""Tests for the client shell — status polling, banners, tabs and teardown."""

import asyncio

import pytest

from app.client.api import ClientError
from app.client.shell import (
    NO_KEYS_BANNER,
    OFFLINE_BANNER,
    BackendStatus,
    ClientShell,
    Tab,
)


@pytest.fixture
def shell(api):
    return ClientShell(api, poll_interval=10)


class TestStatus:

    def test_initial_state_is_checking(self, shell):
        assert shell.backend_healthy is None
        assert shell.status_label == "Checking..."
        assert shell.banner is None
        assert shell.feature_summary == ""

    @pytest.mark.asyncio
    async def test_online_with_some_keys(self, shell):
        shell.apply_status(await shell.check_backend())

        assert shell.backend_healthy is True
        assert shell.status_label == "Online ●"
        assert shell.feature_summary == "Weather · Quotes"
        assert shell.banner is None

    @pytest.mark.asyncio
    async def test_health_and_config_polled_together(self, shell, api):
        await shell.check_backend()

        api.health.assert_awaited_once()
        api.config.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_keys_banner(self, shell, api):
        api.config.return_value = {
            "openWeatherKeyPresent": False,
            "exchangeRateKeyPresent": False,
            "quoteApiUrlPresent": True,
        }

        shell.apply_status(await shell.check_backend())

        assert shell.status_label == "Online ●"
        assert shell.banner == NO_KEYS_BANNER
        assert shell.feature_summary == "Quotes"

    @pytest.mark.asyncio
    async def test_currency_key_alone_suppresses_banner(self, shell, api):
        api.config.return_value = {
            "openWeatherKeyPresent": False,
            "exchangeRateKeyPresent": True,
            "quoteApiUrlPresent": False,
        }

        shell.apply_status(await shell.check_backend())

        assert shell.banner is None

    @pytest.mark.asyncio
    async def test_unreachable_backend(self, shell, api):
        api.health.side_effect = ClientError("connection refused")

        shell.apply_status(await shell.check_backend())

        assert shell.backend_healthy is False
        assert shell.backend_config is None
        assert shell.status_label == "Offline ●"
        assert shell.banner == OFFLINE_BANNER
        assert shell.feature_summary == ""

    @pytest.mark.asyncio
    async def test_config_failure_counts_as_unreachable(self, shell, api):
        api.config.side_effect = ClientError("timed out")

        shell.apply_status(await shell.check_backend())

        assert shell.backend_healthy is False
        assert shell.banner == OFFLINE_BANNER

    @pytest.mark.asyncio
    async def test_non_ok_status_is_offline(self, shell, api):
        api.health.return_value = {"status": "degraded"}

        shell.apply_status(await shell.check_backend())

        assert shell.backend_healthy is False
        assert shell.status_label == "Offline ●"

    def test_recovers_after_outage(self, shell):
        shell.apply_status(BackendStatus(reachable=False, healthy=False, config=None))
        assert shell.banner == OFFLINE_BANNER

        shell.apply_status(BackendStatus(
            reachable=True,
            healthy=True,
            config={"openWeatherKeyPresent": True, "exchangeRateKeyPresent": True},
        ))
        assert shell.banner is None
        assert shell.status_label == "Online ●"


class TestLifecycle:

    @pytest.mark.asyncio
    async def test_mount_polls_and_auto_fetches(self, shell, api):
        await shell.mount()
        await asyncio.sleep(0.01)

        assert shell.mounted is True
        assert shell.backend_healthy is True
        api.weather.assert_awaited_once_with("London")
        api.quote.assert_awaited_once()
        api.currency.assert_not_awaited()

        await shell.unmount()
        assert shell.mounted is False

    @pytest.mark.asyncio
    async def test_polls_on_interval(self, api):
        shell = ClientShell(api, poll_interval=0.01)

        await shell.mount()
        await asyncio.sleep(0.05)
        await shell.unmount()

        assert api.health.await_count >= 3

    @pytest.mark.asyncio
    async def test_no_polling_after_unmount(self, api):
        shell = ClientShell(api, poll_interval=0.01)
        await shell.mount()
        await asyncio.sleep(0.02)
        await shell.unmount()
        count = api.health.await_count

        await asyncio.sleep(0.05)

        assert api.health.await_count == count

    @pytest.mark.asyncio
    async def test_late_poll_after_unmount_changes_nothing(self, shell, api):
        """An in-flight poll that resolves after teardown leaves state untouched."""
        release = asyncio.Event()
        started = asyncio.Event()

        async def slow_health():
            started.set()
            await release.wait()
            return {"status": "ok"}

        api.health.side_effect = slow_health

        await shell.mount()
        await started.wait()
        await shell.unmount()

        release.set()
        await asyncio.sleep(0.01)

        assert shell.backend_healthy is None
        assert shell.backend_config is None
        assert shell.status_label == "Checking..."


class TestTabs:

    def test_default_tab(self, shell):
        assert shell.active_tab is Tab.WEATHER
        assert shell.active_widget is shell.widgets[Tab.WEATHER]

    def test_select_tab_has_no_network_side_effects(self, shell, api):
        shell.select_tab(Tab.QUOTE)
        shell.select_tab("Currency")

        assert shell.active_tab is Tab.CURRENCY
        assert shell.active_widget is shell.widgets[Tab.CURRENCY]
        assert api.mock_calls == []

    def test_unknown_tab(self, shell):
        with pytest.raises(ValueError):
            shell.select_tab("Stocks")

    @pytest.mark.asyncio
    async def test_render(self, shell, api):
        api.config.return_value = {
            "openWeatherKeyPresent": False,
            "exchangeRateKeyPresent": False,
            "quoteApiUrlPresent": False,
        }
        shell.apply_status(await shell.check_backend())
        shell.select_tab(Tab.QUOTE)

        lines = shell.render().splitlines()

        assert lines[0] == "InfoHub"
        assert lines[1] == "Status: Online ●"
        assert lines[2] == "Weather  Currency  [Quotes]"
        assert NO_KEYS_BANNER.title in lines
        assert lines[-1] == "Daily Inspiration"
