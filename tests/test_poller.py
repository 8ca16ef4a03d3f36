"""Tests for the cancellable periodic task."""

import asyncio

import pytest

from app.client.poller import PeriodicTask


class TestPeriodicTask:

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            PeriodicTask(lambda: None, 0)

    @pytest.mark.asyncio
    async def test_runs_immediately_then_on_interval(self):
        results = []
        counter = iter(range(100))

        async def tick():
            return next(counter)

        task = PeriodicTask(tick, 0.01, results.append)
        task.start()
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert results == [0]

        await asyncio.sleep(0.06)
        await task.stop()

        assert len(results) >= 3
        assert results == list(range(len(results)))

    @pytest.mark.asyncio
    async def test_slow_runs_keep_fixed_cadence(self):
        """Run time is not added to the interval between starts."""
        loop = asyncio.get_running_loop()
        starts = []

        async def slow():
            starts.append(loop.time())
            await asyncio.sleep(0.06)

        task = PeriodicTask(slow, 0.1)
        task.start()
        await asyncio.sleep(0.35)
        await task.stop()

        gaps = [b - a for a, b in zip(starts, starts[1:])]
        assert len(starts) >= 3
        assert all(gap < 0.14 for gap in gaps)

    @pytest.mark.asyncio
    async def test_overrun_starts_next_run_immediately(self):
        loop = asyncio.get_running_loop()
        starts = []

        async def overrun():
            starts.append(loop.time())
            await asyncio.sleep(0.05)

        task = PeriodicTask(overrun, 0.02)
        task.start()
        await asyncio.sleep(0.18)
        await task.stop()

        gaps = [b - a for a, b in zip(starts, starts[1:])]
        assert len(starts) >= 2
        # no back-to-back catch-up runs for the missed ticks
        assert all(0.04 <= gap < 0.09 for gap in gaps)

    @pytest.mark.asyncio
    async def test_no_results_after_stop(self):
        results = []

        async def tick():
            return "tick"

        task = PeriodicTask(tick, 0.01, results.append)
        task.start()
        await asyncio.sleep(0.03)
        await task.stop()
        seen = len(results)

        await asyncio.sleep(0.05)

        assert len(results) == seen
        assert task.running is False

    @pytest.mark.asyncio
    async def test_in_flight_result_after_stop_is_ignored(self):
        """A call that resolves after stop() never reaches on_result."""
        release = asyncio.Event()
        started = asyncio.Event()
        results = []

        async def slow():
            started.set()
            await release.wait()
            return "late"

        task = PeriodicTask(slow, 10, results.append)
        task.start()
        await started.wait()

        await task.stop()
        release.set()
        await asyncio.sleep(0.01)

        assert results == []
        assert task.runs == 0

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_the_loop(self):
        results = []
        calls = 0

        async def flaky():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise RuntimeError("first call fails")
            return calls

        task = PeriodicTask(flaky, 0.01, results.append)
        task.start()
        await asyncio.sleep(0.05)
        await task.stop()

        assert results
        assert results[0] == 2

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        calls = 0

        async def tick():
            nonlocal calls
            calls += 1

        task = PeriodicTask(tick, 10)
        task.start()
        task.start()
        await asyncio.sleep(0.01)
        await task.stop()

        assert calls == 1

    @pytest.mark.asyncio
    async def test_stop_before_start(self):
        task = PeriodicTask(lambda: None, 1)
        await task.stop()
        assert task.running is False
