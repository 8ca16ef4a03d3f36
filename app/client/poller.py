"""
Cancellable periodic background task.

``PeriodicTask`` runs a coroutine once immediately and then every
``interval`` seconds measured from the start time, so slow runs do not
push the schedule back. Stopping cancels any in-flight run, and results
that still arrive afterwards are dropped, so a stopped task never calls
``on_result`` again.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PeriodicTask(Generic[T]):
    """Start/stop handle around an asyncio polling loop."""

    def __init__(
        self,
        func: Callable[[], Awaitable[T]],
        interval: float,
        on_result: Callable[[T], None] | None = None,
        *,
        name: str = "periodic-task",
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._func = func
        self._interval = interval
        self._on_result = on_result
        self._name = name
        self._task: asyncio.Task | None = None
        self._running = False
        self.runs = 0

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Schedule the loop on the running event loop. No-op if already started."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.get_running_loop().create_task(self._loop(), name=self._name)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        self._running = False
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def run_once(self) -> None:
        result = await self._func()
        if not self._running:
            # stopped while the call was in flight
            return
        self.runs += 1
        if self._on_result is not None:
            self._on_result(result)

    async def _loop(self) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time()
        while self._running:
            try:
                await self.run_once()
            except Exception:
                logger.exception("%s run failed", self._name)
            # fixed cadence from the start time; an overrun starts the next run at once
            next_run = max(next_run + self._interval, loop.time())
            await asyncio.sleep(next_run - loop.time())
