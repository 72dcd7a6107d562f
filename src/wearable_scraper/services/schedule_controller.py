"""Recurring scrape schedule.

One asyncio task per armed schedule: wait the startup delay, fire, then fire
again every interval. Reconfiguring cancels the old task before arming a new
one. Overlap between firings is handled by the orchestrator, which drops a
trigger while a cycle is running.
"""

from __future__ import annotations

import asyncio
import contextlib
import math
from typing import Any, Awaitable, Callable, Optional

from ..domain.errors import InvalidInputError
from ..observability.logger import get_logger
from ..storage.base import CatalogStore
from ..utils.time import hours_to_seconds

logger = get_logger(__name__)

Trigger = Callable[[], Awaitable[Any]]


class ScheduleController:
    def __init__(self, trigger: Trigger, *, startup_delay_seconds: float = 5.0):
        self._trigger = trigger
        self._startup_delay = float(startup_delay_seconds)
        self._timer: Optional[asyncio.Task] = None
        self._interval_hours: float = 0.0
        self._firings: set[asyncio.Task] = set()

    @property
    def is_armed(self) -> bool:
        return self._timer is not None and not self._timer.done()

    @property
    def interval_hours(self) -> float:
        return self._interval_hours if self.is_armed else 0.0

    def configure(self, interval_hours: float) -> None:
        """Replace the current schedule; 0 disables automatic scraping."""
        if interval_hours is None or not math.isfinite(interval_hours) or interval_hours < 0:
            raise InvalidInputError("interval_hours must be a finite number >= 0", detail=str(interval_hours))

        self._cancel_timer()
        self._interval_hours = float(interval_hours)
        if self._interval_hours == 0:
            logger.info("schedule_disabled")
            return

        period = hours_to_seconds(self._interval_hours)
        self._timer = asyncio.get_running_loop().create_task(self._run(period))
        logger.info(
            "schedule_configured",
            interval_hours=self._interval_hours,
            startup_delay_seconds=self._startup_delay,
        )

    async def configure_from_settings(self, store: CatalogStore) -> None:
        """Arm from the stored interval; a corrupt stored value leaves the schedule disarmed."""
        settings = await store.get_settings()
        try:
            self.configure(settings.auto_scrape_interval_hours)
        except InvalidInputError as e:
            self._cancel_timer()
            self._interval_hours = 0.0
            logger.error("stored_interval_invalid", interval_hours=str(settings.auto_scrape_interval_hours), error=str(e))

    async def shutdown(self) -> None:
        """Disarm and wait for any firing still in flight."""
        timer = self._timer
        self._cancel_timer()
        self._interval_hours = 0.0
        if timer is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await timer
        if self._firings:
            await asyncio.gather(*self._firings, return_exceptions=True)

    def _cancel_timer(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _run(self, period_seconds: float) -> None:
        await asyncio.sleep(self._startup_delay)
        while True:
            self._fire()
            await asyncio.sleep(period_seconds)

    def _fire(self) -> None:
        task = asyncio.get_running_loop().create_task(self._trigger())
        self._firings.add(task)
        task.add_done_callback(self._on_fired)

    def _on_fired(self, task: asyncio.Task) -> None:
        self._firings.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("scheduled_cycle_failed", error=str(error))
