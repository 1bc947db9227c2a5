"""
backend/livescores/services/timer.py

Purpose:
    Fixed-cadence timer that invokes a named async callback. Reconfiguring the
    interval clears the job and recreates it.

Dependencies:
    - apscheduler
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from apscheduler.schedulers.asyncio import AsyncIOScheduler

logger = logging.getLogger("livescores.timer")

SCORE_UPDATE_JOB = "scoreUpdate"


class TimerService:
    def __init__(self, scheduler: AsyncIOScheduler | None = None, *, min_interval_seconds: int = 60) -> None:
        self._scheduler = scheduler or AsyncIOScheduler()
        self._min_interval = max(1, int(min_interval_seconds))

    @property
    def scheduler(self) -> AsyncIOScheduler:
        return self._scheduler

    def clamp(self, seconds: int | float | None) -> int:
        try:
            value = int(seconds or 0)
        except (TypeError, ValueError):
            value = 0
        return max(self._min_interval, value)

    def schedule(self, name: str, callback: Callable[[], Awaitable[None]], interval_seconds: int) -> int:
        """Create (or recreate) the named job; returns the effective interval."""
        interval = self.clamp(interval_seconds)
        self.clear(name)
        self._scheduler.add_job(
            callback,
            "interval",
            id=name,
            seconds=interval,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        logger.info("Timer %s scheduled every %ds", name, interval)
        return interval

    def clear(self, name: str) -> bool:
        if self._scheduler.get_job(name):
            self._scheduler.remove_job(name)
            return True
        return False

    def interval_of(self, name: str) -> int | None:
        job = self._scheduler.get_job(name)
        if job is None:
            return None
        return int(job.trigger.interval.total_seconds())

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()

    def shutdown(self) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
