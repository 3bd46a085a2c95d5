"""
Tick schedulers.

A session owns exactly one scheduler. The scheduler calls a single
callback at a fixed period until stopped. Nothing here spawns threads:
the owner drives it by calling run_pending() from its own loop.
"""

import logging
from typing import Callable, Optional

import schedule

logger = logging.getLogger(__name__)


class TickScheduler:
    """
    Base class/interface for tick sources.

    Subclasses implement _arm() / _disarm() / run_pending().
    """

    def __init__(self):
        self._callback: Optional[Callable[[], object]] = None

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], object]) -> None:
        if self.is_running:
            raise RuntimeError("Scheduler is already running.")
        self._callback = callback
        self._arm()

    def stop(self) -> None:
        """Stop ticking. Safe to call more than once."""
        if not self.is_running:
            return
        self._disarm()
        self._callback = None

    def run_pending(self) -> None:
        raise NotImplementedError

    def _arm(self) -> None:
        pass

    def _disarm(self) -> None:
        pass


class ScheduleTickScheduler(TickScheduler):
    """
    Wall-clock ticks backed by a private schedule.Scheduler.

    Using a private instance (not the module-level default scheduler)
    keeps sessions from seeing each other's jobs.
    """

    def __init__(self, period_seconds: float):
        super().__init__()
        if period_seconds <= 0:
            raise ValueError(f"Tick period must be positive, got {period_seconds}")
        self.period_seconds = period_seconds
        self._scheduler = schedule.Scheduler()
        self._job: Optional[schedule.Job] = None

    def _arm(self) -> None:
        self._job = self._scheduler.every(self.period_seconds).seconds.do(self._fire)
        logger.debug(f"Tick job scheduled every {self.period_seconds}s")

    def _disarm(self) -> None:
        if self._job is not None:
            self._scheduler.cancel_job(self._job)
            self._job = None
        logger.debug("Tick job cancelled")

    def _fire(self) -> None:
        if self._callback is not None:
            self._callback()

    def run_pending(self) -> None:
        self._scheduler.run_pending()

    @property
    def job(self) -> Optional[schedule.Job]:
        return self._job


class ManualTickScheduler(TickScheduler):
    """
    Deterministic scheduler: every run_pending() (or fire()) is one tick.
    """

    def run_pending(self) -> None:
        self.fire()

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            # The callback may stop us mid-way (game over)
            if self._callback is None:
                return
            self._callback()
