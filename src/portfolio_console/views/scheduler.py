"""
Recurring timers for view state.

A Scheduler hands out cancelable handles for callbacks that fire every
`interval` seconds. The asyncio implementation re-arms loop.call_later after
each run; tests substitute a manually driven scheduler.
"""

import asyncio
import logging
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """A scheduled recurring callback."""

    @property
    def cancelled(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_interval(
        self, interval: float, callback: Callable[[], None]
    ) -> TimerHandle: ...


class AsyncioIntervalHandle:
    """Runs callback every interval seconds on an event loop until cancelled."""

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float,
        callback: Callable[[], None],
    ) -> None:
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._cancelled = False
        self._timer: Optional[asyncio.TimerHandle] = None
        self._arm()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _arm(self) -> None:
        self._timer = self._loop.call_later(self._interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        finally:
            if not self._cancelled:
                self._arm()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def schedule_interval(
        self, interval: float, callback: Callable[[], None]
    ) -> AsyncioIntervalHandle:
        if interval <= 0:
            raise ValueError("interval must be positive")
        loop = self._loop or asyncio.get_running_loop()
        logger.debug("Scheduling recurring callback every %.2fs", interval)
        return AsyncioIntervalHandle(loop, interval, callback)
