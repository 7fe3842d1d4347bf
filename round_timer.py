# round_timer.py

import logging
from typing import Callable, Optional

from scheduler import Scheduler
from shared import TICK_INTERVAL_SEC

logger = logging.getLogger(__name__)


class RoundTimer:
    """
    A one-second countdown for a single round.

    Every tick decrements the remaining count by one and reports it through
    `on_tick`. The tick that reaches zero is followed by exactly one
    `on_expire`, after which the timer is stopped. `stop()` may be called
    at any time and any number of times.
    """

    def __init__(self, scheduler: Scheduler, interval: float = TICK_INTERVAL_SEC):
        self.scheduler = scheduler
        self.interval = interval
        self.remaining = 0
        self.running = False
        self.expired = False

        self._on_tick: Optional[Callable[[int], None]] = None
        self._on_expire: Optional[Callable[[], None]] = None
        self._pending = None
        self._generation = 0

    def start(self, duration_seconds: int, on_tick: Callable[[int], None], on_expire: Callable[[], None]):
        """(Re)starts the countdown from `duration_seconds`, dropping any countdown in progress."""
        if duration_seconds <= 0:
            raise ValueError(f"Timer duration must be positive, got {duration_seconds}")

        self.stop()
        self._generation += 1
        self.remaining = duration_seconds
        self.running = True
        self.expired = False
        self._on_tick = on_tick
        self._on_expire = on_expire
        logger.debug("Timer started for %ss", duration_seconds)
        self._schedule_next()

    def stop(self):
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        if self.running:
            logger.debug("Timer stopped with %ss remaining", self.remaining)
        self.running = False

    def _schedule_next(self):
        self._pending = self.scheduler.call_later(self.interval, self._tick)

    def _tick(self):
        self._pending = None
        if not self.running:
            return

        self.remaining -= 1
        generation = self._generation
        on_expire = self._on_expire
        self._on_tick(self.remaining)

        # on_tick may have stopped (or restarted) us.
        if not self.running or self._generation != generation:
            return

        if self.remaining <= 0:
            self.running = False
            self.expired = True
            logger.debug("Timer expired")
            on_expire()
        else:
            self._schedule_next()
