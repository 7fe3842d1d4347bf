# scheduler.py

"""
Scheduling port used by the round timer.

The timer never sleeps or reads a clock itself; it asks a Scheduler to run
a callback later. The game runs on AsyncioScheduler, tests and simulations
drive ManualScheduler by hand.
"""

import asyncio
import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class ScheduledCall:
    """Handle for a pending callback. Cancelling twice is harmless."""

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class Scheduler(ABC):
    """An abstract source of delayed callbacks."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]):
        """Runs `callback` after `delay` seconds. Returns a handle with a `cancel()` method."""
        pass


class ManualScheduler(Scheduler):
    """
    A simulated clock. Nothing fires until `advance` moves time forward,
    then due callbacks run in order of due time (ties in scheduling order).
    """

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(self.now + delay, callback)
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Moves the clock forward, firing everything that falls due. Returns the number fired."""
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds}s)")

        target = self.now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = due
            call.callback()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, limit: int = 10_000) -> int:
        """Fires pending callbacks until the queue drains. `limit` guards against endless rescheduling."""
        fired = 0
        while self.pending:
            if fired >= limit:
                raise RuntimeError(f"Scheduler still busy after {limit} callbacks")
            next_due = min(call.due for _, _, call in self._queue if not call.cancelled)
            fired += self.advance(next_due - self.now)
        return fired


class AsyncioScheduler(Scheduler):
    """Schedules on the running asyncio loop, so callbacks share the thread that handles input."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
