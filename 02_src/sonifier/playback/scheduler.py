"""Timer scheduling for the playback loop."""

import asyncio
import heapq
import itertools
from typing import Callable, Protocol


class ITimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class IScheduler(Protocol):
    """Schedules one callback after a delay in milliseconds."""

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ITimerHandle:
        ...


class AsyncioScheduler:
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class ManualTimer:
    """Handle returned by ManualScheduler."""

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler; time only moves when advance() is called."""

    def __init__(self):
        self.now_ms = 0.0
        self._timers: list[tuple[float, int, ManualTimer]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(self.now_ms + max(0.0, delay_ms), callback)
        heapq.heappush(self._timers, (timer.due_ms, next(self._seq), timer))
        return timer

    @property
    def pending(self) -> int:
        """Number of timers that are scheduled and not cancelled."""
        return sum(1 for _, _, timer in self._timers if not timer.cancelled)

    def next_due(self) -> float | None:
        for due_ms, _, timer in sorted(self._timers):
            if not timer.cancelled:
                return due_ms
        return None

    def advance(self, delta_ms: float) -> int:
        """Move the clock forward, firing due timers in order. Returns fired count."""
        target = self.now_ms + delta_ms
        fired = 0
        while self._timers and self._timers[0][0] <= target:
            due_ms, _, timer = heapq.heappop(self._timers)
            if timer.cancelled:
                continue
            self.now_ms = due_ms
            timer.callback()
            fired += 1
        self.now_ms = target
        return fired

    def run_next(self) -> bool:
        """Jump to the next live timer and fire it."""
        due = self.next_due()
        if due is None:
            return False
        self.advance(due - self.now_ms)
        return True
