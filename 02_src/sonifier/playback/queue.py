"""Adaptive playback queue: one item per tick, paced by backlog depth."""

from collections import deque
from typing import Callable, Generic, Iterable, TypeVar

from ..logging_config import get_logger
from ..models import PlaybackState
from .rate import RateController
from .scheduler import IScheduler, ITimerHandle

logger = get_logger(__name__)

T = TypeVar("T")


class PlaybackQueue(Generic[T]):
    """FIFO of pending items drained by a single cooperative timer loop.

    IDLE: queue empty and no timer pending; the next enqueue wakes the loop.
    DRAINING: exactly one tick is scheduled. Each tick presents one item,
    recomputes the delay from the remaining depth and schedules the next tick.
    """

    def __init__(
        self,
        present: Callable[[T], None],
        scheduler: IScheduler,
        controller: RateController | None = None,
    ):
        self._present = present
        self._scheduler = scheduler
        self._controller = controller or RateController()
        self._items: deque[T] = deque()
        self._pending: ITimerHandle | None = None
        self._running = False
        self.state = PlaybackState.IDLE
        self.presented = 0

    @property
    def depth(self) -> int:
        return len(self._items)

    @property
    def delay_ms(self) -> float:
        return self._controller.delay_ms

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def start(self) -> None:
        """Begin draining; safe to call more than once."""
        self._running = True
        if self._items:
            self._wake()

    def stop(self) -> None:
        """Cancel the pending tick. Queued items are kept."""
        self._running = False
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.state = PlaybackState.IDLE

    def enqueue(self, items: Iterable[T]) -> int:
        """Append items in arrival order; returns the new depth."""
        self._items.extend(items)
        self._controller.update(len(self._items))
        if self._running and self._items:
            self._wake()
        return len(self._items)

    def _wake(self) -> None:
        if self._pending is None:
            self._schedule(self._controller.delay_ms)

    def _schedule(self, delay_ms: float) -> None:
        self.state = PlaybackState.DRAINING
        self._pending = self._scheduler.call_later(delay_ms, self._tick)

    def _tick(self) -> None:
        self._pending = None
        if not self._running:
            return

        if self._items:
            item = self._items.popleft()
            try:
                self._present(item)
            except Exception as e:
                logger.error("Presenter failed for queued item: %s", e, exc_info=True)
            self.presented += 1

        delay = self._controller.update(len(self._items))
        if self._items:
            self._schedule(delay)
        else:
            self.state = PlaybackState.IDLE
