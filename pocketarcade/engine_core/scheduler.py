"""
Scheduler - Deterministic one-shot timers on a virtual clock.

The clock only moves when advance() is called, so tests can step time
exactly and a real-time host can feed it wall-clock deltas.

Usage:
    scheduler = Scheduler()
    handle = scheduler.schedule(500, on_timeout)
    scheduler.advance(200)   # nothing fires
    scheduler.cancel(handle) # on_timeout never runs
"""

from __future__ import annotations
from dataclasses import dataclass, field
import heapq
import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(order=True)
class TimerHandle:
    """A scheduled callback. Ordered by due time, then creation order."""
    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    label: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class Scheduler:
    """Virtual-time timer queue. Single-owner, not thread-safe."""

    def __init__(self):
        self._now_ms: float = 0.0
        self._queue: list[TimerHandle] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return sum(1 for h in self._queue if h.active)

    def schedule(self, delay_ms: float, callback: Callable[[], None], label: str = "") -> TimerHandle:
        """Run `callback` once, `delay_ms` from now."""
        if delay_ms < 0:
            raise ValueError("delay_ms must not be negative")
        handle = TimerHandle(
            due_ms=self._now_ms + delay_ms,
            seq=next(self._seq),
            callback=callback,
            label=label,
        )
        heapq.heappush(self._queue, handle)
        logger.debug("scheduled %s at %.1f ms", label or "timer", handle.due_ms)
        return handle

    def cancel(self, handle: TimerHandle | None) -> None:
        """Cancel a timer. Cancelling twice, or after it fired, is harmless."""
        if handle is not None and handle.active:
            handle.cancelled = True
            logger.debug("cancelled %s", handle.label or "timer")

    def cancel_all(self) -> None:
        for handle in self._queue:
            self.cancel(handle)
        self._queue.clear()

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward, firing due timers in order.

        Timers scheduled by a callback fire in the same call if they
        fall due before the new time. Returns how many timers fired.
        """
        if elapsed_ms < 0:
            raise ValueError("elapsed_ms must not be negative")
        target = self._now_ms + elapsed_ms
        fired = 0

        while self._queue and self._queue[0].due_ms <= target:
            handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now_ms = handle.due_ms
            handle.fired = True
            handle.callback()
            fired += 1

        self._now_ms = target
        return fired
