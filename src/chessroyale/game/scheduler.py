"""Virtual timer source for deterministic, wall-clock-free games."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable

from chessroyale.game.interfaces import TimerHandle


class ManualScheduler:
    """Scheduler whose time only moves when :meth:`advance` is called.

    Timers due at the same instant fire in the order they were scheduled.
    Timers scheduled from inside a callback fire within the same
    :meth:`advance` call if they fall due before its end.
    """

    __slots__ = ("_now", "_queue", "_callbacks", "_ids")

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, TimerHandle]] = []
        self._callbacks: dict[TimerHandle, Callable[[], None]] = {}
        self._ids = itertools.count(1)

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        """Number of timers that have not fired or been cancelled."""
        return len(self._callbacks)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        handle = next(self._ids)
        self._callbacks[handle] = callback
        heapq.heappush(self._queue, (self._now + delay, handle))
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        self._callbacks.pop(handle, None)

    def advance(self, seconds: float) -> int:
        """Move virtual time forward, firing due timers. Returns fired count."""
        if seconds < 0:
            raise ValueError(f"seconds must be non-negative, got {seconds}")
        target = self._now + seconds
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, handle = heapq.heappop(self._queue)
            callback = self._callbacks.pop(handle, None)
            if callback is None:
                continue  # cancelled
            self._now = due
            callback()
            fired += 1
        self._now = target
        return fired
