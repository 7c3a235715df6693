"""Qt bridge: drive the controller's timers from a Qt event loop."""

from __future__ import annotations

import itertools
from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from chessroyale.game.interfaces import TimerHandle


class QtScheduler:
    """Scheduler backed by single-shot ``QTimer`` objects.

    Callbacks run on the thread that owns the event loop, which keeps the
    controller's transitions serialised without locks.
    """

    __slots__ = ("_parent", "_timers", "_ids")

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        self._timers: dict[TimerHandle, QTimer] = {}
        self._ids = itertools.count(1)

    @property
    def pending(self) -> int:
        return len(self._timers)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        handle = next(self._ids)
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._fire(handle, callback))
        self._timers[handle] = timer
        timer.start(round(delay * 1000))
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.stop()
        timer.deleteLater()

    def shutdown(self) -> None:
        """Stop every pending timer."""
        for handle in list(self._timers):
            self.cancel(handle)

    def _fire(self, handle: TimerHandle, callback: Callable[[], None]) -> None:
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.deleteLater()
        callback()
