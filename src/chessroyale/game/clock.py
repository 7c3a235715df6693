"""Per-color countdown clock driven by discrete one-second ticks."""

from __future__ import annotations

from chessroyale.core.enums import Color
from chessroyale.game.interfaces import IClock, TimeControl


class Clock(IClock):
    """Dual countdown clock tracking whole seconds for both players.

    The clock never reads wall time: each :meth:`tick` is one elapsed
    second, so tests and the controller decide when time passes.
    """

    __slots__ = ("_time_control", "_remaining")

    def __init__(self, time_control: TimeControl | None = None) -> None:
        self._time_control = time_control or TimeControl()
        self._remaining: dict[Color, int] = {}
        self.reset()

    # ── IClock implementation ────────────────────────────────────────────

    def reset(self) -> None:
        initial = self._time_control.initial_seconds
        self._remaining = {Color.WHITE: initial, Color.BLACK: initial}

    def tick(self, color: Color) -> int:
        """Decrement *color* by one second, stopping at zero."""
        if self._remaining[color] > 0:
            self._remaining[color] -= 1
        return self._remaining[color]

    def remaining(self, color: Color) -> int:
        return self._remaining[color]

    def is_flag_fallen(self, color: Color) -> bool:
        return self._remaining[color] <= 0

    # ── Extra helpers ────────────────────────────────────────────────────

    @property
    def time_control(self) -> TimeControl:
        return self._time_control

    @property
    def any_flag_fallen(self) -> bool:
        return any(self.is_flag_fallen(c) for c in Color)

    def set_remaining(self, color: Color, seconds: int) -> None:
        """Manually override remaining time (for testing / UI override)."""
        self._remaining[color] = seconds

    def snapshot(self) -> dict[Color, int]:
        """Copy of the remaining seconds per color."""
        return dict(self._remaining)
