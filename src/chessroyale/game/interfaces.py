"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these abstractions, not on concrete Player/Clock/timer implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum, auto
from typing import TYPE_CHECKING, Protocol, TypeAlias

from chessroyale.core.enums import Color

if TYPE_CHECKING:
    from chessroyale.core.board import Board
    from chessroyale.core.types import Square
    from chessroyale.game.state import GameSnapshot


# ── Game end reasons ─────────────────────────────────────────────────────────


class GameEndReason(IntEnum):
    """Why a finished game ended.

    A flag fall is reported with ``GameStatus.CHECKMATE`` for compatibility
    with the four-valued status; ``TIMEOUT`` disambiguates it.
    """

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    TIMEOUT = auto()


# ── Time control presets ─────────────────────────────────────────────────────


class TimeControl:
    """Immutable time-control definition.

    Args:
        initial_seconds: Starting time per player, whole seconds.
    """

    __slots__ = ("initial_seconds",)

    DEFAULT_SECONDS = 1800

    def __init__(self, initial_seconds: int = DEFAULT_SECONDS) -> None:
        if initial_seconds <= 0:
            raise ValueError(f"initial_seconds must be positive, got {initial_seconds}")
        self.initial_seconds = int(initial_seconds)

    @classmethod
    def blitz_5m(cls) -> TimeControl:
        return cls(300)

    @classmethod
    def rapid_10m(cls) -> TimeControl:
        return cls(600)

    @classmethod
    def classical_30m(cls) -> TimeControl:
        return cls(1800)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeControl):
            return NotImplemented
        return self.initial_seconds == other.initial_seconds

    def __hash__(self) -> int:
        return hash(self.initial_seconds)

    def __repr__(self) -> str:
        mins = self.initial_seconds / 60
        return f"TimeControl({mins:.0f}m)"


# ── Timers ───────────────────────────────────────────────────────────────────

TimerHandle: TypeAlias = int


class IScheduler(Protocol):
    """One-shot timer source the controller schedules its callbacks on.

    Callbacks run on the same thread as every other state transition.
    """

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run *callback* once after *delay* seconds; return a handle."""
        ...

    def cancel(self, handle: TimerHandle) -> None:
        """Drop a pending timer; unknown or fired handles are ignored."""
        ...


# ── Abstract interfaces ─────────────────────────────────────────────────────

MovePolicy: TypeAlias = "Callable[[Board, Color], tuple[Square, Square] | None]"


class IPlayer(ABC):
    """Interface for a game participant (human or AI)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...


class IClock(ABC):
    """Interface for a per-color countdown clock."""

    @abstractmethod
    def reset(self) -> None:
        """Put both colors back to the initial duration."""

    @abstractmethod
    def tick(self, color: Color) -> int:
        """Consume one second of *color*'s time; return what is left."""

    @abstractmethod
    def remaining(self, color: Color) -> int:
        """Seconds remaining for *color*."""

    @abstractmethod
    def is_flag_fallen(self, color: Color) -> bool:
        """Has *color* run out of time?"""


class IGameController(ABC):
    """Interface for the game coordinator seen by a presentation layer."""

    @abstractmethod
    def select_square(self, row: int, col: int) -> bool:
        """Select a piece or move the selected one. True if a move was made."""

    @abstractmethod
    def reset(self) -> None:
        """Start over from the standard position."""

    @abstractmethod
    def set_timed_mode(self, enabled: bool) -> None:
        """Toggle the countdown clocks; also resets the game."""

    @abstractmethod
    def current_state(self) -> GameSnapshot:
        """Read-only snapshot of everything a view needs."""

    @abstractmethod
    def tick(self) -> None:
        """Advance the side-to-move's clock by one second."""
