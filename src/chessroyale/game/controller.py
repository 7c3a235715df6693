"""GameController — the single coordinator of a chess game.

Coordinates: square selection, GameState, the clock tick and the AI
deliberation timer. Emits events via simple callbacks so a view or a
test can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial

from chessroyale.core.enums import Color, GameStatus
from chessroyale.core.move import Move
from chessroyale.core.types import Square
from chessroyale.game.interfaces import (
    IGameController,
    IScheduler,
    MovePolicy,
    TimeControl,
    TimerHandle,
)
from chessroyale.game.player import AIPlayer
from chessroyale.game.scheduler import ManualScheduler
from chessroyale.game.state import GameSnapshot, GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, GameState], None]
GameOverCallback = Callable[[GameStatus, Color | None], None]  # status, winner
StatusCallback = Callable[[GameStatus], None]
ClockTickCallback = Callable[[Color, int], None]  # color, remaining

_TICK_SECONDS = 1.0


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_clock_tick: list[ClockTickCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the game state and serialises every transition on it.

    Transitions are triggered by :meth:`select_square`, the one-second
    clock timer and the AI delay timer; each runs to completion before
    the next. Both timers come from the injected *scheduler*. A reset
    bumps an epoch counter so that timer callbacks scheduled before it
    are discarded when they fire.

    Args:
        ai_color: Color the computer plays, or ``None`` for two humans.
        time_control: Clock duration (default 30 minutes).
        timed_mode: Start with the clocks enabled.
        scheduler: Timer source; defaults to a :class:`ManualScheduler`.
        rng: Random source for the default AI policy.
        ai_delay: Deliberation delay of the AI in seconds.
        policy: Replacement AI move policy.
    """

    __slots__ = (
        "_state",
        "_scheduler",
        "_ai",
        "_selection",
        "_selection_moves",
        "_epoch",
        "_ai_timer",
        "_clock_timer",
        "events",
    )

    def __init__(
        self,
        *,
        ai_color: Color | None = Color.BLACK,
        time_control: TimeControl | None = None,
        timed_mode: bool = False,
        scheduler: IScheduler | None = None,
        rng: random.Random | None = None,
        ai_delay: float = AIPlayer.DEFAULT_DELAY,
        policy: MovePolicy | None = None,
    ) -> None:
        self._state = GameState(
            time_control=time_control or TimeControl(),
            timed_mode_enabled=timed_mode,
        )
        self._scheduler: IScheduler = scheduler or ManualScheduler()
        self._ai: AIPlayer | None = None
        if ai_color is not None:
            self._ai = AIPlayer(ai_color, policy=policy, rng=rng, delay=ai_delay)
        self._selection: Square | None = None
        self._selection_moves: tuple[Square, ...] = ()
        self._epoch = 0
        self._ai_timer: TimerHandle | None = None
        self._clock_timer: TimerHandle | None = None
        self.events = GameEvents()
        self._arm_clock()
        self._prompt_ai()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def ai(self) -> AIPlayer | None:
        return self._ai

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def selection(self) -> Square | None:
        return self._selection

    @property
    def is_ai_thinking(self) -> bool:
        return self._ai_timer is not None

    @property
    def is_ai_turn(self) -> bool:
        return self._ai is not None and self._state.current_player == self._ai.color

    # ── IGameController impl ─────────────────────────────────────────────

    def select_square(self, row: int, col: int) -> bool:
        state = self._state
        if state.is_game_over or self.is_ai_turn:
            self._clear_selection()
            return False

        if self._selection is None:
            piece = state.board.get(row, col)
            if piece is not None and piece.color == state.current_player:
                self._selection = (row, col)
                self._selection_moves = tuple(state.legal_moves(row, col))
            return False

        from_sq = self._selection
        target = (row, col)
        is_move = target in self._selection_moves
        self._clear_selection()
        if not is_move:
            return False
        return self.submit_move(from_sq, target)

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Apply a move for the side to move. Returns True if applied."""
        move = self._state.apply_move(from_sq, to_sq)
        if move is None:
            return False

        self._emit_move(move)
        self._emit_status(self._state.status)
        if self._state.is_game_over:
            self._stop_timers()
            self._emit_game_over()
            return True

        self._prompt_ai()
        return True

    def reset(self) -> None:
        self._epoch += 1
        self._stop_timers()
        self._clear_selection()
        self._state.setup()
        _LOGGER.info(
            "New game (epoch %d, timed=%s)", self._epoch, self._state.timed_mode_enabled
        )
        self._emit_status(self._state.status)
        self._arm_clock()
        self._prompt_ai()

    def set_timed_mode(self, enabled: bool) -> None:
        self._state.timed_mode_enabled = enabled
        self.reset()

    def current_state(self) -> GameSnapshot:
        return self._state.snapshot(
            selection=self._selection,
            selection_moves=self._selection_moves,
            is_ai_thinking=self.is_ai_thinking,
        )

    def tick(self) -> None:
        state = self._state
        if not state.is_clock_running:
            return
        color = state.current_player
        timed_out = state.tick()
        self._emit_clock_tick(color, state.clock.remaining(color))
        if timed_out:
            self._stop_timers()
            self._clear_selection()
            self._emit_status(state.status)
            self._emit_game_over()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_ai(self) -> None:
        """Schedule the AI's move if it is the computer's turn."""
        ai = self._ai
        state = self._state
        if ai is None or not self.is_ai_turn or self._ai_timer is not None:
            return
        if state.is_game_over or not state.status.is_live:
            return
        self._ai_timer = self._scheduler.call_later(
            ai.delay, partial(self._on_ai_timer, self._epoch)
        )

    def _on_ai_timer(self, epoch: int) -> None:
        if epoch != self._epoch:
            _LOGGER.warning("Dropping AI move scheduled in epoch %d", epoch)
            return
        self._ai_timer = None
        ai = self._ai
        if ai is None or not self.is_ai_turn or self._state.is_game_over:
            return
        choice = ai.choose_move(self._state.board)
        if choice is None:
            return
        if not self.submit_move(*choice):
            _LOGGER.warning("AI policy returned an illegal move %s", choice)

    def _arm_clock(self) -> None:
        if self._clock_timer is not None or not self._state.is_clock_running:
            return
        self._clock_timer = self._scheduler.call_later(
            _TICK_SECONDS, partial(self._on_clock_timer, self._epoch)
        )

    def _on_clock_timer(self, epoch: int) -> None:
        if epoch != self._epoch:
            return
        self._clock_timer = None
        self.tick()
        self._arm_clock()

    def _stop_timers(self) -> None:
        if self._ai_timer is not None:
            self._scheduler.cancel(self._ai_timer)
            self._ai_timer = None
        if self._clock_timer is not None:
            self._scheduler.cancel(self._clock_timer)
            self._clock_timer = None

    def _clear_selection(self) -> None:
        self._selection = None
        self._selection_moves = ()

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self) -> None:
        for cb in self.events.on_game_over:
            cb(self._state.status, self._state.winner)

    def _emit_status(self, status: GameStatus) -> None:
        for cb in self.events.on_status_changed:
            cb(status)

    def _emit_clock_tick(self, color: Color, remaining: int) -> None:
        for cb in self.events.on_clock_tick:
            cb(color, remaining)
