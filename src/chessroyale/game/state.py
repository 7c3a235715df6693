"""Game state machine — applies moves, tracks history, clocks and status."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessroyale.core.board import Board
from chessroyale.core.enums import Color, GameStatus
from chessroyale.core.move import Move
from chessroyale.core.move_generator import all_legal_moves, legal_moves
from chessroyale.core.move_validator import is_in_check
from chessroyale.core.notation import move_to_text
from chessroyale.core.piece import Piece
from chessroyale.core.rules import Rules
from chessroyale.core.types import Square, is_on_board
from chessroyale.game.clock import Clock
from chessroyale.game.interfaces import GameEndReason, TimeControl

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a game handed to the presentation layer."""

    board: Board
    current_player: Color
    status: GameStatus
    is_game_over: bool
    timed_mode_enabled: bool
    clocks: dict[Color, int]
    captured_pieces: dict[Color, tuple[Piece, ...]]
    move_counts: dict[Color, int]
    move_history: tuple[Move, ...]
    last_move: Move | None
    winner: Color | None
    end_reason: GameEndReason
    selection: Square | None = None
    selection_moves: tuple[Square, ...] = ()
    is_ai_thinking: bool = False

    @property
    def history_text(self) -> list[str]:
        return [move_to_text(m) for m in self.move_history]


@dataclass
class GameState:
    """The single mutable game value: board, turn, status, history, clocks.

    This is a pure data/logic class — no timers, no UI. Only
    :meth:`setup`, :meth:`apply_move` and :meth:`tick` mutate it.
    """

    time_control: TimeControl = field(default_factory=TimeControl)
    timed_mode_enabled: bool = False
    board: Board = field(init=False)
    current_player: Color = field(default=Color.WHITE, init=False)
    status: GameStatus = field(default=GameStatus.PLAYING, init=False)
    is_game_over: bool = field(default=False, init=False)
    move_history: list[Move] = field(default_factory=list, init=False)
    captured_pieces: dict[Color, list[Piece]] = field(init=False)
    move_counts: dict[Color, int] = field(init=False)
    last_move: Move | None = field(default=None, init=False)
    winner: Color | None = field(default=None, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    clock: Clock = field(init=False)

    def __post_init__(self) -> None:
        self.clock = Clock(self.time_control)
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, board: Board | None = None, to_move: Color = Color.WHITE) -> None:
        """Initialise (or reset) the game.

        *board* and *to_move* allow starting from a constructed position;
        by default the standard starting position with white to move.
        """
        self.board = board if board is not None else Board.initial()
        self.current_player = to_move
        self.status = GameStatus.PLAYING
        self.is_game_over = False
        self.move_history = []
        self.captured_pieces = {Color.WHITE: [], Color.BLACK: []}
        self.move_counts = {Color.WHITE: 0, Color.BLACK: 0}
        self.last_move = None
        self.winner = None
        self.end_reason = GameEndReason.NONE
        self.clock.reset()
        self.refresh_status()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, from_sq: Square, to_sq: Square) -> Move | None:
        """Apply a move for the side to move and return its record.

        The move is re-validated; anything that is not a legal move for
        ``current_player`` in a live game is ignored and ``None`` returned.
        """
        if self.is_game_over:
            return None
        if not is_on_board(*from_sq) or not is_on_board(*to_sq):
            return None
        piece = self.board[from_sq]
        if piece is None or piece.color != self.current_player:
            return None
        if to_sq not in legal_moves(self.board, *from_sq):
            return None

        mover = self.current_player
        captured = self.board.move_piece(from_sq, to_sq)
        if captured is not None:
            self.captured_pieces[mover].append(captured)

        move = Move(from_sq, to_sq, piece, captured)
        self.move_history.append(move)
        self.last_move = move
        self.move_counts[mover] += 1
        self.current_player = mover.opposite
        _LOGGER.debug("%s played %s", mover, move_to_text(move))

        self.status = (
            GameStatus.CHECK
            if is_in_check(self.board, self.current_player)
            else GameStatus.PLAYING
        )
        self.refresh_status()

        # A flag that fell before this move was applied outranks its outcome.
        if self.timed_mode_enabled and self.clock.any_flag_fallen:
            loser = mover if self.clock.is_flag_fallen(mover) else mover.opposite
            self._end_on_time(loser)

        return move

    def refresh_status(self) -> None:
        """Detect checkmate / stalemate for the side to move."""
        if self.is_game_over:
            return
        status = Rules.evaluate(self.board, self.current_player)
        self.status = status
        if status == GameStatus.CHECKMATE:
            self._finish(GameEndReason.CHECKMATE, self.current_player.opposite)
        elif status == GameStatus.STALEMATE:
            self._finish(GameEndReason.STALEMATE, None)

    # ── Clock ────────────────────────────────────────────────────────────

    @property
    def is_clock_running(self) -> bool:
        return self.timed_mode_enabled and self.status.is_live and not self.is_game_over

    @property
    def clocks(self) -> dict[Color, int]:
        return self.clock.snapshot()

    def tick(self) -> bool:
        """One elapsed second for the side to move.

        Returns True if this tick ended the game on time.
        """
        if not self.is_clock_running:
            return False
        if self.clock.tick(self.current_player) > 0:
            return False
        self._end_on_time(self.current_player)
        return True

    def flag_fall(self, color: Color) -> None:
        """Time ran out for *color*."""
        self.clock.set_remaining(color, 0)
        self._end_on_time(color)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def legal_moves(self, row: int, col: int) -> list[Square]:
        return legal_moves(self.board, row, col)

    def all_legal_moves(self) -> list[tuple[Square, Square]]:
        """Legal moves for the side to move."""
        return all_legal_moves(self.board, self.current_player)

    def snapshot(
        self,
        selection: Square | None = None,
        selection_moves: tuple[Square, ...] = (),
        is_ai_thinking: bool = False,
    ) -> GameSnapshot:
        return GameSnapshot(
            board=self.board.copy(),
            current_player=self.current_player,
            status=self.status,
            is_game_over=self.is_game_over,
            timed_mode_enabled=self.timed_mode_enabled,
            clocks=self.clocks,
            captured_pieces={c: tuple(p) for c, p in self.captured_pieces.items()},
            move_counts=dict(self.move_counts),
            move_history=tuple(self.move_history),
            last_move=self.last_move,
            winner=self.winner,
            end_reason=self.end_reason,
            selection=selection,
            selection_moves=selection_moves,
            is_ai_thinking=is_ai_thinking,
        )

    # ── Internal ─────────────────────────────────────────────────────────

    def _end_on_time(self, loser: Color) -> None:
        self.status = GameStatus.CHECKMATE
        self.is_game_over = True
        self.end_reason = GameEndReason.TIMEOUT
        self.winner = loser.opposite
        _LOGGER.info("%s ran out of time; %s wins", loser, self.winner)

    def _finish(self, reason: GameEndReason, winner: Color | None) -> None:
        self.is_game_over = True
        self.end_reason = reason
        self.winner = winner
        _LOGGER.info("Game over by %s (winner: %s)", reason.name.lower(), winner)
