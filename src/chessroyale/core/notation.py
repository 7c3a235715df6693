"""Human-readable formatting for moves, squares and clocks."""

from __future__ import annotations

from chessroyale.core.move import Move
from chessroyale.core.types import square_name


def move_to_text(move: Move) -> str:
    """History line for *move*, e.g. ``"♙ e2 → e4"`` or ``"♕ d1 → d7 x ♟"``."""
    text = f"{move.piece.symbol} {square_name(move.from_sq)} → {square_name(move.to_sq)}"
    if move.captured is not None:
        text += f" x {move.captured.symbol}"
    return text


def format_clock(seconds: float) -> str:
    """``MM:SS`` display for a remaining-time value; negatives show as 00:00."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"
