"""Move value object (historical record of an applied move)."""

from __future__ import annotations

from dataclasses import dataclass

from chessroyale.core.piece import Piece
from chessroyale.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable record of a single applied move."""

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Piece | None = None

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"

    @property
    def is_capture(self) -> bool:
        return self.captured is not None
