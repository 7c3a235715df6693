"""Square type alias and coordinate helpers.

Board layout (row, col):
    row 0 = black's back rank (rank 8), row 7 = white's back rank (rank 1)
    col 0 = the "a" file, col 7 = the "h" file
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]  # (row, col)

BOARD_SIZE = 8
FILES = "abcdefgh"


def is_on_board(row: int, col: int) -> bool:
    """Whether (row, col) lies within the 8x8 grid."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (6, 4) → 'e2'."""
    row, col = sq
    return FILES[col] + str(BOARD_SIZE - row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return (BOARD_SIZE - int(name[1]), FILES.index(name[0]))


def all_squares() -> list[Square]:
    """Every square, rows then columns ascending."""
    return [(r, c) for r in range(BOARD_SIZE) for c in range(BOARD_SIZE)]
