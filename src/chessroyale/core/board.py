"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from chessroyale.core.enums import Color, PieceType
from chessroyale.core.piece import Piece
from chessroyale.core.types import BOARD_SIZE, FILES, Square, is_on_board

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


class Board:
    """Mutable 8x8 grid of optional pieces, indexed by ``(row, col)``.

    Row 0 is black's back rank and row 7 is white's back rank.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        self._grid[row][col] = piece

    def get(self, row: int, col: int) -> Piece | None:
        """Piece at (row, col), or ``None`` when empty or off the board."""
        if not is_on_board(row, col):
            return None
        return self._grid[row][col]

    def is_empty(self, sq: Square) -> bool:
        row, col = sq
        return self._grid[row][col] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """All occupied squares, rows then columns ascending."""
        for row, rank in enumerate(self._grid):
            for col, piece in enumerate(rank):
                if piece is not None:
                    yield (row, col), piece

    def pieces(self, color: Color) -> list[Square]:
        """Squares occupied by *color*, rows then columns ascending."""
        return [sq for sq, piece in self.occupied() if piece.color == color]

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it is not on the board."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        return None

    # -- Mutation / copying -------------------------------------------------

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Relocate the piece on *from_sq* to *to_sq*; return what was there."""
        captured = self[to_sq]
        self[to_sq] = self[from_sq]
        self[from_sq] = None
        return captured

    def copy(self) -> Board:
        """Shallow copy: a new grid holding the same piece instances."""
        b = Board()
        b._grid = [rank.copy() for rank in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[(0, col)] = Piece(Color.BLACK, pt)
            b[(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(7, col)] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_diagram(cls, diagram: str) -> Board:
        """Build a board from eight lines of eight characters.

        The first line is row 0 (rank 8). ``.`` marks an empty square,
        letters follow :meth:`Piece.from_char`. Whitespace inside a line
        is ignored.
        """
        lines = [
            "".join(line.split()) for line in diagram.strip().splitlines()
        ]
        if len(lines) != BOARD_SIZE or any(len(ln) != BOARD_SIZE for ln in lines):
            raise ValueError("Board diagram must have 8 rows of 8 squares")
        b = cls()
        for row, line in enumerate(lines):
            for col, char in enumerate(line):
                if char != ".":
                    b[(row, col)] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row, rank in enumerate(self._grid):
            cells = [str(p) if p else "." for p in rank]
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  " + " ".join(FILES))
        return "\n".join(rows)
