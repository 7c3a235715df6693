"""Move legality (shape rules + own-king safety) and check detection."""

from __future__ import annotations

import logging
from collections.abc import Callable

from chessroyale.core.board import Board
from chessroyale.core.enums import Color, PieceType
from chessroyale.core.piece import Piece
from chessroyale.core.types import Square, is_on_board

_LOGGER = logging.getLogger(__name__)

ShapeRule = Callable[[Board, Square, Square, Piece], bool]

# Pawns of each color advance toward the opponent's back rank.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _path_is_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Squares strictly between *from_sq* and *to_sq* are all empty.

    Only meaningful for straight or diagonal lines.
    """
    step_r = _sign(to_sq[0] - from_sq[0])
    step_c = _sign(to_sq[1] - from_sq[1])
    row, col = from_sq[0] + step_r, from_sq[1] + step_c
    while (row, col) != to_sq:
        if board[(row, col)] is not None:
            return False
        row += step_r
        col += step_c
    return True


# -- Shape rules -------------------------------------------------------------


def _pawn_rule(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    direction = PAWN_DIRECTION[piece.color]
    d_row = to_sq[0] - from_sq[0]
    d_col = to_sq[1] - from_sq[1]
    target = board[to_sq]

    if d_col == 0:
        if target is not None:
            return False
        if d_row == direction:
            return True
        if d_row == 2 * direction and from_sq[0] == PAWN_START_ROW[piece.color]:
            return board[(from_sq[0] + direction, from_sq[1])] is None
        return False

    # Diagonal step is a capture only.
    if abs(d_col) == 1 and d_row == direction:
        return target is not None and target.color != piece.color
    return False


def _rook_rule(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    if from_sq[0] != to_sq[0] and from_sq[1] != to_sq[1]:
        return False
    return _path_is_clear(board, from_sq, to_sq)


def _knight_rule(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    deltas = (abs(to_sq[0] - from_sq[0]), abs(to_sq[1] - from_sq[1]))
    return deltas in ((2, 1), (1, 2))


def _bishop_rule(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    if abs(to_sq[0] - from_sq[0]) != abs(to_sq[1] - from_sq[1]):
        return False
    return _path_is_clear(board, from_sq, to_sq)


def _queen_rule(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    return _rook_rule(board, from_sq, to_sq, piece) or _bishop_rule(
        board, from_sq, to_sq, piece
    )


def _king_rule(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    return abs(to_sq[0] - from_sq[0]) <= 1 and abs(to_sq[1] - from_sq[1]) <= 1


SHAPE_RULES: dict[PieceType, ShapeRule] = {
    PieceType.PAWN: _pawn_rule,
    PieceType.ROOK: _rook_rule,
    PieceType.KNIGHT: _knight_rule,
    PieceType.BISHOP: _bishop_rule,
    PieceType.QUEEN: _queen_rule,
    PieceType.KING: _king_rule,
}


# -- Public API ----------------------------------------------------------------


def is_legal(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    piece: Piece,
    enforce_king_safety: bool = True,
) -> bool:
    """Can *piece* standing on *from_sq* move to *to_sq*?

    With *enforce_king_safety* the move is also simulated on a scratch
    board and rejected if it leaves ``piece.color``'s king attacked.
    Never raises for off-board coordinates; the board is not modified.
    """
    if not is_on_board(*from_sq) or not is_on_board(*to_sq):
        return False
    if from_sq == to_sq:
        return False

    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False

    if not SHAPE_RULES[piece.piece_type](board, from_sq, to_sq, piece):
        return False

    if enforce_king_safety:
        scratch = board.copy()
        scratch[to_sq] = piece
        scratch[from_sq] = None
        if is_in_check(scratch, piece.color):
            return False
    return True


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by any opposing piece?

    A board without a king for *color* reports ``False``.
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        _LOGGER.warning("No %s king on board; treating as not in check", color)
        return False

    for sq, attacker in board.occupied():
        if attacker.color == color:
            continue
        if is_legal(board, sq, king_sq, attacker, enforce_king_safety=False):
            return True
    return False
