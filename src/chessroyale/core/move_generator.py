"""Legal move enumeration built on the move validator."""

from __future__ import annotations

from chessroyale.core.board import Board
from chessroyale.core.enums import Color
from chessroyale.core.move_validator import is_legal
from chessroyale.core.types import Square, all_squares, is_on_board

_ALL_SQUARES: tuple[Square, ...] = tuple(all_squares())


def legal_moves(board: Board, row: int, col: int) -> list[Square]:
    """All legal destinations for the piece on (row, col).

    Destinations are ordered rows then columns ascending. An empty or
    off-board origin yields an empty list.
    """
    piece = board.get(row, col)
    if piece is None:
        return []
    from_sq = (row, col)
    return [
        to_sq
        for to_sq in _ALL_SQUARES
        if is_legal(board, from_sq, to_sq, piece, enforce_king_safety=True)
    ]


def all_legal_moves(board: Board, color: Color) -> list[tuple[Square, Square]]:
    """Every ``(from, to)`` pair available to *color*, in board order."""
    moves: list[tuple[Square, Square]] = []
    for from_sq in board.pieces(color):
        moves.extend((from_sq, to_sq) for to_sq in legal_moves(board, *from_sq))
    return moves


def has_legal_move(board: Board, color: Color) -> bool:
    """Whether *color* has at least one legal move (stops at the first)."""
    for from_sq in board.pieces(color):
        piece = board[from_sq]
        assert piece is not None
        for to_sq in _ALL_SQUARES:
            if is_legal(board, from_sq, to_sq, piece, enforce_king_safety=True):
                return True
    return False


def is_legal_destination(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether *to_sq* is among the legal destinations of *from_sq*."""
    if not is_on_board(*from_sq):
        return False
    return to_sq in legal_moves(board, *from_sq)
