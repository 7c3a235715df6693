"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessroyale.core import Board, Color, all_legal_moves

    board = Board.initial()
    for from_sq, to_sq in all_legal_moves(board, Color.WHITE):
        print(from_sq, to_sq)
"""

from chessroyale.core.board import Board
from chessroyale.core.enums import Color, GameStatus, PieceType
from chessroyale.core.move import Move
from chessroyale.core.move_generator import (
    all_legal_moves,
    has_legal_move,
    is_legal_destination,
    legal_moves,
)
from chessroyale.core.move_validator import is_in_check, is_legal
from chessroyale.core.notation import format_clock, move_to_text
from chessroyale.core.piece import Piece
from chessroyale.core.rules import Rules
from chessroyale.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "Piece",
    "Rules",
    # Legality
    "all_legal_moves",
    "has_legal_move",
    "is_in_check",
    "is_legal",
    "is_legal_destination",
    "legal_moves",
    # Formatting
    "format_clock",
    "move_to_text",
]
