"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from chessroyale.core.board import Board
from chessroyale.core.enums import Color, GameStatus
from chessroyale.core.move_generator import has_legal_move
from chessroyale.core.move_validator import is_in_check


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_in_check(board, color)

    @staticmethod
    def is_checkmate(board: Board, color: Color) -> bool:
        if not is_in_check(board, color):
            return False
        return not has_legal_move(board, color)

    @staticmethod
    def is_stalemate(board: Board, color: Color) -> bool:
        if is_in_check(board, color):
            return False
        return not has_legal_move(board, color)

    @staticmethod
    def evaluate(board: Board, color: Color) -> GameStatus:
        """Status of *color* as the side to move."""
        in_check = is_in_check(board, color)
        if has_legal_move(board, color):
            return GameStatus.CHECK if in_check else GameStatus.PLAYING
        return GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE
