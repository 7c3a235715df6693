"""Tests for Player implementations and the random policy."""

import random

import pytest

from chessroyale.core.board import Board
from chessroyale.core.enums import Color
from chessroyale.core.move_generator import all_legal_moves
from chessroyale.game.player import AIPlayer, HumanPlayer, random_policy


class TestHumanPlayer:
    def test_properties(self) -> None:
        p = HumanPlayer(Color.WHITE, "Alice")
        assert p.color == Color.WHITE
        assert p.name == "Alice"
        assert p.is_human is True

    def test_default_name(self) -> None:
        p = HumanPlayer(Color.BLACK)
        assert "black" in p.name.lower()


class TestRandomPolicy:
    def test_returns_legal_move(self, rng: random.Random) -> None:
        board = Board.initial()
        choice = random_policy(board, Color.BLACK, rng)
        assert choice in all_legal_moves(board, Color.BLACK)

    def test_reproducible_with_seed(self) -> None:
        board = Board.initial()
        first = [random_policy(board, Color.WHITE, random.Random(7)) for _ in range(3)]
        assert len(set(first)) == 1

    def test_none_without_moves(self, rng: random.Random) -> None:
        board = Board.from_diagram(
            """
            .......k
            ........
            .....KQ.
            ........
            ........
            ........
            ........
            ........
            """
        )
        assert random_policy(board, Color.BLACK, rng) is None

    def test_covers_every_move(self) -> None:
        board = Board.initial()
        rng = random.Random(0)
        seen = {random_policy(board, Color.WHITE, rng) for _ in range(400)}
        assert seen == set(all_legal_moves(board, Color.WHITE))

    @pytest.mark.parametrize("seed", range(3))
    def test_only_own_pieces_never_own_targets(self, seed: int) -> None:
        rng = random.Random(seed)
        board = Board.initial()
        color = Color.WHITE
        for _ in range(30):
            choice = random_policy(board, color, rng)
            if choice is None:
                break
            from_sq, to_sq = choice
            mover = board[from_sq]
            target = board[to_sq]
            assert mover is not None and mover.color == color
            assert target is None or target.color != color
            board.move_piece(from_sq, to_sq)
            color = color.opposite


class TestAIPlayer:
    def test_properties(self) -> None:
        p = AIPlayer(Color.BLACK, "Royale AI")
        assert p.color == Color.BLACK
        assert p.name == "Royale AI"
        assert p.is_human is False
        assert p.delay == AIPlayer.DEFAULT_DELAY

    def test_custom_policy(self) -> None:
        calls: list[Color] = []

        def first_move(board: Board, color: Color):
            calls.append(color)
            return all_legal_moves(board, color)[0]

        p = AIPlayer(Color.WHITE, policy=first_move)
        assert p.choose_move(Board.initial()) == ((6, 0), (4, 0))
        assert calls == [Color.WHITE]

    def test_seeded_rng(self) -> None:
        a = AIPlayer(Color.WHITE, rng=random.Random(3))
        b = AIPlayer(Color.WHITE, rng=random.Random(3))
        board = Board.initial()
        assert a.choose_move(board) == b.choose_move(board)

    def test_rejects_bad_arguments(self) -> None:
        with pytest.raises(ValueError, match="Color"):
            AIPlayer("black")  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="delay"):
            AIPlayer(Color.BLACK, delay=-0.5)
