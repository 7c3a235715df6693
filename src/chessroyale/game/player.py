"""Concrete player implementations and the random move policy."""

from __future__ import annotations

import logging
import random
from functools import partial
from typing import TYPE_CHECKING

from chessroyale.core.enums import Color
from chessroyale.core.move_generator import all_legal_moves
from chessroyale.game.interfaces import IPlayer, MovePolicy

if TYPE_CHECKING:
    from chessroyale.core.board import Board
    from chessroyale.core.types import Square

_LOGGER = logging.getLogger(__name__)


def random_policy(
    board: Board,
    color: Color,
    rng: random.Random | None = None,
) -> tuple[Square, Square] | None:
    """Pick one of *color*'s legal moves uniformly at random.

    Returns ``None`` when *color* has no legal move.
    """
    moves = all_legal_moves(board, color)
    if not moves:
        return None
    return (rng or random).choice(moves)


class HumanPlayer(IPlayer):
    """A human participant — moves come from square selection."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True


class AIPlayer(IPlayer):
    """A computer participant that picks moves through a policy.

    The policy is any ``(board, color) -> (from, to) | None`` callable;
    by default it is :func:`random_policy` bound to *rng*.

    Args:
        color: Side the AI plays.
        name: Display name.
        policy: Move-selection callable.
        rng: Random source for the default policy (seed it for tests).
        delay: Deliberation delay in seconds before the move is applied.
    """

    __slots__ = ("_color", "_name", "_policy", "_delay")

    DEFAULT_DELAY = 1.0

    def __init__(
        self,
        color: Color,
        name: str = "Computer",
        policy: MovePolicy | None = None,
        rng: random.Random | None = None,
        delay: float = DEFAULT_DELAY,
    ) -> None:
        if not isinstance(color, Color):
            raise ValueError(f"AI color must be a Color, got {color!r}")
        if delay < 0:
            raise ValueError(f"delay must be non-negative, got {delay}")
        self._color = color
        self._name = name
        self._policy = policy or partial(random_policy, rng=rng or random.Random())
        self._delay = delay

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def delay(self) -> float:
        return self._delay

    def choose_move(self, board: Board) -> tuple[Square, Square] | None:
        """Ask the policy for a move on *board*."""
        choice = self._policy(board, self._color)
        _LOGGER.debug("%s chose %s", self._name, choice)
        return choice
