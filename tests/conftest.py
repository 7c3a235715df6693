"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import random
from collections.abc import Callable, Iterator

import pytest

from chessroyale.core.board import Board
from chessroyale.core.enums import Color
from chessroyale.game.scheduler import ManualScheduler
from chessroyale.game.state import GameState


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt core application for event-loop tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


def _state_from_diagram(
    diagram: str, to_move: Color = Color.WHITE, timed: bool = False
) -> GameState:
    state = GameState(timed_mode_enabled=timed)
    state.setup(Board.from_diagram(diagram), to_move)
    return state


@pytest.fixture
def make_state() -> Callable[..., GameState]:
    """Factory: GameState set up on a constructed position."""
    return _state_from_diagram
