"""Game management layer — controller, players, clock, state machine.

Quick start::

    from chessroyale.game import GameController, ManualScheduler

    scheduler = ManualScheduler()
    ctrl = GameController(scheduler=scheduler)
    ctrl.select_square(6, 4)   # pick up the e2 pawn
    ctrl.select_square(4, 4)   # e2 → e4
    scheduler.advance(1.0)     # let the computer reply
"""

from chessroyale.game.clock import Clock
from chessroyale.game.controller import GameController, GameEvents
from chessroyale.game.interfaces import (
    GameEndReason,
    IClock,
    IGameController,
    IPlayer,
    IScheduler,
    MovePolicy,
    TimeControl,
)
from chessroyale.game.player import AIPlayer, HumanPlayer, random_policy
from chessroyale.game.scheduler import ManualScheduler
from chessroyale.game.state import GameSnapshot, GameState

__all__ = [
    # Interfaces
    "GameEndReason",
    "IClock",
    "IGameController",
    "IPlayer",
    "IScheduler",
    "MovePolicy",
    "TimeControl",
    # Concrete
    "AIPlayer",
    "Clock",
    "GameController",
    "GameEvents",
    "GameSnapshot",
    "GameState",
    "HumanPlayer",
    "ManualScheduler",
    "random_policy",
]
