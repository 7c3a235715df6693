"""Application entry point: a headless self-play game on a virtual clock."""

from __future__ import annotations

import argparse
import logging
import random
import sys

from chessroyale.core.enums import Color
from chessroyale.core.notation import format_clock
from chessroyale.game.controller import GameController
from chessroyale.game.interfaces import TimeControl
from chessroyale.game.player import random_policy
from chessroyale.game.scheduler import ManualScheduler
from chessroyale.game.state import GameSnapshot

_LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessroyale",
        description="Play a random-vs-random game and print its history.",
    )
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--timed", action="store_true", help="enable the clocks")
    parser.add_argument(
        "--minutes",
        type=int,
        default=TimeControl.DEFAULT_SECONDS // 60,
        help="clock duration per side in minutes (default: %(default)s)",
    )
    parser.add_argument(
        "--max-plies",
        type=int,
        default=400,
        help="stop after this many half-moves (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run_self_play(
    seed: int | None = None,
    timed: bool = False,
    minutes: int = TimeControl.DEFAULT_SECONDS // 60,
    max_plies: int = 400,
) -> GameSnapshot:
    """Play white with :func:`random_policy` against the built-in AI.

    White "thinks" for one virtual second per move so timed games see
    both clocks run.
    """
    rng = random.Random(seed)
    scheduler = ManualScheduler()
    ctrl = GameController(
        ai_color=Color.BLACK,
        time_control=TimeControl(minutes * 60),
        timed_mode=timed,
        scheduler=scheduler,
        rng=rng,
    )
    ai = ctrl.ai
    assert ai is not None

    while not ctrl.state.is_game_over and ctrl.state.ply_count < max_plies:
        if ctrl.is_ai_turn:
            scheduler.advance(ai.delay)
            continue
        choice = random_policy(ctrl.state.board, Color.WHITE, rng)
        if choice is None:
            break
        scheduler.advance(1.0)
        ctrl.submit_move(*choice)

    return ctrl.current_state()


def _describe_result(snapshot: GameSnapshot) -> str:
    if not snapshot.is_game_over:
        return "Unfinished"
    if snapshot.winner is None:
        return f"Draw by {snapshot.end_reason.name.lower()}"
    return f"{str(snapshot.winner).capitalize()} wins by {snapshot.end_reason.name.lower()}"


def main(argv: list[str] | None = None) -> int:
    """Run one self-play game; return a process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.minutes <= 0 or args.max_plies <= 0:
        _LOGGER.error("--minutes and --max-plies must be positive")
        return 2

    snapshot = run_self_play(args.seed, args.timed, args.minutes, args.max_plies)
    for index, line in enumerate(snapshot.history_text):
        prefix = f"{index // 2 + 1}." if index % 2 == 0 else "   "
        print(f"{prefix:>5} {line}")
    print(_describe_result(snapshot))
    if snapshot.timed_mode_enabled:
        print(
            f"White {format_clock(snapshot.clocks[Color.WHITE])}"
            f"  Black {format_clock(snapshot.clocks[Color.BLACK])}"
        )
    return 0


if __name__ == "__main__":
    sys.exit(main())
