"""Tests for GameController — square selection, timers and the AI."""

import random

import pytest

from chessroyale.core.board import Board
from chessroyale.core.enums import Color, GameStatus
from chessroyale.core.move import Move
from chessroyale.core.types import Square, parse_square
from chessroyale.game.controller import GameController
from chessroyale.game.interfaces import GameEndReason, TimeControl
from chessroyale.game.scheduler import ManualScheduler
from chessroyale.game.state import GameState


class _NonCancellingScheduler(ManualScheduler):
    """Timers keep firing after cancel, like a timer that raced a reset."""

    def cancel(self, handle: int) -> None:
        pass


def _make_hh_controller(**kwargs: object) -> GameController:
    """Helper: human vs human game."""
    return GameController(ai_color=None, **kwargs)  # type: ignore[arg-type]


def _click(ctrl: GameController, frm: str, to: str) -> bool:
    ctrl.select_square(*parse_square(frm))
    return ctrl.select_square(*parse_square(to))


class TestSelectSquare:
    def test_select_own_piece(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.select_square(6, 4) is False
        snap = ctrl.current_state()
        assert snap.selection == (6, 4)
        assert snap.selection_moves == ((4, 4), (5, 4))

    def test_select_opponent_piece_ignored(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.select_square(1, 4)
        assert ctrl.selection is None

    def test_select_empty_ignored(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.select_square(4, 4)
        assert ctrl.selection is None

    def test_out_of_range_is_silent(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.select_square(-1, 9)
        assert ctrl.selection is None
        ctrl.select_square(6, 4)
        assert ctrl.select_square(12, 4) is False
        assert ctrl.selection is None
        assert ctrl.state.ply_count == 0

    def test_legal_target_applies_move(self) -> None:
        ctrl = _make_hh_controller()
        assert _click(ctrl, "e2", "e4")
        snap = ctrl.current_state()
        assert snap.current_player == Color.BLACK
        assert snap.selection is None
        assert snap.selection_moves == ()
        assert snap.last_move is not None
        assert snap.last_move.to_sq == parse_square("e4")

    def test_illegal_target_deselects(self) -> None:
        ctrl = _make_hh_controller()
        assert not _click(ctrl, "e2", "e5")
        assert ctrl.selection is None
        assert ctrl.state.current_player == Color.WHITE

    def test_second_own_piece_deselects(self) -> None:
        ctrl = _make_hh_controller()
        assert not _click(ctrl, "e2", "d2")
        assert ctrl.selection is None

    def test_moved_piece_selection_does_not_offer_old_square(self) -> None:
        ctrl = _make_hh_controller()
        _click(ctrl, "e2", "e4")
        _click(ctrl, "a7", "a6")
        ctrl.select_square(*parse_square("e4"))
        assert parse_square("e2") not in ctrl.current_state().selection_moves

    def test_ignored_after_game_over(self) -> None:
        ctrl = _make_hh_controller()
        for frm, to in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
            assert _click(ctrl, frm, to)
        ctrl.select_square(*parse_square("a2"))
        assert ctrl.selection is None


class TestSubmitMove:
    def test_conforming_caller(self) -> None:
        ctrl = _make_hh_controller()
        from_sq = parse_square("g1")
        for to_sq in ctrl.state.legal_moves(*from_sq):
            ctrl.reset()
            assert ctrl.submit_move(from_sq, to_sq)

    def test_defensive_guard(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.submit_move(parse_square("e2"), parse_square("e5"))
        assert not ctrl.submit_move(parse_square("e7"), parse_square("e5"))
        assert ctrl.state.ply_count == 0

    def test_events(self) -> None:
        ctrl = _make_hh_controller()
        moves: list[Move] = []
        statuses: list[GameStatus] = []
        results: list[tuple[GameStatus, Color | None]] = []
        ctrl.events.on_move.append(lambda m, st: moves.append(m))
        ctrl.events.on_status_changed.append(statuses.append)
        ctrl.events.on_game_over.append(lambda s, w: results.append((s, w)))
        for frm, to in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
            ctrl.submit_move(parse_square(frm), parse_square(to))
        assert len(moves) == 4
        assert statuses[-1] == GameStatus.CHECKMATE
        assert results == [(GameStatus.CHECKMATE, Color.BLACK)]

    def test_fools_mate_snapshot(self) -> None:
        ctrl = _make_hh_controller()
        for frm, to in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
            _click(ctrl, frm, to)
        snap = ctrl.current_state()
        assert snap.status == GameStatus.CHECKMATE
        assert snap.is_game_over
        assert snap.winner == Color.BLACK
        assert snap.move_counts == {Color.WHITE: 2, Color.BLACK: 2}
        assert ctrl.state.all_legal_moves() == []


class TestAIOpponent:
    def test_ai_replies_after_delay(self, scheduler: ManualScheduler) -> None:
        ctrl = GameController(scheduler=scheduler, rng=random.Random(5))
        assert _click(ctrl, "e2", "e4")
        assert ctrl.is_ai_thinking
        assert ctrl.current_state().is_ai_thinking
        scheduler.advance(0.5)
        assert ctrl.state.ply_count == 1
        scheduler.advance(0.5)
        assert ctrl.state.ply_count == 2
        assert ctrl.state.current_player == Color.WHITE
        assert not ctrl.is_ai_thinking
        assert ctrl.state.move_history[-1].piece.color == Color.BLACK

    def test_human_blocked_on_ai_turn(self, scheduler: ManualScheduler) -> None:
        ctrl = GameController(scheduler=scheduler)
        _click(ctrl, "e2", "e4")
        ctrl.select_square(*parse_square("e7"))
        assert ctrl.selection is None

    def test_ai_as_white_moves_first(self, scheduler: ManualScheduler) -> None:
        ctrl = GameController(ai_color=Color.WHITE, scheduler=scheduler)
        assert ctrl.is_ai_thinking
        scheduler.advance(1.0)
        assert ctrl.state.ply_count == 1
        assert ctrl.state.current_player == Color.BLACK

    def test_seeded_games_are_reproducible(self) -> None:
        histories = []
        for _ in range(2):
            scheduler = ManualScheduler()
            ctrl = GameController(scheduler=scheduler, rng=random.Random(99))
            _click(ctrl, "d2", "d4")
            scheduler.advance(1.0)
            histories.append([str(m) for m in ctrl.state.move_history])
        assert histories[0] == histories[1]

    def test_custom_policy(self, scheduler: ManualScheduler) -> None:
        def always_a_pawn(board: Board, color: Color) -> tuple[Square, Square]:
            return ((1, 0), (2, 0))

        ctrl = GameController(scheduler=scheduler, policy=always_a_pawn, ai_delay=0.2)
        _click(ctrl, "e2", "e4")
        scheduler.advance(0.2)
        assert str(ctrl.state.move_history[-1]) == "a7a6"

    def test_illegal_policy_choice_is_rejected(self, scheduler: ManualScheduler) -> None:
        ctrl = GameController(
            scheduler=scheduler, policy=lambda board, color: ((0, 0), (0, 1))
        )
        _click(ctrl, "e2", "e4")
        scheduler.advance(1.0)
        assert ctrl.state.ply_count == 1
        assert ctrl.state.current_player == Color.BLACK

    def test_policy_stays_on_own_pieces(self) -> None:
        scheduler = ManualScheduler()
        rng = random.Random(11)
        ctrl = GameController(scheduler=scheduler, rng=rng, ai_delay=0.0)
        for _ in range(15):
            if ctrl.state.is_game_over:
                break
            moves = ctrl.state.all_legal_moves()
            ctrl.submit_move(*rng.choice(moves))
            scheduler.advance(0.0)
        for index, move in enumerate(ctrl.state.move_history):
            expected = Color.WHITE if index % 2 == 0 else Color.BLACK
            assert move.piece.color == expected
            assert move.captured is None or move.captured.color != expected


class TestReset:
    def test_reset_restores_start(self) -> None:
        ctrl = _make_hh_controller()
        _click(ctrl, "e2", "e4")
        ctrl.select_square(1, 3)
        ctrl.reset()
        snap = ctrl.current_state()
        assert snap.board == Board.initial()
        assert snap.move_history == ()
        assert snap.selection is None
        assert snap.current_player == Color.WHITE
        assert snap.status == GameStatus.PLAYING
        assert snap.move_counts == {Color.WHITE: 0, Color.BLACK: 0}
        assert snap.captured_pieces == {Color.WHITE: (), Color.BLACK: ()}

    def test_reset_after_game_over(self) -> None:
        ctrl = _make_hh_controller()
        for frm, to in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
            _click(ctrl, frm, to)
        ctrl.reset()
        assert not ctrl.state.is_game_over
        assert ctrl.state.end_reason == GameEndReason.NONE

    def test_reset_cancels_pending_ai(self, scheduler: ManualScheduler) -> None:
        ctrl = GameController(scheduler=scheduler)
        _click(ctrl, "e2", "e4")
        assert scheduler.pending == 1
        ctrl.reset()
        assert not ctrl.is_ai_thinking
        assert scheduler.pending == 0
        scheduler.advance(5.0)
        assert ctrl.state.ply_count == 0

    def test_stale_ai_timer_is_dropped(self) -> None:
        scheduler = _NonCancellingScheduler()
        ctrl = GameController(scheduler=scheduler)
        _click(ctrl, "e2", "e4")
        epoch = ctrl.epoch
        ctrl.reset()
        assert ctrl.epoch == epoch + 1
        scheduler.advance(5.0)
        assert ctrl.state.ply_count == 0
        assert ctrl.state.board == Board.initial()

    def test_stale_timer_does_not_block_new_ai_move(self) -> None:
        scheduler = _NonCancellingScheduler()
        ctrl = GameController(scheduler=scheduler)
        _click(ctrl, "e2", "e4")
        scheduler.advance(0.5)
        ctrl.reset()
        _click(ctrl, "d2", "d4")
        scheduler.advance(0.5)  # stale timer fires here
        assert ctrl.state.ply_count == 1
        scheduler.advance(0.5)
        assert ctrl.state.ply_count == 2


class TestTimedMode:
    def test_set_timed_mode_resets(self) -> None:
        ctrl = _make_hh_controller()
        _click(ctrl, "e2", "e4")
        ctrl.set_timed_mode(True)
        snap = ctrl.current_state()
        assert snap.timed_mode_enabled
        assert snap.move_history == ()
        assert snap.clocks == {Color.WHITE: 1800, Color.BLACK: 1800}

    def test_clock_runs_for_side_to_move(self, scheduler: ManualScheduler) -> None:
        ctrl = _make_hh_controller(scheduler=scheduler, timed_mode=True)
        scheduler.advance(3.0)
        _click(ctrl, "e2", "e4")
        scheduler.advance(2.0)
        assert ctrl.current_state().clocks == {Color.WHITE: 1797, Color.BLACK: 1798}

    def test_clock_idle_when_untimed(self, scheduler: ManualScheduler) -> None:
        ctrl = _make_hh_controller(scheduler=scheduler)
        scheduler.advance(10.0)
        ctrl.tick()
        assert ctrl.current_state().clocks == {Color.WHITE: 1800, Color.BLACK: 1800}
        assert scheduler.pending == 0

    def test_disabling_stops_and_reinitialises(self, scheduler: ManualScheduler) -> None:
        ctrl = _make_hh_controller(scheduler=scheduler, timed_mode=True)
        scheduler.advance(4.0)
        ctrl.set_timed_mode(False)
        scheduler.advance(4.0)
        assert ctrl.current_state().clocks == {Color.WHITE: 1800, Color.BLACK: 1800}

    def test_timeout_ends_game(self, scheduler: ManualScheduler) -> None:
        ctrl = _make_hh_controller(
            scheduler=scheduler, timed_mode=True, time_control=TimeControl(3)
        )
        results: list[tuple[GameStatus, Color | None]] = []
        ctrl.events.on_game_over.append(lambda s, w: results.append((s, w)))
        ctrl.select_square(6, 4)
        scheduler.advance(3.0)
        snap = ctrl.current_state()
        assert snap.is_game_over
        assert snap.status == GameStatus.CHECKMATE
        assert snap.end_reason == GameEndReason.TIMEOUT
        assert snap.winner == Color.BLACK
        assert snap.clocks[Color.WHITE] == 0
        assert snap.selection is None
        assert results == [(GameStatus.CHECKMATE, Color.BLACK)]
        assert scheduler.pending == 0

    def test_direct_tick_to_zero(self) -> None:
        ctrl = _make_hh_controller(timed_mode=True)
        ctrl.state.clock.set_remaining(Color.WHITE, 1)
        ticks: list[tuple[Color, int]] = []
        ctrl.events.on_clock_tick.append(lambda c, r: ticks.append((c, r)))
        ctrl.tick()
        assert ticks == [(Color.WHITE, 0)]
        assert ctrl.state.is_game_over
        assert ctrl.state.winner == Color.BLACK

    def test_timeout_while_ai_deliberates(self, scheduler: ManualScheduler) -> None:
        ctrl = GameController(
            scheduler=scheduler,
            timed_mode=True,
            time_control=TimeControl(60),
            ai_delay=5.0,
        )
        _click(ctrl, "e2", "e4")
        ctrl.state.clock.set_remaining(Color.BLACK, 2)
        scheduler.advance(10.0)
        assert ctrl.state.is_game_over
        assert ctrl.state.end_reason == GameEndReason.TIMEOUT
        assert ctrl.state.winner == Color.WHITE
        assert ctrl.state.ply_count == 1

    def test_pending_timeout_overrides_ai_move(self) -> None:
        scheduler = ManualScheduler()
        ctrl = GameController(scheduler=scheduler, timed_mode=True)
        _click(ctrl, "e2", "e4")
        ctrl.state.clock.set_remaining(Color.WHITE, 0)  # expired off-turn
        scheduler.advance(1.0)
        assert ctrl.state.ply_count == 2
        assert ctrl.state.is_game_over
        assert ctrl.state.status == GameStatus.CHECKMATE
        assert ctrl.state.winner == Color.BLACK


class TestInterfaceTypes:
    def test_state_property(self) -> None:
        ctrl = _make_hh_controller()
        assert isinstance(ctrl.state, GameState)
        assert ctrl.ai is None

    def test_rejects_bad_ai_delay(self) -> None:
        with pytest.raises(ValueError):
            GameController(ai_delay=-1.0)
