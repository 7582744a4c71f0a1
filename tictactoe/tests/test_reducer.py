"""
Tests for the reducer (state transitions).

Tests:
- Action application
- Rejections leave the session untouched
- Phase transitions of the state machine
- Win before draw
"""

import pytest

from ..engine_core.state import GameSession, GameMode, GamePhase, Outcome, Player
from ..engine_core.action import Action, ActionType, RejectionReason
from ..engine_core.reducer import Reducer, apply_action


def play(session, *indices):
    """Apply human placements in order, asserting each is accepted."""
    for index in indices:
        result = apply_action(session, Action.place_mark(index))
        assert result.accepted, f"move {index} rejected: {result.reason}"
        session = result.session
    return session


def filled(session):
    return sum(1 for cell in session.board if cell is not None)


class TestSelectMode:
    """Tests for starting sessions."""

    def test_new_session_awaits_mode(self):
        session = GameSession.new(None)
        assert session.phase == GamePhase.AWAITING_MODE
        assert session.mode is None

    @pytest.mark.parametrize("mode", list(GameMode))
    def test_select_mode_starts_fresh(self, mode):
        result = apply_action(GameSession.new(None), Action.select_mode(mode))

        assert result.accepted
        session = result.session
        assert session.mode == mode
        assert session.phase == GamePhase.IN_PROGRESS
        assert session.current_player == Player.X
        assert session.turn_count == 0
        assert session.outcome == Outcome.IN_PROGRESS
        assert all(cell is None for cell in session.board)

    def test_select_mode_mid_game_replaces_session(self, pvp_session):
        session = play(pvp_session, 4, 0)
        result = apply_action(session, Action.select_mode(GameMode.PVAI))

        assert result.accepted
        assert result.session.mode == GameMode.PVAI
        assert result.session.turn_count == 0
        assert result.session.history == ()


class TestPlaceMark:
    """Tests for human placements."""

    def test_place_sets_cell_and_flips_player(self, pvp_session):
        result = apply_action(pvp_session, Action.place_mark(4))

        assert result.accepted
        assert result.session.board[4] == Player.X
        assert result.session.current_player == Player.O
        assert result.session.turn_count == 1
        assert result.session.phase == GamePhase.IN_PROGRESS

    def test_input_session_is_not_modified(self, pvp_session):
        apply_action(pvp_session, Action.place_mark(4))
        assert pvp_session.board[4] is None
        assert pvp_session.turn_count == 0

    def test_turn_count_matches_filled_cells(self, pvp_session):
        session = pvp_session
        for index in (4, 0, 8, 2, 6):
            session = play(session, index)
            assert session.turn_count == filled(session)

    def test_history_records_moves(self, pvp_session):
        session = play(pvp_session, 4, 0)

        assert [(m.player, m.index, m.turn) for m in session.history] == [
            (Player.X, 4, 1),
            (Player.O, 0, 2),
        ]
        assert not any(m.by_ai for m in session.history)


class TestRejections:
    """Tests that invalid placements are no-ops with a reason."""

    def test_occupied_cell(self, pvp_session):
        session = play(pvp_session, 4)
        result = apply_action(session, Action.place_mark(4))

        assert result.rejected
        assert result.reason == RejectionReason.CELL_OCCUPIED
        assert result.session is session
        assert result.session.board == session.board
        assert result.session.turn_count == 1
        assert result.session.current_player == Player.O

    @pytest.mark.parametrize("index", [-1, 9, 42, None, "3"])
    def test_invalid_index(self, pvp_session, index):
        result = apply_action(pvp_session, Action.place_mark(index))

        assert result.rejected
        assert result.reason == RejectionReason.INVALID_INDEX
        assert result.session is pvp_session

    def test_no_mode_selected(self):
        result = apply_action(GameSession.new(None), Action.place_mark(0))

        assert result.rejected
        assert result.reason == RejectionReason.NO_ACTIVE_GAME

    def test_game_over(self, pvp_session):
        # X: 0, 1, 2 wins the top row
        session = play(pvp_session, 0, 3, 1, 4, 2)
        assert session.phase == GamePhase.WON

        result = apply_action(session, Action.place_mark(8))
        assert result.rejected
        assert result.reason == RejectionReason.GAME_OVER

    def test_ai_busy(self, pvai_session):
        session = play(pvai_session, 0)
        assert session.phase == GamePhase.AI_THINKING

        result = apply_action(session, Action.place_mark(1))
        assert result.rejected
        assert result.reason == RejectionReason.AI_BUSY
        assert result.session.board[1] is None

    def test_ai_busy_checked_before_occupied(self, pvai_session):
        session = play(pvai_session, 0)
        result = apply_action(session, Action.place_mark(0))
        assert result.reason == RejectionReason.AI_BUSY

    def test_ai_move_without_ai_turn(self, pvai_session):
        result = apply_action(pvai_session, Action.ai_place_mark(4))
        assert result.rejected
        assert result.reason == RejectionReason.NOT_AI_TURN

    def test_ai_move_in_pvp(self, pvp_session):
        session = play(pvp_session, 0)
        result = apply_action(session, Action.ai_place_mark(4))
        assert result.reason == RejectionReason.NOT_AI_TURN

    def test_restart_without_mode(self):
        result = apply_action(GameSession.new(None), Action.restart())
        assert result.rejected
        assert result.reason == RejectionReason.NO_ACTIVE_GAME


class TestAITurn:
    """Tests for the AI_THINKING phase."""

    def test_human_move_in_pvai_hands_turn_to_ai(self, pvai_session):
        session = play(pvai_session, 0)

        assert session.phase == GamePhase.AI_THINKING
        assert session.is_ai_thinking
        assert session.current_player == Player.O
        assert session.snapshot().status_message == "AI is thinking..."

    def test_ai_move_returns_turn_to_human(self, pvai_session):
        session = play(pvai_session, 0)
        result = apply_action(session, Action.ai_place_mark(4))

        assert result.accepted
        assert result.session.board[4] == Player.O
        assert result.session.phase == GamePhase.IN_PROGRESS
        assert result.session.current_player == Player.X
        assert result.session.history[-1].by_ai

    def test_ai_win_ends_game(self, pvai_session):
        # X 0, O 4, X 8, O 6, X 1, then O takes 2 for the 2-4-6 diagonal
        session = play(pvai_session, 0)
        session = apply_action(session, Action.ai_place_mark(4)).session
        session = play(session, 8)
        session = apply_action(session, Action.ai_place_mark(6)).session
        session = play(session, 1)
        result = apply_action(session, Action.ai_place_mark(2))

        assert result.session.phase == GamePhase.WON
        assert result.session.winner == Player.O
        assert result.session.winning_line == (2, 4, 6)
        assert result.session.snapshot().status_message == "AI Wins!"


class TestTerminalStates:
    """Tests for win and draw detection in the reducer."""

    def test_win_on_last_cell_is_won_not_draw(self, pvp_session):
        session = play(pvp_session, 0, 1, 2, 3, 4, 5, 7, 6, 8)

        assert session.turn_count == 9
        assert session.phase == GamePhase.WON
        assert session.outcome == Outcome.WON
        assert session.winner == Player.X
        assert session.winning_line == (0, 4, 8)

    def test_full_board_without_line_is_draw(self, pvp_session):
        session = play(pvp_session, 0, 1, 2, 4, 3, 5, 7, 6, 8)

        assert session.phase == GamePhase.DRAW
        assert session.outcome == Outcome.DRAW
        assert session.winner is None
        assert session.winning_line is None
        assert session.snapshot().status_message == "It's a Draw!"

    def test_winner_keeps_current_player(self, pvp_session):
        session = play(pvp_session, 0, 3, 1, 4, 2)
        assert session.current_player == Player.X
        assert session.snapshot().status_message == "Player X Wins!"


class TestRestartAndChangeMode:
    """Tests for session replacement."""

    def test_restart_keeps_mode(self, pvai_session):
        session = play(pvai_session, 0)
        result = apply_action(session, Action.restart())

        assert result.accepted
        assert result.session.mode == GameMode.PVAI
        assert result.session.phase == GamePhase.IN_PROGRESS
        assert result.session.turn_count == 0
        assert result.session.current_player == Player.X

    def test_restart_after_game_over(self, pvp_session):
        session = play(pvp_session, 0, 3, 1, 4, 2)
        result = apply_action(session, Action.restart())
        assert result.session.phase == GamePhase.IN_PROGRESS

    def test_change_mode_returns_to_menu(self, pvp_session):
        session = play(pvp_session, 0)
        result = apply_action(session, Action.change_mode())

        assert result.accepted
        assert result.session.phase == GamePhase.AWAITING_MODE
        assert result.session.mode is None
        assert result.session.snapshot().mode_label == ""


class TestReducerDispatch:
    """Tests for the Reducer object itself."""

    def test_every_action_type_has_handler(self):
        reducer = Reducer()
        for action_type in ActionType:
            assert reducer._get_handler(action_type) is not None

    def test_accepted_result_lists_changes(self, pvp_session):
        result = Reducer().apply(pvp_session, Action.place_mark(4))
        assert result.changes
        assert "X placed at 4" in result.changes[0]
