"""
Tests for win and draw detection.

Tests:
- Every winning line is detected
- Draw only on a full board without a line
- Win takes priority over draw
"""

import random

import pytest

from ..engine_core.state import Player, WINNING_LINES, empty_board, board_to_string
from ..engine_core.rules import (
    check_winner, check_draw, winning_line, available_moves, is_full, is_valid_index,
)


class TestCheckWinner:
    """Tests for check_winner and winning_line."""

    @pytest.mark.parametrize("line", WINNING_LINES)
    def test_every_line_wins(self, line):
        """Three X on any line is a win for X."""
        cells = [None] * 9
        for i in line:
            cells[i] = Player.X
        board = tuple(cells)

        assert check_winner(board) == Player.X
        assert winning_line(board) == line

    def test_o_wins_column(self, board):
        b = board("OX.OX.O..")
        assert check_winner(b) == Player.O
        assert winning_line(b) == (0, 3, 6)

    def test_empty_board_has_no_winner(self):
        assert check_winner(empty_board()) is None
        assert winning_line(empty_board()) is None

    def test_mixed_line_is_not_a_win(self, board):
        assert check_winner(board("XXO......")) is None

    def test_two_in_a_row_is_not_a_win(self, board):
        assert check_winner(board("XX.OO....")) is None

    def test_check_winner_has_no_side_effects(self, board):
        b = board("XXX.OO...")
        before = board_to_string(b)
        check_winner(b)
        assert board_to_string(b) == before


class TestCheckDraw:
    """Tests for check_draw."""

    def test_full_board_without_line_is_draw(self, board):
        assert check_draw(board("XOXXOOOXX"))

    def test_full_board_with_line_is_not_draw(self, board):
        b = board("XOXOXOOXX")
        assert is_full(b)
        assert check_winner(b) == Player.X
        assert not check_draw(b)

    def test_partial_board_is_not_draw(self, board):
        assert not check_draw(board("XOXXOOOX."))


class TestHelpers:
    """Tests for move listing and index validation."""

    def test_available_moves_ascending(self, board):
        assert available_moves(board("X...O...X")) == [1, 2, 3, 5, 6, 7]

    @pytest.mark.parametrize("index", [0, 4, 8])
    def test_valid_indices(self, index):
        assert is_valid_index(index)

    @pytest.mark.parametrize("index", [-1, 9, 100, "4", 4.0, None, True])
    def test_invalid_indices(self, index):
        assert not is_valid_index(index)


class TestReachableBoards:
    """Properties over boards reached by legal alternating play."""

    def _lines_for(self, b, player):
        return [line for line in WINNING_LINES if all(b[i] == player for i in line)]

    def test_never_two_winners(self):
        """Play stops at the first win, so both players never hold a line."""
        rng = random.Random(1234)
        for _ in range(500):
            cells = [None] * 9
            player = Player.X
            while check_winner(tuple(cells)) is None and None in cells:
                cells[rng.choice(available_moves(tuple(cells)))] = player
                player = player.opposite()
            b = tuple(cells)

            x_lines = self._lines_for(b, Player.X)
            o_lines = self._lines_for(b, Player.O)
            assert not (x_lines and o_lines)

            if check_draw(b):
                assert check_winner(b) is None
                assert is_full(b)
