"""
Rules - Win and draw detection over a board.

Pure functions with no side effects. The reducer uses them after every
placement and the AI uses check_winner for its one-move look-ahead.
"""

from __future__ import annotations

from .state import Board, Player, WINNING_LINES, BOARD_SIZE


def winning_line(board: Board) -> tuple[int, int, int] | None:
    """
    Get the first completed line, scanning WINNING_LINES in order.

    Returns:
        The index triple, or None if no line is complete.
    """
    for line in WINNING_LINES:
        a, b, c = line
        if board[a] is not None and board[a] == board[b] == board[c]:
            return line
    return None


def check_winner(board: Board) -> Player | None:
    """
    Check if a player has three in a row.

    Returns:
        The winning Player, or None if no winner yet.
    """
    line = winning_line(board)
    if line is None:
        return None
    return board[line[0]]


def is_full(board: Board) -> bool:
    return all(cell is not None for cell in board)


def check_draw(board: Board) -> bool:
    """
    A draw is a full board with no winner.

    The winner check runs first, so a full board with a completed
    line is never a draw.
    """
    if check_winner(board) is not None:
        return False
    return is_full(board)


def available_moves(board: Board) -> list[int]:
    """Indices of empty cells in ascending order."""
    return [i for i, cell in enumerate(board) if cell is None]


def is_valid_index(index: object) -> bool:
    # bool is an int subclass; True/False are not cell indices
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < BOARD_SIZE
