"""
Engine Core - Deterministic game state management.

The engine core:
1. Defines the board, players and GameSession value
2. Detects wins and draws
3. Applies actions via the reducer
"""

from .state import (
    Player,
    GameMode,
    GamePhase,
    Outcome,
    GameSession,
    StateSnapshot,
    Move,
    Board,
    WINNING_LINES,
    HUMAN_PLAYER,
    AI_PLAYER,
    empty_board,
    board_from_string,
    board_to_string,
)
from .action import Action, ActionType, ActionResult, RejectionReason
from .reducer import Reducer, apply_action
from .rules import check_winner, check_draw, winning_line, available_moves

__all__ = [
    "Player",
    "GameMode",
    "GamePhase",
    "Outcome",
    "GameSession",
    "StateSnapshot",
    "Move",
    "Board",
    "WINNING_LINES",
    "HUMAN_PLAYER",
    "AI_PLAYER",
    "empty_board",
    "board_from_string",
    "board_to_string",
    "Action",
    "ActionType",
    "ActionResult",
    "RejectionReason",
    "Reducer",
    "apply_action",
    "check_winner",
    "check_draw",
    "winning_line",
    "available_moves",
]
