"""
Action System - Actions, rejection reasons, and results.

Actions represent every user intent the presentation layer can send
(mode selection, cell click, restart, change mode) plus the AI's own
placement. All session changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import GameMode, GameSession


class ActionType(Enum):
    """Types of actions in the system."""
    SELECT_MODE = "select_mode"
    PLACE_MARK = "place_mark"  # Human click on a cell
    AI_PLACE_MARK = "ai_place_mark"  # AI move completing an AI turn
    RESTART = "restart"
    CHANGE_MODE = "change_mode"


class RejectionReason(Enum):
    """Why an action was a no-op."""
    CELL_OCCUPIED = "cell_occupied"
    GAME_OVER = "game_over"
    AI_BUSY = "ai_busy"
    INVALID_INDEX = "invalid_index"
    NO_ACTIVE_GAME = "no_active_game"  # No mode selected yet
    NOT_AI_TURN = "not_ai_turn"  # AI move with no AI turn pending


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to a session.

    Build actions through the factories below. Accepted placements
    end up in the session history as Moves.
    """
    action_type: ActionType
    index: Any = None  # Cell index for placements; validated by the reducer
    mode: GameMode | None = None

    @classmethod
    def select_mode(cls, mode: GameMode) -> Action:
        """Factory for mode selection (starts a fresh session)."""
        return cls(action_type=ActionType.SELECT_MODE, mode=mode)

    @classmethod
    def place_mark(cls, index: Any) -> Action:
        """Factory for a human cell click."""
        return cls(action_type=ActionType.PLACE_MARK, index=index)

    @classmethod
    def ai_place_mark(cls, index: int) -> Action:
        """Factory for the AI's chosen cell."""
        return cls(action_type=ActionType.AI_PLACE_MARK, index=index)

    @classmethod
    def restart(cls) -> Action:
        return cls(action_type=ActionType.RESTART)

    @classmethod
    def change_mode(cls) -> Action:
        return cls(action_type=ActionType.CHANGE_MODE)


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was accepted
    - The new session (accepted) or the unchanged one (rejected)
    - The rejection reason (rejected)
    - Human-readable changes (for logs)
    """
    accepted: bool
    session: GameSession
    reason: RejectionReason | None = None
    changes: list[str] = field(default_factory=list)

    @property
    def rejected(self) -> bool:
        return not self.accepted

    @classmethod
    def rejection(cls, session: GameSession, reason: RejectionReason) -> ActionResult:
        """Create a rejected result; the session is returned untouched."""
        return cls(accepted=False, session=session, reason=reason)

    @classmethod
    def accepted_with_session(
        cls,
        session: GameSession,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create an accepted result with the new session."""
        return cls(accepted=True, session=session, changes=changes or [])
