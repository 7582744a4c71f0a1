"""
Reducer - Applies actions to a game session.

The reducer is the single point of session mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (session, action) -> ActionResult
- Validates before applying
- Invalid input is a rejected no-op, never an exception
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import GameSession, GamePhase, GameMode, Move, Player, AI_PLAYER
from .action import Action, ActionType, ActionResult, RejectionReason
from .rules import check_winner, check_draw, winning_line, is_valid_index

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game sessions.

    Stateless - all state is in GameSession.
    """

    def apply(self, session: GameSession, action: Action) -> ActionResult:
        """
        Apply an action to the session.

        Returns ActionResult with the new session or a rejection reason.
        """
        reason = self._validate_action(session, action)
        if reason is not None:
            logger.info(
                "Rejected %s (index=%r): %s",
                action.action_type.value, action.index, reason.value,
            )
            return ActionResult.rejection(session, reason)

        handler = self._get_handler(action.action_type)
        result = handler(session, action)
        for change in result.changes:
            logger.debug(change)
        return result

    def _validate_action(self, session: GameSession, action: Action) -> RejectionReason | None:
        """
        Validate that an action is legal in the current session.

        Returns the rejection reason if invalid, None if valid.
        """
        if action.action_type == ActionType.SELECT_MODE:
            # Mode selection always starts over
            return None

        if action.action_type == ActionType.CHANGE_MODE:
            return None

        if action.action_type == ActionType.RESTART:
            if session.mode is None:
                return RejectionReason.NO_ACTIVE_GAME
            return None

        # Placements
        if not is_valid_index(action.index):
            return RejectionReason.INVALID_INDEX

        if session.phase == GamePhase.AWAITING_MODE:
            return RejectionReason.NO_ACTIVE_GAME

        if session.is_terminal:
            return RejectionReason.GAME_OVER

        if action.action_type == ActionType.AI_PLACE_MARK:
            if session.phase != GamePhase.AI_THINKING:
                return RejectionReason.NOT_AI_TURN
        elif session.phase == GamePhase.AI_THINKING:
            # No human input until the AI move completes
            return RejectionReason.AI_BUSY

        if session.board[action.index] is not None:
            return RejectionReason.CELL_OCCUPIED

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SELECT_MODE: self._handle_select_mode,
            ActionType.PLACE_MARK: self._handle_place_mark,
            ActionType.AI_PLACE_MARK: self._handle_place_mark,
            ActionType.RESTART: self._handle_restart,
            ActionType.CHANGE_MODE: self._handle_change_mode,
        }
        return handlers[action_type]

    def _handle_select_mode(self, session: GameSession, action: Action) -> ActionResult:
        mode = action.mode
        return ActionResult.accepted_with_session(
            GameSession.new(mode),
            changes=[f"Started {mode.label} game"],
        )

    def _handle_restart(self, session: GameSession, action: Action) -> ActionResult:
        """Fresh board, same mode."""
        return ActionResult.accepted_with_session(
            GameSession.new(session.mode),
            changes=[f"Restarted {session.mode.label} game"],
        )

    def _handle_change_mode(self, session: GameSession, action: Action) -> ActionResult:
        """Back to mode selection; the current game is discarded."""
        return ActionResult.accepted_with_session(
            GameSession.new(None),
            changes=["Returned to mode selection"],
        )

    def _handle_place_mark(self, session: GameSession, action: Action) -> ActionResult:
        """
        Place the current player's mark, then run win and draw detection.

        Win is checked before draw, so a full board with a line is Won.
        """
        player = session.current_player
        index = action.index
        turn_count = session.turn_count + 1
        board = session.with_mark(index, player)
        move = Move(
            player=player,
            index=index,
            turn=turn_count,
            by_ai=action.action_type == ActionType.AI_PLACE_MARK,
        )

        updated = session._copy_with(
            board=board,
            turn_count=turn_count,
            history=session.history + (move,),
        )
        changes = [f"{player.value} placed at {index} (turn {turn_count})"]

        winner = check_winner(board)
        if winner is not None:
            updated = updated._copy_with(
                phase=GamePhase.WON,
                winner=winner,
                winning_line=winning_line(board),
            )
            changes.append(f"{winner.value} wins on line {updated.winning_line}")
            return ActionResult.accepted_with_session(updated, changes=changes)

        if check_draw(board):
            updated = updated._copy_with(phase=GamePhase.DRAW)
            changes.append("Board full, game is a draw")
            return ActionResult.accepted_with_session(updated, changes=changes)

        next_player = player.opposite()
        updated = updated._copy_with(
            current_player=next_player,
            phase=self._next_phase(session.mode, next_player),
        )
        return ActionResult.accepted_with_session(updated, changes=changes)

    def _next_phase(self, mode: GameMode | None, next_player: Player) -> GamePhase:
        if mode == GameMode.PVAI and next_player == AI_PLAYER:
            return GamePhase.AI_THINKING
        return GamePhase.IN_PROGRESS


def apply_action(session: GameSession, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(session, action)
