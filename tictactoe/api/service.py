"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine commands
2. Manages sessions
3. Plays the AI reply unless the client defers it
4. Formats responses for the client

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from ..engine_core.state import GameMode, StateSnapshot
from ..session import SessionManager, Session, MoveOutcome
from .schemas import (
    GameModeValue,
    PhaseValue,
    OutcomeValue,
    RejectionReasonValue,
    ErrorCode,
    GameStateInfo,
    SessionResponse,
    MoveResponse,
    ErrorResponse,
)

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session = service.create_session(GameModeValue.PVAI)
        response = service.click_cell(session.session_id, 4)
        # response.ai_move holds the AI's reply
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, mode: GameModeValue | None = None) -> SessionResponse:
        """
        Create a new game session, optionally starting a game.

        Idle sessions past SESSION_MAX_AGE_SECONDS are dropped first.
        """
        removed = self.session_manager.cleanup_stale_sessions()
        if removed:
            logger.info("Removed %d stale sessions", removed)
        session = self.session_manager.create_session(
            mode=GameMode(mode.value) if mode else None,
        )
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_active_sessions()

    def select_mode(self, session_id: str, mode: GameModeValue) -> MoveResponse | ErrorResponse:
        """Start a fresh game in `mode`."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.touch()
        outcome = session.engine.start_session(GameMode(mode.value))
        return self._outcome_to_response(session_id, outcome)

    def click_cell(
        self,
        session_id: str,
        index: int,
        defer_ai: bool = False,
    ) -> MoveResponse | ErrorResponse:
        """
        Apply a human move.

        If the move hands the turn to the AI and defer_ai is false, the AI
        plays straight away and its cell is reported in `ai_move`.
        defer_ai takes precedence over the engine's auto_play_ai.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.touch()

        outcome = session.engine.apply_move(index, auto_play_ai=not defer_ai)
        return self._outcome_to_response(session_id, outcome)

    def play_ai_turn(self, session_id: str) -> MoveResponse | ErrorResponse:
        """Play a deferred AI move."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.touch()
        return self._outcome_to_response(session_id, session.engine.play_ai_turn())

    def restart(self, session_id: str) -> MoveResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.touch()
        return self._outcome_to_response(session_id, session.engine.reset_session())

    def change_mode(self, session_id: str) -> MoveResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.touch()
        return self._outcome_to_response(session_id, session.engine.change_mode())

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _not_found(self, session_id: str) -> ErrorResponse:
        logger.info("Unknown session %s", session_id)
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        return SessionResponse(
            session_id=session.session_id,
            created_at=session.created_at,
            state=snapshot_to_info(session.engine.snapshot()),
        )

    def _outcome_to_response(self, session_id: str, outcome: MoveOutcome) -> MoveResponse:
        return MoveResponse(
            session_id=session_id,
            accepted=outcome.accepted,
            rejection_reason=(
                RejectionReasonValue(outcome.reason.value) if outcome.reason else None
            ),
            ai_move=outcome.ai_move,
            ai_strategy=outcome.ai_strategy.value if outcome.ai_strategy else None,
            state=snapshot_to_info(outcome.snapshot),
        )


def snapshot_to_info(snapshot: StateSnapshot) -> GameStateInfo:
    """Convert an engine snapshot to its API schema."""
    return GameStateInfo(
        board=snapshot.cells,
        current_player=snapshot.current_player.value,
        mode=GameModeValue(snapshot.mode.value) if snapshot.mode else None,
        mode_label=snapshot.mode_label,
        phase=PhaseValue(snapshot.phase.value),
        outcome=OutcomeValue(snapshot.outcome.value),
        winner=snapshot.winner.value if snapshot.winner else None,
        winning_line=list(snapshot.winning_line) if snapshot.winning_line else None,
        turn_count=snapshot.turn_count,
        is_ai_thinking=snapshot.is_ai_thinking,
        status_message=snapshot.status_message,
    )
