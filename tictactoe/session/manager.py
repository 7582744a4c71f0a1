"""
Session Manager - Creates and manages game sessions.

A session is one browser tab or API client playing games:
- Created on request, optionally with a mode already selected
- Holds one GameEngine
- Destroyed when the client ends it or it goes stale

Sessions are EPHEMERAL:
- No persistence to database
- Nothing survives a process restart
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time
import uuid

from .. import config
from ..engine_core.state import GameMode
from .engine import GameEngine

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """An ephemeral game session held in memory."""
    session_id: str
    engine: GameEngine
    created_at: float
    last_active_at: float = 0.0

    def touch(self):
        self.last_active_at = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own engine
    - Track active sessions
    - Clean up stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, seed: int | None = None, auto_play_ai: bool = False):
        self._sessions: dict[str, Session] = {}
        self.seed = seed if seed is not None else config.AI_SEED
        self.auto_play_ai = auto_play_ai

    def create_session(self, mode: GameMode | None = None) -> Session:
        """
        Create a new game session.

        Args:
            mode: Start a game immediately in this mode; None waits
                for mode selection.
        """
        session_id = str(uuid.uuid4())
        engine = GameEngine(seed=self.seed, auto_play_ai=self.auto_play_ai)
        if mode is not None:
            engine.start_session(mode)

        now = time.time()
        session = Session(
            session_id=session_id,
            engine=engine,
            created_at=now,
            last_active_at=now,
        )
        self._sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and drop it from memory.

        Returns False if the session did not exist.
        """
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return list(self._sessions.keys())

    def cleanup_stale_sessions(self, max_age_seconds: int | None = None) -> int:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the number of sessions removed.
        """
        if max_age_seconds is None:
            max_age_seconds = config.SESSION_MAX_AGE_SECONDS
        current_time = time.time()
        to_remove = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.last_active_at > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
