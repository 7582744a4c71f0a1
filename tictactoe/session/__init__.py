"""
Session Module - Drives games and manages ephemeral sessions.

The GameEngine is the single owner of a GameSession: presentation
layers send it commands and render the snapshot it returns.
The SessionManager keeps many engines in memory for the HTTP API.
"""

from .engine import GameEngine, MoveOutcome
from .manager import SessionManager, Session

__all__ = [
    "GameEngine",
    "MoveOutcome",
    "SessionManager",
    "Session",
]
