"""
API Module - HTTP interface for UI clients.

Exposes the engine via REST API. A client:
1. Creates a session (optionally with a mode)
2. Sends cell clicks, restart and mode changes
3. Renders the state returned with every response

All state is session-scoped and in memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectModeRequest,
    # Responses
    SessionResponse,
    MoveResponse,
    ErrorResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    GameStateInfo,
    GameModeValue,
    RejectionReasonValue,
    ErrorCode,
)
from .service import APIService, snapshot_to_info
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectModeRequest",
    # Responses
    "SessionResponse",
    "MoveResponse",
    "ErrorResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    # Shared
    "GameStateInfo",
    "GameModeValue",
    "RejectionReasonValue",
    "ErrorCode",
    # Service
    "APIService",
    "snapshot_to_info",
    "create_app",
]
