"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client UI and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- VALIDATION_ERROR: Request body could not be parsed
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameModeValue(str, Enum):
    """Game modes a client can select."""
    PVP = "pvp"
    PVAI = "pvai"


class PhaseValue(str, Enum):
    """Phase of the game state machine."""
    AWAITING_MODE = "awaiting_mode"
    IN_PROGRESS = "in_progress"
    AI_THINKING = "ai_thinking"
    WON = "won"
    DRAW = "draw"


class OutcomeValue(str, Enum):
    """Game result so far."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    DRAW = "draw"


class RejectionReasonValue(str, Enum):
    """Why a command had no effect."""
    CELL_OCCUPIED = "cell_occupied"
    GAME_OVER = "game_over"
    AI_BUSY = "ai_busy"
    INVALID_INDEX = "invalid_index"
    NO_ACTIVE_GAME = "no_active_game"
    NOT_AI_TURN = "not_ai_turn"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class GameStateInfo(BaseModel):
    """Render-ready snapshot of one game."""
    board: list[str] = Field(
        ..., min_length=9, max_length=9,
        description="9 cells, row-major: \"X\", \"O\" or \"\"",
    )
    current_player: str = Field(..., description="X or O")
    mode: Optional[GameModeValue] = None
    mode_label: str = ""
    phase: PhaseValue
    outcome: OutcomeValue
    winner: Optional[str] = None
    winning_line: Optional[list[int]] = None
    turn_count: int = Field(0, ge=0, le=9)
    is_ai_thinking: bool = False
    status_message: str = ""


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    mode: Optional[GameModeValue] = Field(
        None, description="Start a game right away in this mode"
    )


class SelectModeRequest(BaseModel):
    """Request to start a game in a mode."""
    mode: GameModeValue


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    created_at: float = 0.0
    state: GameStateInfo
    api_version: str = "v1"


class MoveResponse(BaseModel):
    """
    Response to any game command.

    Rejected commands are not errors: `accepted` is false, the reason is
    given and `state` is the unchanged game.
    """
    session_id: str
    accepted: bool
    rejection_reason: Optional[RejectionReasonValue] = None
    ai_move: Optional[int] = Field(None, description="Cell the AI played, if any")
    ai_strategy: Optional[str] = Field(None, description="win, block, center, corner or any")
    state: GameStateInfo
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
