"""
FastAPI Application - REST API for a browser or mobile UI.

Endpoints:
    POST   /api/v1/sessions                      Create game session
    GET    /api/v1/sessions                      List sessions
    GET    /api/v1/sessions/{id}                 Get session state
    DELETE /api/v1/sessions/{id}                 End session
    POST   /api/v1/sessions/{id}/mode            Select mode (new game)
    POST   /api/v1/sessions/{id}/cells/{index}   Click a cell
    POST   /api/v1/sessions/{id}/ai-move         Play a deferred AI move
    POST   /api/v1/sessions/{id}/restart         Restart, same mode
    POST   /api/v1/sessions/{id}/change-mode     Back to mode selection

AI Turn Flow:
    1. POST /cells/{index} applies the human move
    2. By default the AI reply is played in the same request and
       reported as `ai_move`
    3. With `defer_ai=true` the state is returned in `ai_thinking`; the
       client shows its "thinking" delay, then calls POST /ai-move.
       Cell clicks in between are rejected with `ai_busy`.

Rejected moves are HTTP 200 with `accepted=false`.
All responses are JSON with explicit Pydantic schemas.

Run with: uvicorn tictactoe.api.app:create_app --factory
"""

from typing import Annotated, Optional, Union
import logging

from .. import __version__, config

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query, Request
        from fastapi.encoders import jsonable_encoder
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        SelectModeRequest,
        SessionResponse,
        MoveResponse,
        ErrorResponse,
        ErrorCode,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
    )

    app = FastAPI(
        title="Tic-Tac-Toe Engine API",
        description="""
Two-mode tic-tac-toe: Player vs Player and Player vs heuristic AI.

## Rejection Reasons

| Reason | Description |
|--------|-------------|
| `cell_occupied` | The cell already holds a mark |
| `game_over` | The game was won or drawn |
| `ai_busy` | The AI turn is pending |
| `invalid_index` | Cell index outside 0-8 |
| `no_active_game` | No mode selected yet |
| `not_ai_turn` | AI move requested but no AI turn is pending |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(response) -> Union[SessionResponse, MoveResponse, JSONResponse]:
        """Pass models through; turn ErrorResponse into a 404."""
        if isinstance(response, ErrorResponse):
            return JSONResponse(status_code=404, content=response.model_dump(mode="json"))
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = ErrorResponse(
            error="Request could not be validated",
            error_code=ErrorCode.VALIDATION_ERROR,
            details={"errors": jsonable_encoder(exc.errors())},
        )
        return JSONResponse(status_code=422, content=error.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        error = ErrorResponse(
            error="Internal server error",
            error_code=ErrorCode.INTERNAL_ERROR,
        )
        return JSONResponse(status_code=500, content=error.model_dump(mode="json"))

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: Optional[CreateSessionRequest] = None) -> SessionResponse:
        """
        Create a new game session.

        Pass a `mode` to start playing right away, or select it later
        with `POST /mode`.
        """
        return api_service.create_session(body.mode if body else None)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session state",
    )
    async def get_session(session_id: str):
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        success = api_service.end_session(session_id, reason)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions/{session_id}/mode",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Select a mode and start a fresh game",
    )
    async def select_mode(session_id: str, body: SelectModeRequest):
        return respond(api_service.select_mode(session_id, body.mode))

    @app.post(
        "/api/v1/sessions/{session_id}/cells/{index}",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Click a cell",
    )
    async def click_cell(
        session_id: str,
        index: int,
        defer_ai: Annotated[bool, Query(description="Leave the AI move to POST /ai-move")] = False,
    ):
        return respond(api_service.click_cell(session_id, index, defer_ai=defer_ai))

    @app.post(
        "/api/v1/sessions/{session_id}/ai-move",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Play the pending AI move",
    )
    async def ai_move(session_id: str):
        return respond(api_service.play_ai_turn(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Restart with the same mode",
    )
    async def restart(session_id: str):
        return respond(api_service.restart(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/change-mode",
        response_model=MoveResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Return to mode selection",
    )
    async def change_mode(session_id: str):
        return respond(api_service.change_mode(session_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="tictactoe-engine",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Tic-Tac-Toe Engine API",
            "version": __version__,
            "env": config.TICTACTOE_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
