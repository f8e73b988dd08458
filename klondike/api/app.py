"""
FastAPI Application - REST API for game front ends.

Endpoints:
    POST   /api/v1/sessions                       Create a session and deal
    GET    /api/v1/sessions                       List active sessions
    DELETE /api/v1/sessions/{id}                  End session
    GET    /api/v1/sessions/{id}/state            Get game state
    POST   /api/v1/sessions/{id}/moves            Attempt a move
    POST   /api/v1/sessions/{id}/draw             Draw from (or recycle) the stock
    POST   /api/v1/sessions/{id}/undo             Undo the last move
    POST   /api/v1/sessions/{id}/new-game         Re-deal
    GET    /api/v1/sessions/{id}/legal-moves      List legal moves

All responses are JSON with explicit Pydantic schemas. A rejected move
is a 422 with error_code MOVE_REJECTED and the reason in details.reason;
the board is unchanged.
"""

from typing import Annotated, Union
import logging

from ..config import Settings, configure_logging

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    "SESSION_NOT_FOUND": 404,
    "MOVE_REJECTED": 422,
    "UNDO_UNAVAILABLE": 409,
    "VALIDATION_ERROR": 400,
}


def create_app(service=None, settings: Settings | None = None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        MoveRequest,
        NewGameRequest,
        # Response models
        EndSessionResponse,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        LegalMovesResponse,
        SessionListResponse,
    )
    from ..session import SessionManager

    settings = settings or Settings.from_env()
    api_service = service or APIService(
        session_manager=SessionManager(rules=settings.rules)
    )

    app = FastAPI(
        title="Klondike Engine API",
        description="""
Klondike solitaire rule engine.

Create a session to deal a game, then send moves. Every successful
command returns the full game state, including `outcome`
(`in_progress`, `won`, `stuck`) and `can_undo`.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `MOVE_REJECTED` | Move is illegal (`details.reason` says why) |
| `UNDO_UNAVAILABLE` | Nothing to undo |
| `VALIDATION_ERROR` | Malformed zone name |
        """,
        version="0.1.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Error helpers
    # =========================================================================

    def respond(response):
        """Pass models through; turn ErrorResponse into a JSON error."""
        if isinstance(response, ErrorResponse):
            status_code = _STATUS_CODES.get(response.error_code.value, 400)
            return JSONResponse(
                status_code=status_code,
                content=response.model_dump(mode="json"),
            )
        return response

    error_responses = {
        404: {"model": ErrorResponse, "description": "Session not found"},
    }

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=GameStateResponse,
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(body: CreateSessionRequest) -> GameStateResponse:
        """
        Create a session and deal its first game.

        Pass `seed` for a reproducible deal and `max_recycles` to limit
        how often the waste can be turned back into the stock.
        """
        return api_service.create_session(body)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        api_service.session_manager.cleanup_stale_sessions(settings.session_ttl)
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

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

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.get_game_state(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/moves",
        response_model=GameStateResponse,
        responses={
            **error_responses,
            400: {"model": ErrorResponse, "description": "Unknown zone"},
            422: {"model": ErrorResponse, "description": "Move rejected"},
        },
        tags=["Game"],
        summary="Attempt a move",
    )
    async def attempt_move(
        session_id: str, body: MoveRequest
    ) -> Union[GameStateResponse, JSONResponse]:
        """
        Move `count` cards from the top of `source` onto `destination`.

        **Request Body:**
        ```json
        {"source": "tableau:2", "destination": "tableau:5", "count": 3}
        ```
        """
        return respond(api_service.move(session_id, body))

    @app.post(
        "/api/v1/sessions/{session_id}/draw",
        response_model=GameStateResponse,
        responses={
            **error_responses,
            422: {"model": ErrorResponse, "description": "Stock and waste exhausted"},
        },
        tags=["Game"],
        summary="Draw from the stock",
    )
    async def draw(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.draw(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/undo",
        response_model=GameStateResponse,
        responses={
            **error_responses,
            409: {"model": ErrorResponse, "description": "Nothing to undo"},
        },
        tags=["Game"],
        summary="Undo the last move",
    )
    async def undo(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.undo(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/new-game",
        response_model=GameStateResponse,
        responses=error_responses,
        tags=["Game"],
        summary="Deal a new game in this session",
    )
    async def new_game(
        session_id: str, body: NewGameRequest
    ) -> Union[GameStateResponse, JSONResponse]:
        return respond(api_service.new_game(session_id, body))

    @app.get(
        "/api/v1/sessions/{session_id}/legal-moves",
        response_model=LegalMovesResponse,
        responses=error_responses,
        tags=["Game"],
        summary="List legal moves",
    )
    async def get_legal_moves(session_id: str) -> Union[LegalMovesResponse, JSONResponse]:
        return respond(api_service.legal_moves(session_id))

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
        return HealthResponse(status="healthy", service="klondike-engine", version="0.1.0")

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Klondike Engine API",
            "version": "0.1.0",
            "env": settings.env,
            "docs": "/api/docs",
            "health": "/health",
        }

    logger.info("Klondike API created (env=%s)", settings.env)
    return app


def build_default_app():
    """Entry point for `uvicorn klondike.api.app:build_default_app --factory`."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings=settings)
