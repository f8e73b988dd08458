"""
API Module - HTTP interface for game front ends.

Exposes the engine via REST API. A front end:
1. Creates a session (a dealt game)
2. Sends moves, draws and undos
3. Renders the returned game state

All state is session-scoped and in-memory.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    NewGameRequest,
    # Responses
    ErrorResponse,
    GameStateResponse,
    LegalMovesResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    # Shared
    CardInfo,
    MoveInfo,
    ZoneInfo,
    ErrorCode,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MoveRequest",
    "NewGameRequest",
    # Responses
    "ErrorResponse",
    "GameStateResponse",
    "LegalMovesResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    # Shared
    "CardInfo",
    "MoveInfo",
    "ZoneInfo",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
