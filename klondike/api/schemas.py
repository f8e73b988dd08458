"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a front end and the engine.
Face-down cards are sent without rank or suit, so a client only ever
learns what a player at the table could see.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- MOVE_REJECTED: Move is illegal; details.reason holds the RejectReason
- UNDO_UNAVAILABLE: No move to undo
- VALIDATION_ERROR: Malformed request (e.g. unknown zone)
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class GameOutcome(str, Enum):
    """Outcome values."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    STUCK = "stuck"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    MOVE_REJECTED = "MOVE_REJECTED"
    UNDO_UNAVAILABLE = "UNDO_UNAVAILABLE"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A card as the player sees it. Face-down cards hide rank and suit."""
    face_up: bool
    rank: Optional[int] = Field(None, ge=1, le=13)
    suit: Optional[str] = None
    color: Optional[str] = None
    label: Optional[str] = Field(None, description="Short name, e.g. 10h or Ks")


class ZoneInfo(BaseModel):
    """One zone of the board."""
    zone_id: str = Field(description="stock, waste, foundation:<n>, tableau:<n>")
    zone_type: str = Field(description="stock, waste, foundation, tableau")
    card_count: int = 0
    cards: list[CardInfo] = Field(default_factory=list)
    suit: Optional[str] = Field(None, description="Suit accepted by a foundation")


class MoveInfo(BaseModel):
    """A legal move."""
    move_type: str
    source: str
    destination: str
    count: int = 1


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    seed: Optional[int] = Field(
        None, ge=0, lt=2**64, description="Seed for a reproducible deal"
    )
    max_recycles: Optional[int] = Field(
        None, ge=0, description="How often the waste may be recycled (unlimited if omitted)"
    )


class NewGameRequest(BaseModel):
    """Request to re-deal within an existing session."""
    seed: Optional[int] = Field(None, ge=0, lt=2**64)


class MoveRequest(BaseModel):
    """Request to move cards between zones."""
    source: str = Field(..., description="Source zone, e.g. waste or tableau:2")
    destination: str = Field(..., description="Destination zone, e.g. foundation:hearts")
    count: int = Field(1, ge=1, le=13, description="Cards taken from the top of the source")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    outcome: GameOutcome
    can_undo: bool
    move_count: int = 0
    recycle_count: int = 0
    max_recycles: Optional[int] = None
    seed: Optional[int] = None
    stock: ZoneInfo
    waste: ZoneInfo
    foundations: list[ZoneInfo] = Field(default_factory=list)
    tableau: list[ZoneInfo] = Field(default_factory=list)
    api_version: str = "v1"


class LegalMovesResponse(BaseModel):
    """Every legal move in the current position."""
    session_id: str
    moves: list[MoveInfo] = Field(default_factory=list)
    count: int = 0


class SessionListResponse(BaseModel):
    """List of active sessions."""
    sessions: list[str] = Field(default_factory=list)
    count: int = 0


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "klondike-engine"
    version: str = "0.1.0"
