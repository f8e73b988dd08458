"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to controller commands
2. Manages sessions
3. Formats snapshots and errors for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Every method returns either a response model or an ErrorResponse.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    NewGameRequest,
    # Responses
    ErrorResponse,
    GameStateResponse,
    LegalMovesResponse,
    # Shared
    CardInfo,
    MoveInfo,
    ZoneInfo,
    # Enums
    ErrorCode,
    GameOutcome,
)
from ..engine_core import Card, CommandResult, MoveRejected, Snapshot, ZoneId, ZoneKind
from ..session import Session, SessionManager


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        state = service.create_session(CreateSessionRequest(seed=42))
        state = service.move(state.session_id, MoveRequest(source="waste", destination="tableau:3"))
        state = service.undo(state.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def create_session(self, request: CreateSessionRequest) -> GameStateResponse:
        """Create a new session with a freshly dealt game."""
        session = self.session_manager.create_session(
            seed=request.seed,
            max_recycles=request.max_recycles,
        )
        return self._build_game_state(session, session.controller.snapshot())

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._build_game_state(session, session.controller.snapshot())

    def new_game(self, session_id: str, request: NewGameRequest) -> GameStateResponse | ErrorResponse:
        """Re-deal inside an existing session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        result = session.controller.new_game(request.seed)
        return self._build_game_state(session, result.snapshot)

    def move(self, session_id: str, request: MoveRequest) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        try:
            source = ZoneId.parse(request.source)
            destination = ZoneId.parse(request.destination)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)
        result = session.controller.attempt_move(source, destination, request.count)
        return self._command_response(session, result)

    def draw(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._command_response(session, session.controller.draw())

    def undo(self, session_id: str) -> GameStateResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._command_response(session, session.controller.undo())

    def legal_moves(self, session_id: str) -> LegalMovesResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        moves = [
            MoveInfo(
                move_type=move.move_type.value,
                source=str(move.source),
                destination=str(move.destination),
                count=move.count,
            )
            for move in session.controller.legal_moves()
        ]
        return LegalMovesResponse(session_id=session_id, moves=moves, count=len(moves))

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a session."""
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper Methods
    # =========================================================================

    def _command_response(
        self, session: Session, result: CommandResult
    ) -> GameStateResponse | ErrorResponse:
        if result.ok:
            return self._build_game_state(session, result.snapshot)
        error = result.error
        if isinstance(error, MoveRejected):
            return ErrorResponse(
                error=error.message,
                error_code=ErrorCode.MOVE_REJECTED,
                details={"reason": error.reason.value},
            )
        return ErrorResponse(error=error.message, error_code=ErrorCode.UNDO_UNAVAILABLE)

    @staticmethod
    def _session_not_found(session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _build_game_state(self, session: Session, snapshot: Snapshot) -> GameStateResponse:
        """Build the full game state response from a snapshot."""
        return GameStateResponse(
            session_id=session.session_id,
            outcome=GameOutcome(snapshot.outcome.value),
            can_undo=snapshot.can_undo,
            move_count=snapshot.move_count,
            recycle_count=snapshot.recycle_count,
            max_recycles=session.controller.rules.max_recycles,
            seed=snapshot.seed,
            stock=self._zone_info(snapshot, ZoneId.stock()),
            waste=self._zone_info(snapshot, ZoneId.waste()),
            foundations=[
                self._zone_info(snapshot, ZoneId.foundation(i))
                for i in range(len(snapshot.foundations))
            ],
            tableau=[
                self._zone_info(snapshot, ZoneId.tableau(i))
                for i in range(len(snapshot.tableau))
            ],
        )

    def _zone_info(self, snapshot: Snapshot, zone: ZoneId) -> ZoneInfo:
        cards = snapshot.zone(zone)
        return ZoneInfo(
            zone_id=str(zone),
            zone_type=zone.kind.value,
            card_count=len(cards),
            cards=[self._card_info(card) for card in cards],
            suit=zone.suit.value if zone.kind == ZoneKind.FOUNDATION else None,
        )

    @staticmethod
    def _card_info(card: Card) -> CardInfo:
        if not card.face_up:
            return CardInfo(face_up=False)
        return CardInfo(
            face_up=True,
            rank=int(card.rank),
            suit=card.suit.value,
            color=card.color.value,
            label=str(card),
        )
