"""
Move System - Moves, rejections, and command results.

Moves form a closed set of shapes (MoveType). A request expressed as
(source zone, destination zone, count) is classified into one of them
by Move.between(); anything outside the set is not a Klondike move.

All state changes flow through moves.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .state import GameOutcome, Snapshot, ZoneId, ZoneKind

if TYPE_CHECKING:
    from .reducer import MoveDelta


class MoveType(Enum):
    """Shapes of move the engine understands."""
    DRAW = "draw"  # Stock to waste, or recycle when the stock is empty
    WASTE_TO_FOUNDATION = "waste_to_foundation"
    WASTE_TO_TABLEAU = "waste_to_tableau"
    TABLEAU_TO_FOUNDATION = "tableau_to_foundation"
    TABLEAU_TO_TABLEAU = "tableau_to_tableau"


_SHAPES = {
    (ZoneKind.STOCK, ZoneKind.WASTE): MoveType.DRAW,
    (ZoneKind.WASTE, ZoneKind.FOUNDATION): MoveType.WASTE_TO_FOUNDATION,
    (ZoneKind.WASTE, ZoneKind.TABLEAU): MoveType.WASTE_TO_TABLEAU,
    (ZoneKind.TABLEAU, ZoneKind.FOUNDATION): MoveType.TABLEAU_TO_FOUNDATION,
    (ZoneKind.TABLEAU, ZoneKind.TABLEAU): MoveType.TABLEAU_TO_TABLEAU,
}


@dataclass(frozen=True)
class Move:
    """
    A fully specified move request.

    `count` is the number of cards taken from the top of the source.
    Only tableau-to-tableau moves carry more than one card.
    """
    move_type: MoveType
    source: ZoneId
    destination: ZoneId
    count: int = 1

    @classmethod
    def draw(cls) -> Move:
        return cls(MoveType.DRAW, ZoneId.stock(), ZoneId.waste())

    @classmethod
    def waste_to_foundation(cls, foundation: int) -> Move:
        return cls(
            MoveType.WASTE_TO_FOUNDATION,
            ZoneId.waste(),
            ZoneId.foundation(foundation),
        )

    @classmethod
    def waste_to_tableau(cls, column: int) -> Move:
        return cls(MoveType.WASTE_TO_TABLEAU, ZoneId.waste(), ZoneId.tableau(column))

    @classmethod
    def tableau_to_foundation(cls, column: int, foundation: int) -> Move:
        return cls(
            MoveType.TABLEAU_TO_FOUNDATION,
            ZoneId.tableau(column),
            ZoneId.foundation(foundation),
        )

    @classmethod
    def tableau_to_tableau(cls, source: int, destination: int, count: int = 1) -> Move:
        return cls(
            MoveType.TABLEAU_TO_TABLEAU,
            ZoneId.tableau(source),
            ZoneId.tableau(destination),
            count,
        )

    @classmethod
    def between(cls, source: ZoneId, destination: ZoneId, count: int = 1) -> Move | None:
        """
        Classify a generic request. Returns None when the pair of zones
        is not a shape of move Klondike allows (e.g. anything into the
        stock, or out of a foundation).
        """
        move_type = _SHAPES.get((source.kind, destination.kind))
        if move_type is None:
            return None
        return cls(move_type, source, destination, count)

    def __str__(self) -> str:
        if self.move_type == MoveType.DRAW:
            return "draw"
        if self.count > 1:
            return f"{self.source} -> {self.destination} x{self.count}"
        return f"{self.source} -> {self.destination}"


class RejectReason(str, Enum):
    """Why a move was refused. The board is never changed by a refusal."""
    WRONG_RANK = "WRONG_RANK"
    WRONG_SUIT = "WRONG_SUIT"
    WRONG_COLOR_SEQUENCE = "WRONG_COLOR_SEQUENCE"
    EMPTY_SOURCE_SELECTION = "EMPTY_SOURCE_SELECTION"
    INVALID_SUFFIX_RANGE = "INVALID_SUFFIX_RANGE"
    DESTINATION_NOT_ELIGIBLE = "DESTINATION_NOT_ELIGIBLE"
    STOCK_EMPTY_NO_RECYCLE_ALLOWED = "STOCK_EMPTY_NO_RECYCLE_ALLOWED"


@dataclass(frozen=True)
class MoveRejected:
    """An illegal move request."""
    reason: RejectReason
    message: str
    move: Move | None = None


@dataclass(frozen=True)
class UndoUnavailable:
    """Undo was requested with an empty history."""
    message: str = "Nothing to undo"


@dataclass(frozen=True)
class CommandResult:
    """
    Result of a controller command.

    Contains:
    - Whether the command succeeded
    - The snapshot after the command (unchanged board on failure)
    - The error value on failure
    - The delta recorded for an applied move or undone by undo
    """
    ok: bool
    snapshot: Snapshot
    error: MoveRejected | UndoUnavailable | None = None
    delta: MoveDelta | None = None

    @classmethod
    def success(cls, snapshot: Snapshot, delta: MoveDelta | None = None) -> CommandResult:
        return cls(ok=True, snapshot=snapshot, delta=delta)

    @classmethod
    def failure(cls, snapshot: Snapshot, error: MoveRejected | UndoUnavailable) -> CommandResult:
        return cls(ok=False, snapshot=snapshot, error=error)

    @property
    def outcome(self) -> GameOutcome:
        return self.snapshot.outcome
