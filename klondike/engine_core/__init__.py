"""
Engine Core - Klondike game state, rules and undo.

The engine is the runtime that:
1. Shuffles and deals a Board
2. Validates moves against the rules
3. Applies moves via the reducer, recording reversible deltas
4. Undoes moves from the history
5. Derives the game outcome (in progress, won, stuck)
"""

from .cards import Card, Color, Deck, Rank, Suit, new_shuffled_deck
from .state import (
    Board,
    GameOutcome,
    InvariantViolation,
    Pile,
    Snapshot,
    ZoneId,
    ZoneKind,
    check_invariants,
    deal,
)
from .move import (
    CommandResult,
    Move,
    MoveRejected,
    MoveType,
    RejectReason,
    UndoUnavailable,
)
from .validator import MoveValidator, is_legal, validate
from .reducer import DeltaKind, MoveDelta, apply_move, revert_delta
from .history import EmptyHistoryError, History
from .move_generator import MoveGenerator, legal_moves
from .controller import GameController, evaluate_outcome

__all__ = [
    "Card",
    "Color",
    "Deck",
    "Rank",
    "Suit",
    "new_shuffled_deck",
    "Board",
    "GameOutcome",
    "InvariantViolation",
    "Pile",
    "Snapshot",
    "ZoneId",
    "ZoneKind",
    "check_invariants",
    "deal",
    "CommandResult",
    "Move",
    "MoveRejected",
    "MoveType",
    "RejectReason",
    "UndoUnavailable",
    "MoveValidator",
    "is_legal",
    "validate",
    "DeltaKind",
    "MoveDelta",
    "apply_move",
    "revert_delta",
    "EmptyHistoryError",
    "History",
    "MoveGenerator",
    "legal_moves",
    "GameController",
    "evaluate_outcome",
]
