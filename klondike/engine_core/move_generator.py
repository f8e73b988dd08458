"""
Move Generator - Enumerates every legal move on a board.

Used by:
1. The controller, to decide whether a game is stuck
2. Front ends, to highlight playable cards or offer hints

Candidates are bounded: the waste top and every face-up run of every
column, against all 7 columns and 4 foundations, plus the stock draw.
Each candidate is checked with the MoveValidator, so generation and
validation can never disagree.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from ..config import RulesConfig
from .move import Move, MoveType
from .state import Board, FOUNDATION_SUITS, TABLEAU_COLUMNS
from .validator import MoveValidator


@dataclass
class MoveGenerator:
    """Generates legal moves for a board under a set of house rules."""
    rules: RulesConfig = field(default_factory=RulesConfig)

    def __post_init__(self):
        self._validator = MoveValidator(rules=self.rules)

    def generate(self, board: Board) -> list[Move]:
        """All legal moves, foundation moves first."""
        candidates = []
        candidates.extend(self._foundation_candidates())
        candidates.extend(self._tableau_candidates(board))
        candidates.append(Move.draw())
        return [m for m in candidates if self._validator.is_legal(board, m)]

    def productive_moves(self, board: Board) -> list[Move]:
        """Legal moves, minus ones that leave the position unchanged."""
        return [m for m in self.generate(board) if not is_futile(board, m)]

    def _foundation_candidates(self) -> list[Move]:
        moves = []
        for foundation in range(len(FOUNDATION_SUITS)):
            moves.append(Move.waste_to_foundation(foundation))
            for column in range(TABLEAU_COLUMNS):
                moves.append(Move.tableau_to_foundation(column, foundation))
        return moves

    def _tableau_candidates(self, board: Board) -> list[Move]:
        moves = []
        for destination in range(TABLEAU_COLUMNS):
            moves.append(Move.waste_to_tableau(destination))
            for source in range(TABLEAU_COLUMNS):
                if source == destination:
                    continue
                for count in range(1, board.tableau[source].face_up_count + 1):
                    moves.append(Move.tableau_to_tableau(source, destination, count))
        return moves


def is_futile(board: Board, move: Move) -> bool:
    """
    A whole column moved onto an empty column changes nothing but the
    column index, and can be repeated forever.
    """
    if move.move_type != MoveType.TABLEAU_TO_TABLEAU:
        return False
    return (
        board.pile(move.destination).is_empty
        and move.count == len(board.pile(move.source))
    )


def legal_moves(board: Board, rules: RulesConfig | None = None) -> list[Move]:
    """
    Convenience function to get legal moves.

    Creates a MoveGenerator and generates moves.
    """
    generator = MoveGenerator(rules=rules or RulesConfig())
    return generator.generate(board)
