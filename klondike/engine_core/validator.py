"""
Move Validator - Decides whether a move is legal on a board.

Pure: never mutates the board. Every illegal move is explained by a
MoveRejected carrying a RejectReason, so callers can surface it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Sequence

from ..config import RulesConfig
from .cards import Card, Rank
from .move import Move, MoveType, MoveRejected, RejectReason
from .state import Board, Pile, ZoneId


def is_descending_run(cards: Sequence[Card]) -> bool:
    """
    True if the cards (bottom-most first) are all face up and each one
    is one rank lower than, and the opposite color of, the card below.
    """
    if not all(card.face_up for card in cards):
        return False
    for lower, upper in zip(cards, cards[1:]):
        if upper.rank != lower.rank - 1 or upper.color == lower.color:
            return False
    return True


@dataclass
class MoveValidator:
    """
    Validates moves against the classic ruleset.

    Stateless apart from the house rules it was built with.
    """
    rules: RulesConfig = field(default_factory=RulesConfig)

    def validate(self, board: Board, move: Move) -> MoveRejected | None:
        """Return None when the move is legal, else why it is not."""
        if Move.between(move.source, move.destination, move.count) != move:
            return self._reject(
                move,
                RejectReason.DESTINATION_NOT_ELIGIBLE,
                f"Cannot move from {move.source} to {move.destination}",
            )

        handlers = {
            MoveType.DRAW: self._check_draw,
            MoveType.WASTE_TO_FOUNDATION: self._check_waste_to_foundation,
            MoveType.WASTE_TO_TABLEAU: self._check_waste_to_tableau,
            MoveType.TABLEAU_TO_FOUNDATION: self._check_tableau_to_foundation,
            MoveType.TABLEAU_TO_TABLEAU: self._check_tableau_to_tableau,
        }
        return handlers[move.move_type](board, move)

    def is_legal(self, board: Board, move: Move) -> bool:
        return self.validate(board, move) is None

    def _check_draw(self, board: Board, move: Move) -> MoveRejected | None:
        if move.count != 1:
            return self._reject(
                move,
                RejectReason.INVALID_SUFFIX_RANGE,
                "The stock is drawn one card at a time",
            )
        if not board.stock.is_empty:
            return None
        # Empty stock: the draw becomes a recycle of the waste
        if board.waste.is_empty:
            return self._reject(
                move, RejectReason.EMPTY_SOURCE_SELECTION, "Stock and waste are both empty"
            )
        if not self.rules.recycle_allowed(board.recycle_count):
            return self._reject(
                move,
                RejectReason.STOCK_EMPTY_NO_RECYCLE_ALLOWED,
                f"Stock is empty and the waste was already recycled "
                f"{board.recycle_count} time(s)",
            )
        return None

    def _check_waste_to_foundation(self, board: Board, move: Move) -> MoveRejected | None:
        if board.waste.is_empty:
            return self._reject(move, RejectReason.EMPTY_SOURCE_SELECTION, "Waste is empty")
        if move.count != 1:
            return self._reject(
                move,
                RejectReason.DESTINATION_NOT_ELIGIBLE,
                "Foundations take one card at a time",
            )
        return self._fits_foundation(board, move, board.waste.top_card)

    def _check_waste_to_tableau(self, board: Board, move: Move) -> MoveRejected | None:
        if board.waste.is_empty:
            return self._reject(move, RejectReason.EMPTY_SOURCE_SELECTION, "Waste is empty")
        if move.count != 1:
            return self._reject(
                move,
                RejectReason.INVALID_SUFFIX_RANGE,
                "Only the top waste card can be played",
            )
        return self._fits_tableau(board.pile(move.destination), move, board.waste.top_card)

    def _check_tableau_to_foundation(self, board: Board, move: Move) -> MoveRejected | None:
        source = board.pile(move.source)
        rejection = self._check_selection(source, move)
        if rejection:
            return rejection
        if move.count != 1:
            return self._reject(
                move,
                RejectReason.DESTINATION_NOT_ELIGIBLE,
                "Foundations take one card at a time",
            )
        return self._fits_foundation(board, move, source.top_card)

    def _check_tableau_to_tableau(self, board: Board, move: Move) -> MoveRejected | None:
        if move.source == move.destination:
            return self._reject(
                move,
                RejectReason.DESTINATION_NOT_ELIGIBLE,
                "Source and destination are the same column",
            )
        source = board.pile(move.source)
        rejection = self._check_selection(source, move)
        if rejection:
            return rejection
        moving = source.peek(move.count)
        return self._fits_tableau(board.pile(move.destination), move, moving[0])

    def _check_selection(self, source: Pile, move: Move) -> MoveRejected | None:
        """The requested cards must be an existing face-up run."""
        if source.is_empty or move.count < 1:
            return self._reject(
                move, RejectReason.EMPTY_SOURCE_SELECTION, f"Nothing to move from {move.source}"
            )
        if move.count > source.face_up_count:
            return self._reject(
                move,
                RejectReason.INVALID_SUFFIX_RANGE,
                f"{move.source} has only {source.face_up_count} face-up card(s)",
            )
        if not is_descending_run(source.peek(move.count)):
            return self._reject(
                move,
                RejectReason.INVALID_SUFFIX_RANGE,
                f"Top {move.count} cards of {move.source} are not a descending run",
            )
        return None

    def _fits_foundation(self, board: Board, move: Move, card: Card) -> MoveRejected | None:
        foundation: ZoneId = move.destination
        if card.suit != foundation.suit:
            return self._reject(
                move,
                RejectReason.WRONG_SUIT,
                f"{card} cannot go on the {foundation.suit.value} foundation",
            )
        top = board.pile(foundation).top_card
        needed = Rank.ACE if top is None else top.rank + 1
        if card.rank != needed:
            wanted = Rank(needed).label if needed <= Rank.KING else "nothing"
            return self._reject(
                move,
                RejectReason.WRONG_RANK,
                f"{foundation} needs {wanted}, got {card}",
            )
        return None

    def _fits_tableau(self, destination: Pile, move: Move, card: Card) -> MoveRejected | None:
        top = destination.top_card
        if top is None:
            if card.rank != Rank.KING:
                return self._reject(
                    move, RejectReason.WRONG_RANK, f"Only a King can fill an empty column, got {card}"
                )
            return None
        if card.rank != top.rank - 1:
            return self._reject(
                move, RejectReason.WRONG_RANK, f"{card} cannot go on {top}"
            )
        if card.color == top.color:
            return self._reject(
                move,
                RejectReason.WRONG_COLOR_SEQUENCE,
                f"{card} and {top} are the same color",
            )
        return None

    @staticmethod
    def _reject(move: Move, reason: RejectReason, message: str) -> MoveRejected:
        return MoveRejected(reason=reason, message=message, move=move)


def validate(board: Board, move: Move, rules: RulesConfig | None = None) -> MoveRejected | None:
    """Convenience function: validate with a throwaway validator."""
    return MoveValidator(rules=rules or RulesConfig()).validate(board, move)


def is_legal(board: Board, move: Move, rules: RulesConfig | None = None) -> bool:
    return validate(board, move, rules) is None
