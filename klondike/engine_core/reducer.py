"""
Reducer - Applies validated moves to the board.

The reducer is the single point of board mutation. Each applied move
returns a MoveDelta, and revert_delta() is its exact inverse:

    delta = apply_move(board, move)
    revert_delta(board, delta)   # board is back where it started

Design principles:
- Validation happens before apply_move(); this module trusts its input
- Mutates in place: the board has a single owner
- Auto-flips and recycles are recorded so undo can reverse them
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging

from .cards import Card
from .move import Move, MoveType
from .state import Board, ZoneId

logger = logging.getLogger(__name__)


class DeltaKind(Enum):
    TRANSFER = "transfer"  # Cards moved between waste/tableau/foundation
    DRAW = "draw"  # Stock top turned onto the waste
    RECYCLE = "recycle"  # Waste turned back into the stock


@dataclass(frozen=True)
class MoveDelta:
    """
    Reversible record of one applied move.

    `cards` are the moved cards as they sit after the move.
    `flipped` is set when the source column's new top card was
    turned face up as part of the move.
    """
    kind: DeltaKind
    source: ZoneId
    destination: ZoneId
    cards: tuple[Card, ...]
    flipped: bool = False


def apply_move(board: Board, move: Move) -> MoveDelta:
    """
    Apply a legal move and return its delta.

    The caller must have validated the move against this board.
    """
    if move.move_type == MoveType.DRAW:
        if board.stock.is_empty:
            delta = _recycle(board)
        else:
            delta = _draw(board)
    else:
        delta = _transfer(board, move)

    logger.debug("Applied %s (%s, %d card(s))", move, delta.kind.value, len(delta.cards))
    return delta


def _draw(board: Board) -> MoveDelta:
    card = board.stock.take(1)[0].turned(True)
    board.waste.put([card])
    return MoveDelta(
        kind=DeltaKind.DRAW,
        source=ZoneId.stock(),
        destination=ZoneId.waste(),
        cards=(card,),
    )


def _recycle(board: Board) -> MoveDelta:
    # The first card drawn becomes the next card drawn again
    cards = tuple(card.turned(False) for card in reversed(board.waste.take(len(board.waste))))
    board.stock.put(cards)
    board.recycle_count += 1
    logger.debug("Recycled %d cards into the stock (pass %d)", len(cards), board.recycle_count)
    return MoveDelta(
        kind=DeltaKind.RECYCLE,
        source=ZoneId.waste(),
        destination=ZoneId.stock(),
        cards=cards,
    )


def _transfer(board: Board, move: Move) -> MoveDelta:
    source = board.pile(move.source)
    cards = source.take(move.count)
    board.pile(move.destination).put(cards)

    flipped = False
    if move.move_type in (MoveType.TABLEAU_TO_FOUNDATION, MoveType.TABLEAU_TO_TABLEAU):
        if source.top_card is not None and not source.top_card.face_up:
            source.turn_top(True)
            flipped = True

    return MoveDelta(
        kind=DeltaKind.TRANSFER,
        source=move.source,
        destination=move.destination,
        cards=cards,
        flipped=flipped,
    )


def revert_delta(board: Board, delta: MoveDelta) -> None:
    """Undo a delta previously returned by apply_move() on this board."""
    if delta.kind == DeltaKind.DRAW:
        card = board.waste.take(1)[0]
        board.stock.put([card.turned(False)])
    elif delta.kind == DeltaKind.RECYCLE:
        cards = board.stock.take(len(delta.cards))
        board.waste.put(card.turned(True) for card in reversed(cards))
        board.recycle_count -= 1
    else:
        source = board.pile(delta.source)
        if delta.flipped:
            source.turn_top(False)
        source.put(board.pile(delta.destination).take(len(delta.cards)))

    logger.debug("Reverted %s from %s to %s", delta.kind.value, delta.source, delta.destination)
