"""
Game State - The Klondike board and its read-only snapshot.

Design principles:
- The Board is mutable, and owned by exactly one GameController
- Callers only ever receive a Snapshot (frozen, serializable)
- The deal builds the board from a full Deck, so the 52-card
  invariant holds by construction
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator
import logging

from .cards import Card, Deck, Suit

logger = logging.getLogger(__name__)

TABLEAU_COLUMNS = 7
FOUNDATION_SUITS: tuple[Suit, ...] = tuple(Suit)


class GameOutcome(Enum):
    """Derived status of a board, recomputed after every command."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    STUCK = "stuck"


class ZoneKind(Enum):
    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


_ZONE_SIZES = {
    ZoneKind.STOCK: 1,
    ZoneKind.WASTE: 1,
    ZoneKind.FOUNDATION: len(FOUNDATION_SUITS),
    ZoneKind.TABLEAU: TABLEAU_COLUMNS,
}


@dataclass(frozen=True)
class ZoneId:
    """
    Identifies one zone of the board.

    String form is "stock", "waste", "foundation:<n>" or "tableau:<n>".
    Foundations may also be named by suit, e.g. "foundation:hearts".
    """
    kind: ZoneKind
    index: int = 0

    def __post_init__(self):
        if not 0 <= self.index < _ZONE_SIZES[self.kind]:
            raise ValueError(f"No {self.kind.value} zone with index {self.index}")

    @classmethod
    def stock(cls) -> ZoneId:
        return cls(ZoneKind.STOCK)

    @classmethod
    def waste(cls) -> ZoneId:
        return cls(ZoneKind.WASTE)

    @classmethod
    def foundation(cls, index: int) -> ZoneId:
        return cls(ZoneKind.FOUNDATION, index)

    @classmethod
    def foundation_for(cls, suit: Suit) -> ZoneId:
        return cls(ZoneKind.FOUNDATION, FOUNDATION_SUITS.index(suit))

    @classmethod
    def tableau(cls, index: int) -> ZoneId:
        return cls(ZoneKind.TABLEAU, index)

    @classmethod
    def parse(cls, text: str) -> ZoneId:
        """Parse the string form. Raises ValueError on bad input."""
        name, _, suffix = text.strip().lower().partition(":")
        try:
            kind = ZoneKind(name)
        except ValueError:
            raise ValueError(f"Unknown zone: {text!r}") from None

        if kind in (ZoneKind.STOCK, ZoneKind.WASTE):
            if suffix:
                raise ValueError(f"Zone {name} takes no index: {text!r}")
            return cls(kind)

        if not suffix:
            raise ValueError(f"Zone {name} needs an index: {text!r}")
        if kind == ZoneKind.FOUNDATION and not suffix.isdigit():
            try:
                return cls.foundation_for(Suit(suffix))
            except ValueError:
                raise ValueError(f"Unknown foundation: {text!r}") from None
        try:
            index = int(suffix)
        except ValueError:
            raise ValueError(f"Bad zone index: {text!r}") from None
        return cls(kind, index)

    @property
    def suit(self) -> Suit | None:
        """The suit a foundation zone accepts."""
        if self.kind != ZoneKind.FOUNDATION:
            return None
        return FOUNDATION_SUITS[self.index]

    def __str__(self) -> str:
        if self.kind in (ZoneKind.STOCK, ZoneKind.WASTE):
            return self.kind.value
        return f"{self.kind.value}:{self.index}"


@dataclass
class Pile:
    """
    An ordered run of cards. The last card is the top.
    """
    cards: list[Card] = field(default_factory=list)

    @property
    def top_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    @property
    def is_empty(self) -> bool:
        return len(self.cards) == 0

    @property
    def face_up_count(self) -> int:
        """Number of face-up cards at the top of the pile."""
        count = 0
        for card in reversed(self.cards):
            if not card.face_up:
                break
            count += 1
        return count

    def __len__(self) -> int:
        return len(self.cards)

    def peek(self, count: int) -> tuple[Card, ...]:
        """The top `count` cards, bottom-most first."""
        if count <= 0:
            return ()
        return tuple(self.cards[-count:])

    def take(self, count: int) -> tuple[Card, ...]:
        """Remove and return the top `count` cards, bottom-most first."""
        taken = self.peek(count)
        if taken:
            del self.cards[-count:]
        return taken

    def put(self, cards) -> None:
        self.cards.extend(cards)

    def turn_top(self, face_up: bool) -> None:
        self.cards[-1] = self.cards[-1].turned(face_up)


@dataclass
class Board:
    """
    The complete board: stock, waste, four foundations, seven columns.

    Foundation i holds FOUNDATION_SUITS[i].
    """
    stock: Pile = field(default_factory=Pile)
    waste: Pile = field(default_factory=Pile)
    foundations: list[Pile] = field(
        default_factory=lambda: [Pile() for _ in FOUNDATION_SUITS]
    )
    tableau: list[Pile] = field(
        default_factory=lambda: [Pile() for _ in range(TABLEAU_COLUMNS)]
    )
    recycle_count: int = 0

    def pile(self, zone: ZoneId) -> Pile:
        """Get the pile behind a zone id."""
        if zone.kind == ZoneKind.STOCK:
            return self.stock
        if zone.kind == ZoneKind.WASTE:
            return self.waste
        if zone.kind == ZoneKind.FOUNDATION:
            return self.foundations[zone.index]
        return self.tableau[zone.index]

    def all_cards(self) -> Iterator[Card]:
        yield from self.stock.cards
        yield from self.waste.cards
        for pile in self.foundations:
            yield from pile.cards
        for pile in self.tableau:
            yield from pile.cards


def deal(deck: Deck) -> Board:
    """
    Lay out a new game from a deck.

    Column i receives i + 1 cards with only the last one face up.
    The 24 cards left over form the stock, face down.
    """
    remaining = list(deck.cards)
    board = Board()

    for column in range(TABLEAU_COLUMNS):
        pile = board.tableau[column]
        for row in range(column + 1):
            card = remaining.pop()
            pile.cards.append(card.turned(row == column))
        logger.debug("Dealt column %d: top %s", column, pile.top_card)

    board.stock.cards = [card.turned(False) for card in remaining]
    logger.debug("Stock initialized with %d cards", len(board.stock))
    return board


class InvariantViolation(AssertionError):
    """The board no longer holds exactly the 52-card set."""


def check_invariants(board: Board) -> None:
    """
    Verify card conservation: every card of the standard deck appears
    exactly once across all zones.
    """
    seen: set = set()
    for card in board.all_cards():
        if card.identity in seen:
            raise InvariantViolation(f"Duplicate card on board: {card}")
        seen.add(card.identity)
    expected = {card.identity for card in Deck.standard()}
    missing = expected - seen
    if missing:
        raise InvariantViolation(f"{len(missing)} cards missing from board")


def _card_dict(card: Card) -> dict[str, Any]:
    return {
        "rank": int(card.rank),
        "suit": card.suit.value,
        "face_up": card.face_up,
    }


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of a game, suitable for rendering or serialization.
    """
    stock: tuple[Card, ...]
    waste: tuple[Card, ...]
    foundations: tuple[tuple[Card, ...], ...]
    tableau: tuple[tuple[Card, ...], ...]
    outcome: GameOutcome
    can_undo: bool
    move_count: int = 0
    recycle_count: int = 0
    seed: int | None = None

    @classmethod
    def of(
        cls,
        board: Board,
        outcome: GameOutcome,
        can_undo: bool,
        move_count: int = 0,
        seed: int | None = None,
    ) -> Snapshot:
        return cls(
            stock=tuple(board.stock.cards),
            waste=tuple(board.waste.cards),
            foundations=tuple(tuple(p.cards) for p in board.foundations),
            tableau=tuple(tuple(p.cards) for p in board.tableau),
            outcome=outcome,
            can_undo=can_undo,
            move_count=move_count,
            recycle_count=board.recycle_count,
            seed=seed,
        )

    def zone(self, zone: ZoneId) -> tuple[Card, ...]:
        if zone.kind == ZoneKind.STOCK:
            return self.stock
        if zone.kind == ZoneKind.WASTE:
            return self.waste
        if zone.kind == ZoneKind.FOUNDATION:
            return self.foundations[zone.index]
        return self.tableau[zone.index]

    @property
    def layout(self) -> tuple:
        """Zone contents only, for comparing two positions."""
        return (self.stock, self.waste, self.foundations, self.tableau, self.recycle_count)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stock": [_card_dict(c) for c in self.stock],
            "waste": [_card_dict(c) for c in self.waste],
            "foundations": [[_card_dict(c) for c in pile] for pile in self.foundations],
            "tableau": [[_card_dict(c) for c in pile] for pile in self.tableau],
            "outcome": self.outcome.value,
            "can_undo": self.can_undo,
            "move_count": self.move_count,
            "recycle_count": self.recycle_count,
            "seed": self.seed,
        }
