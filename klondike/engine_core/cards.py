"""
Cards and Deck - The 52-card universe.

Cards are immutable values. Turning a card over produces a new Card,
so a card can be shared freely between snapshots.

A Deck can only be built from the standard 52-card set (optionally
shuffled), so every deck holds each (rank, suit) pair exactly once.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
import logging
import random

logger = logging.getLogger(__name__)


class Color(Enum):
    RED = "red"
    BLACK = "black"


class Suit(Enum):
    """Card suits, in foundation order."""
    CLUBS = "clubs"
    DIAMONDS = "diamonds"
    HEARTS = "hearts"
    SPADES = "spades"

    @property
    def color(self) -> Color:
        if self in (Suit.DIAMONDS, Suit.HEARTS):
            return Color.RED
        return Color.BLACK

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


_SUIT_SYMBOLS = {
    Suit.CLUBS: "c",
    Suit.DIAMONDS: "d",
    Suit.HEARTS: "h",
    Suit.SPADES: "s",
}


class Rank(IntEnum):
    """Card ranks. Ace is low."""
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    @property
    def label(self) -> str:
        return _RANK_LABELS.get(self, str(int(self)))


_RANK_LABELS = {
    Rank.ACE: "A",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}


@dataclass(frozen=True)
class Card:
    """
    A playing card.

    Identity is the (rank, suit) pair; face_up is the orientation
    the card currently has on the board.
    """
    rank: Rank
    suit: Suit
    face_up: bool = False

    @property
    def color(self) -> Color:
        return self.suit.color

    @property
    def identity(self) -> tuple[Rank, Suit]:
        return (self.rank, self.suit)

    def turned(self, face_up: bool) -> Card:
        """Return this card with the given orientation."""
        if face_up == self.face_up:
            return self
        return Card(rank=self.rank, suit=self.suit, face_up=face_up)

    def __str__(self) -> str:
        return f"{self.rank.label}{self.suit.symbol}"


class Deck:
    """
    An ordered 52-card deck. The last card is the top of the deck.

    Use Deck.standard() or Deck.shuffled(); there is no way to build
    a deck from arbitrary cards.
    """

    __slots__ = ("_cards",)

    def __init__(self, _cards: tuple[Card, ...]):
        self._cards = _cards

    @classmethod
    def standard(cls) -> Deck:
        """All 52 cards, face down, suit by suit from Ace to King."""
        return cls(tuple(
            Card(rank=rank, suit=suit)
            for suit in Suit
            for rank in Rank
        ))

    @classmethod
    def shuffled(cls, rng: random.Random) -> Deck:
        """A uniformly random permutation drawn from the given source."""
        cards = list(cls.standard()._cards)
        rng.shuffle(cards)
        return cls(tuple(cards))

    @property
    def cards(self) -> tuple[Card, ...]:
        return self._cards

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self):
        return iter(self._cards)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._cards == other._cards

    def __hash__(self):
        return hash(self._cards)


def new_seed() -> int:
    """A fresh 64-bit seed from the OS entropy source."""
    return random.SystemRandom().getrandbits(64)


def new_shuffled_deck(seed: int) -> Deck:
    """
    Shuffle a standard deck with a seeded generator.

    The generator is local to this call, so the same seed always
    gives the same order and no shared random state is touched.
    """
    rng = random.Random(seed)
    deck = Deck.shuffled(rng)
    logger.debug("Shuffled deck with seed %d", seed)
    return deck
