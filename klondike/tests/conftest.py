"""
Pytest fixtures for Klondike tests.

Cards are written as short strings: "Ah", "10c", "Ks". A leading "#"
marks a face-down card, e.g. "#5d".
"""

import pytest

from ..engine_core.cards import Card, Deck, Rank, Suit
from ..engine_core.controller import GameController
from ..engine_core.state import Board, FOUNDATION_SUITS, Pile, Snapshot, GameOutcome

_RANKS = {"A": Rank.ACE, "J": Rank.JACK, "Q": Rank.QUEEN, "K": Rank.KING}
_SUITS = {"c": Suit.CLUBS, "d": Suit.DIAMONDS, "h": Suit.HEARTS, "s": Suit.SPADES}


def card(text: str) -> Card:
    """Parse "Qh" / "#10s" into a Card."""
    face_up = not text.startswith("#")
    text = text.lstrip("#")
    rank_text, suit_text = text[:-1], text[-1]
    rank = _RANKS.get(rank_text) or Rank(int(rank_text))
    return Card(rank=rank, suit=_SUITS[suit_text], face_up=face_up)


def pile(text: str = "") -> Pile:
    """Parse a space-separated pile, bottom card first."""
    return Pile([card(t) for t in text.split()])


def make_board(
    tableau: dict[int, str] | None = None,
    foundations: dict[int, str] | None = None,
    stock: str = "",
    waste: str = "",
    recycle_count: int = 0,
) -> Board:
    """Build a board from pile strings. Missing zones are empty."""
    board = Board(stock=pile(stock), waste=pile(waste), recycle_count=recycle_count)
    for index, text in (tableau or {}).items():
        board.tableau[index] = pile(text)
    for index, text in (foundations or {}).items():
        board.foundations[index] = pile(text)
    return board


def missing_cards(board: Board) -> list[Card]:
    """Cards of the standard deck not yet placed on the board, face down."""
    placed = {c.identity for c in board.all_cards()}
    return [c for c in Deck.standard() if c.identity not in placed]


def snapshot_of(board: Board) -> Snapshot:
    return Snapshot.of(board, outcome=GameOutcome.IN_PROGRESS, can_undo=False)


def full_foundation(suit: Suit) -> str:
    symbol = suit.symbol
    return " ".join(f"{r.label}{symbol}" for r in Rank)


@pytest.fixture
def game() -> GameController:
    """A game dealt from seed 42."""
    return GameController(seed=42)


@pytest.fixture
def won_board() -> Board:
    """Every foundation complete."""
    return make_board(foundations={
        i: full_foundation(suit) for i, suit in enumerate(FOUNDATION_SUITS)
    })


@pytest.fixture
def blocked_kings_board() -> Board:
    """
    Stock and waste empty, no empty column, no top card playable:
    four Kings plus 5c, 5s and 9c on top, everything else face down.
    """
    board = make_board(tableau={
        0: "Kc",
        1: "Kd",
        2: "Kh",
        3: "Ks",
        4: "5c",
        5: "5s",
        6: "9c",
    })
    buried = missing_cards(board)
    board.tableau[0].cards[:0] = buried
    return board
