"""
Tests for cards, the deck, the shuffle and the deal.
"""

from collections import Counter

import pytest

from ..engine_core.cards import Card, Color, Deck, Rank, Suit, new_shuffled_deck
from ..engine_core.state import (
    Board,
    InvariantViolation,
    TABLEAU_COLUMNS,
    ZoneId,
    ZoneKind,
    check_invariants,
    deal,
)
from .conftest import card, make_board


class TestCard:
    """Tests for the card value type."""

    def test_suit_colors(self):
        assert Suit.HEARTS.color == Color.RED
        assert Suit.DIAMONDS.color == Color.RED
        assert Suit.CLUBS.color == Color.BLACK
        assert Suit.SPADES.color == Color.BLACK

    def test_turned_returns_new_card(self):
        """Cards are immutable; turning produces a new value."""
        down = Card(Rank.QUEEN, Suit.HEARTS)
        up = down.turned(True)

        assert up.face_up
        assert not down.face_up
        assert up.identity == down.identity
        assert down.turned(False) is down

    def test_str(self):
        assert str(card("10h")) == "10h"
        assert str(card("Ks")) == "Ks"
        assert str(card("Ad")) == "Ad"


class TestDeck:
    """Tests for deck construction and shuffling."""

    def test_standard_deck_is_complete(self):
        deck = Deck.standard()
        assert len(deck) == 52
        assert len({c.identity for c in deck}) == 52
        assert not any(c.face_up for c in deck)

    def test_same_seed_same_order(self):
        assert new_shuffled_deck(42) == new_shuffled_deck(42)

    def test_different_seeds_differ(self):
        assert new_shuffled_deck(1) != new_shuffled_deck(2)

    def test_shuffle_is_a_permutation(self):
        deck = new_shuffled_deck(1234)
        assert Counter(c.identity for c in deck) == Counter(c.identity for c in Deck.standard())


class TestDeal:
    """Tests for the initial layout."""

    def test_tableau_shape(self):
        """Column i holds i + 1 cards, only the last face up."""
        board = deal(new_shuffled_deck(42))

        for i in range(TABLEAU_COLUMNS):
            column = board.tableau[i]
            assert len(column) == i + 1
            assert column.top_card.face_up
            assert not any(c.face_up for c in column.cards[:-1])

    def test_stock_waste_foundations(self):
        board = deal(new_shuffled_deck(42))

        assert len(board.stock) == 24
        assert not any(c.face_up for c in board.stock.cards)
        assert board.waste.is_empty
        assert all(p.is_empty for p in board.foundations)
        assert board.recycle_count == 0

    def test_deal_holds_all_cards(self):
        check_invariants(deal(new_shuffled_deck(99)))

    def test_deal_takes_from_top_of_deck(self):
        """The first card dealt is the last card of the deck."""
        deck = new_shuffled_deck(5)
        board = deal(deck)
        assert board.tableau[0].top_card.identity == deck.cards[-1].identity


class TestInvariants:
    """Tests for the card conservation check."""

    def test_duplicate_detected(self):
        board = deal(new_shuffled_deck(3))
        board.waste.put([board.stock.cards[0]])

        with pytest.raises(InvariantViolation, match="Duplicate"):
            check_invariants(board)

    def test_missing_detected(self):
        board = make_board(tableau={0: "Kh"})

        with pytest.raises(InvariantViolation, match="missing"):
            check_invariants(board)


class TestZoneId:
    """Tests for zone identifiers."""

    @pytest.mark.parametrize("text,expected", [
        ("stock", ZoneId.stock()),
        ("waste", ZoneId.waste()),
        ("tableau:0", ZoneId.tableau(0)),
        ("TABLEAU:6", ZoneId.tableau(6)),
        ("foundation:3", ZoneId.foundation(3)),
        ("foundation:hearts", ZoneId.foundation_for(Suit.HEARTS)),
    ])
    def test_parse(self, text, expected):
        assert ZoneId.parse(text) == expected

    @pytest.mark.parametrize("text", [
        "tableau:7",
        "foundation:4",
        "foundation:stars",
        "tableau",
        "stock:1",
        "pile:2",
        "tableau:x",
    ])
    def test_parse_rejects_bad_input(self, text):
        with pytest.raises(ValueError):
            ZoneId.parse(text)

    def test_str_round_trip(self):
        for zone in (ZoneId.stock(), ZoneId.tableau(4), ZoneId.foundation(1)):
            assert ZoneId.parse(str(zone)) == zone

    def test_foundation_suit(self):
        assert ZoneId.foundation_for(Suit.SPADES).suit == Suit.SPADES
        assert ZoneId.tableau(0).suit is None
        assert ZoneId.foundation(0).kind == ZoneKind.FOUNDATION

    def test_board_pile_lookup(self):
        board = Board()
        assert board.pile(ZoneId.stock()) is board.stock
        assert board.pile(ZoneId.tableau(3)) is board.tableau[3]
        assert board.pile(ZoneId.foundation(2)) is board.foundations[2]
