"""
Tests for move validation.

Tests:
- Foundation rules (suit, rank, single card)
- Tableau rules (descending, alternating color, Kings on empty columns)
- Face-up run selection
- Stock draws and recycle limits
"""

import pytest

from ..config import RulesConfig
from ..engine_core.move import Move, MoveType, RejectReason
from ..engine_core.state import ZoneId
from ..engine_core.validator import MoveValidator, is_descending_run, is_legal, validate
from .conftest import card, make_board

CLUBS, DIAMONDS, HEARTS, SPADES = range(4)


def reason(board, move, rules=None):
    rejection = validate(board, move, rules)
    return rejection.reason if rejection else None


class TestFoundationMoves:
    """Tests for moves onto a foundation."""

    def test_ace_on_empty_foundation(self):
        board = make_board(waste="Ah")
        assert is_legal(board, Move.waste_to_foundation(HEARTS))

    def test_wrong_suit(self):
        board = make_board(waste="Ah")
        assert reason(board, Move.waste_to_foundation(CLUBS)) == RejectReason.WRONG_SUIT

    def test_non_ace_on_empty_foundation(self):
        board = make_board(waste="2h")
        assert reason(board, Move.waste_to_foundation(HEARTS)) == RejectReason.WRONG_RANK

    def test_next_rank(self):
        board = make_board(waste="3h", foundations={HEARTS: "Ah 2h"})
        assert is_legal(board, Move.waste_to_foundation(HEARTS))

    def test_skipped_rank(self):
        board = make_board(waste="3h", foundations={HEARTS: "Ah"})
        assert reason(board, Move.waste_to_foundation(HEARTS)) == RejectReason.WRONG_RANK

    def test_empty_waste(self):
        board = make_board()
        assert reason(board, Move.waste_to_foundation(HEARTS)) == RejectReason.EMPTY_SOURCE_SELECTION

    def test_tableau_top_to_foundation(self):
        board = make_board(tableau={0: "#5c As"})
        assert is_legal(board, Move.tableau_to_foundation(0, SPADES))

    def test_only_single_cards(self):
        board = make_board(tableau={0: "2s Ah"}, foundations={HEARTS: ""})
        move = Move(MoveType.TABLEAU_TO_FOUNDATION, ZoneId.tableau(0), ZoneId.foundation(HEARTS), 2)
        assert reason(board, move) == RejectReason.DESTINATION_NOT_ELIGIBLE


class TestTableauMoves:
    """Tests for moves onto a tableau column."""

    def test_descending_alternating(self):
        board = make_board(waste="Qh", tableau={0: "Ks"})
        assert is_legal(board, Move.waste_to_tableau(0))

    def test_same_color(self):
        board = make_board(waste="Qh", tableau={0: "Kd"})
        assert reason(board, Move.waste_to_tableau(0)) == RejectReason.WRONG_COLOR_SEQUENCE

    def test_wrong_rank(self):
        board = make_board(waste="Jh", tableau={0: "Ks"})
        assert reason(board, Move.waste_to_tableau(0)) == RejectReason.WRONG_RANK

    def test_king_on_empty_column(self):
        board = make_board(waste="Ks")
        assert is_legal(board, Move.waste_to_tableau(3))

    def test_non_king_on_empty_column(self):
        board = make_board(waste="Qs")
        assert reason(board, Move.waste_to_tableau(3)) == RejectReason.WRONG_RANK

    def test_waste_moves_one_card(self):
        board = make_board(waste="Qh Js", tableau={0: "Ks"})
        move = Move(MoveType.WASTE_TO_TABLEAU, ZoneId.waste(), ZoneId.tableau(0), 2)
        assert reason(board, move) == RejectReason.INVALID_SUFFIX_RANGE

    def test_multi_card_run(self):
        board = make_board(tableau={0: "#2c Ks Qh Jc", 1: "Kc"})
        assert is_legal(board, Move.tableau_to_tableau(0, 1, 2))

    def test_whole_run_to_empty_column(self):
        board = make_board(tableau={0: "#2c Ks Qh Jc"})
        assert is_legal(board, Move.tableau_to_tableau(0, 2, 3))

    def test_run_must_match_destination(self):
        board = make_board(tableau={0: "#2c Ks Qh Jc", 1: "Kc"})
        assert reason(board, Move.tableau_to_tableau(0, 1, 1)) == RejectReason.WRONG_RANK


class TestSelection:
    """Tests for which cards may be picked up from a column."""

    def test_more_than_face_up(self):
        board = make_board(tableau={0: "#2c Ks Qh Jc"})
        assert reason(board, Move.tableau_to_tableau(0, 2, 4)) == RejectReason.INVALID_SUFFIX_RANGE

    def test_zero_cards(self):
        board = make_board(tableau={0: "Ks", 1: "Kc"})
        assert reason(board, Move.tableau_to_tableau(0, 1, 0)) == RejectReason.EMPTY_SOURCE_SELECTION

    def test_empty_column(self):
        board = make_board(tableau={1: "Kc"})
        assert reason(board, Move.tableau_to_tableau(0, 1)) == RejectReason.EMPTY_SOURCE_SELECTION

    def test_broken_run(self):
        """Face-up cards that are not a valid run cannot move together."""
        board = make_board(tableau={0: "Ks Qs"})
        assert reason(board, Move.tableau_to_tableau(0, 1, 2)) == RejectReason.INVALID_SUFFIX_RANGE

    def test_same_column(self):
        board = make_board(tableau={0: "Ks"})
        assert reason(board, Move.tableau_to_tableau(0, 0)) == RejectReason.DESTINATION_NOT_ELIGIBLE


class TestDraw:
    """Tests for the stock draw and recycling."""

    def test_draw_from_stock(self):
        board = make_board(stock="#Ah")
        assert is_legal(board, Move.draw())

    @pytest.mark.parametrize("count", [0, 3])
    def test_draw_takes_one_card(self, count):
        board = make_board(stock="#Ah #2c #3d")
        move = Move(MoveType.DRAW, ZoneId.stock(), ZoneId.waste(), count)
        assert reason(board, move) == RejectReason.INVALID_SUFFIX_RANGE

    def test_nothing_left(self):
        board = make_board()
        assert reason(board, Move.draw()) == RejectReason.EMPTY_SOURCE_SELECTION

    def test_recycle_unlimited_by_default(self):
        board = make_board(waste="Ah 2c", recycle_count=50)
        assert is_legal(board, Move.draw())

    def test_recycle_limit_reached(self):
        board = make_board(waste="Ah 2c", recycle_count=2)
        rules = RulesConfig(max_recycles=2)
        assert reason(board, Move.draw(), rules) == RejectReason.STOCK_EMPTY_NO_RECYCLE_ALLOWED

    def test_recycle_limit_not_reached(self):
        board = make_board(waste="Ah 2c", recycle_count=1)
        validator = MoveValidator(rules=RulesConfig(max_recycles=2))
        assert validator.is_legal(board, Move.draw())


class TestMoveShapes:
    """Tests for move classification."""

    def test_between_classifies(self):
        move = Move.between(ZoneId.tableau(2), ZoneId.tableau(5), 3)
        assert move == Move.tableau_to_tableau(2, 5, 3)
        assert Move.between(ZoneId.stock(), ZoneId.waste()) == Move.draw()

    @pytest.mark.parametrize("source,destination", [
        (ZoneId.foundation(0), ZoneId.tableau(0)),
        (ZoneId.waste(), ZoneId.stock()),
        (ZoneId.tableau(0), ZoneId.waste()),
        (ZoneId.stock(), ZoneId.tableau(1)),
    ])
    def test_unsupported_shapes(self, source, destination):
        assert Move.between(source, destination) is None

    def test_mislabelled_move_rejected(self):
        board = make_board(waste="Ah")
        move = Move(MoveType.DRAW, ZoneId.waste(), ZoneId.stock())
        assert reason(board, move) == RejectReason.DESTINATION_NOT_ELIGIBLE

    def test_rejection_carries_message_and_move(self):
        board = make_board(waste="2h")
        move = Move.waste_to_foundation(HEARTS)
        rejection = validate(board, move)
        assert rejection.move == move
        assert "2h" in rejection.message


class TestDescendingRun:
    def test_valid_run(self):
        assert is_descending_run([card("Ks"), card("Qh"), card("Jc"), card("10d")])

    def test_face_down_card_breaks_run(self):
        assert not is_descending_run([card("#Ks"), card("Qh")])

    def test_gap_breaks_run(self):
        assert not is_descending_run([card("Ks"), card("Jh")])
