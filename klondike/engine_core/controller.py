"""
Game Controller - The command surface of the engine.

The controller owns one live board and its history. Each command runs
to completion and returns a CommandResult holding a fresh Snapshot:

    game = GameController(seed=42)
    result = game.attempt_move("tableau:6", "foundation:hearts")
    if not result.ok:
        print(result.error.reason, result.error.message)
    print(result.snapshot.outcome)

Controllers are plain objects: create as many as you need. None of
them shares state, and none performs any locking; a controller used
from several threads must be guarded by the caller.
"""

from __future__ import annotations
import logging

from ..config import RulesConfig
from .cards import new_seed, new_shuffled_deck
from .history import EmptyHistoryError, History
from .move import CommandResult, Move, MoveRejected, RejectReason, UndoUnavailable
from .move_generator import MoveGenerator
from .reducer import apply_move
from .state import (
    Board,
    GameOutcome,
    Pile,
    Snapshot,
    ZoneId,
    check_invariants,
    deal,
)
from .validator import MoveValidator

logger = logging.getLogger(__name__)

FULL_FOUNDATION = 13


def evaluate_outcome(board: Board, generator: MoveGenerator) -> GameOutcome:
    """
    Derive the status of a board.

    WON when every foundation is complete. STUCK when nothing useful
    can be played, counting the stock draw (or recycle) as a move.
    """
    if all(len(pile) == FULL_FOUNDATION for pile in board.foundations):
        return GameOutcome.WON
    if not generator.productive_moves(board):
        return GameOutcome.STUCK
    return GameOutcome.IN_PROGRESS


def _as_zone(zone: ZoneId | str) -> ZoneId:
    if isinstance(zone, ZoneId):
        return zone
    return ZoneId.parse(zone)


class GameController:
    """
    Runs one game of Klondike.

    Args:
        rules: House rules (recycle limit). Defaults to unlimited recycles.
        seed: Seed for the first deal. A random one is picked if omitted.
    """

    def __init__(self, rules: RulesConfig | None = None, seed: int | None = None):
        self._setup(rules)
        self.new_game(seed)

    @classmethod
    def from_snapshot(cls, snapshot: Snapshot, rules: RulesConfig | None = None) -> GameController:
        """
        Resume a game from a snapshot (e.g. one loaded from a save file).

        History is not part of a snapshot, so the resumed game starts
        with nothing to undo. Raises InvariantViolation if the snapshot
        does not hold exactly the 52 cards.
        """
        board = Board(
            stock=Pile(list(snapshot.stock)),
            waste=Pile(list(snapshot.waste)),
            foundations=[Pile(list(cards)) for cards in snapshot.foundations],
            tableau=[Pile(list(cards)) for cards in snapshot.tableau],
            recycle_count=snapshot.recycle_count,
        )
        check_invariants(board)

        game = cls.__new__(cls)
        game._setup(rules, board=board, seed=snapshot.seed)
        game._outcome = evaluate_outcome(board, game._generator)
        logger.info("Resumed game with seed %s", snapshot.seed)
        return game

    # =========================================================================
    # Commands
    # =========================================================================

    def new_game(self, seed: int | None = None) -> CommandResult:
        """Shuffle and deal a fresh board. Clears the history."""
        if seed is None:
            seed = new_seed()
        self._seed = seed
        self._board = deal(new_shuffled_deck(seed))
        self._history.clear()
        logger.info("New game dealt with seed %d", seed)
        self._refresh_outcome()
        return CommandResult.success(self.snapshot())

    def attempt_move(
        self,
        source: ZoneId | str,
        destination: ZoneId | str,
        count: int = 1,
    ) -> CommandResult:
        """
        Move `count` cards from the top of `source` onto `destination`.

        Zones may be ZoneIds or their string form ("waste", "tableau:3",
        "foundation:hearts"). A malformed zone string raises ValueError.
        """
        source = _as_zone(source)
        destination = _as_zone(destination)
        move = Move.between(source, destination, count)
        if move is None:
            return self._rejected(MoveRejected(
                reason=RejectReason.DESTINATION_NOT_ELIGIBLE,
                message=f"Cannot move from {source} to {destination}",
            ))
        return self.apply(move)

    def apply(self, move: Move) -> CommandResult:
        """Validate and apply a move. The board is untouched on rejection."""
        rejection = self._validator.validate(self._board, move)
        if rejection:
            return self._rejected(rejection)

        delta = apply_move(self._board, move)
        self._history.push(delta)
        self._refresh_outcome()
        return CommandResult.success(self.snapshot(), delta=delta)

    def draw(self) -> CommandResult:
        """Turn the stock top onto the waste, or recycle an empty stock."""
        return self.apply(Move.draw())

    def undo(self) -> CommandResult:
        """Revert the most recent move."""
        try:
            delta = self._history.undo(self._board)
        except EmptyHistoryError:
            logger.debug("Undo requested with empty history")
            return CommandResult.failure(self.snapshot(), UndoUnavailable())
        self._refresh_outcome()
        return CommandResult.success(self.snapshot(), delta=delta)

    # =========================================================================
    # Queries
    # =========================================================================

    def snapshot(self) -> Snapshot:
        return Snapshot.of(
            self._board,
            outcome=self._outcome,
            can_undo=self._history.can_undo,
            move_count=len(self._history),
            seed=self._seed,
        )

    def legal_moves(self) -> list[Move]:
        return self._generator.generate(self._board)

    @property
    def outcome(self) -> GameOutcome:
        return self._outcome

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    # =========================================================================
    # Internals
    # =========================================================================

    def _setup(
        self,
        rules: RulesConfig | None,
        board: Board | None = None,
        seed: int | None = None,
    ) -> None:
        self.rules = rules or RulesConfig()
        self._validator = MoveValidator(rules=self.rules)
        self._generator = MoveGenerator(rules=self.rules)
        self._history = History()
        self._board = board or Board()
        self._seed = seed
        self._outcome = GameOutcome.IN_PROGRESS

    def _rejected(self, rejection: MoveRejected) -> CommandResult:
        logger.debug("Move rejected (%s): %s", rejection.reason.value, rejection.message)
        return CommandResult.failure(self.snapshot(), rejection)

    def _refresh_outcome(self) -> None:
        previous = self._outcome
        self._outcome = evaluate_outcome(self._board, self._generator)
        if self._outcome != previous and self._outcome != GameOutcome.IN_PROGRESS:
            logger.info("Game %s after %d move(s)", self._outcome.value, len(self._history))
