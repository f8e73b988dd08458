"""
History - Append-only log of applied move deltas, for undo.
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .reducer import MoveDelta, revert_delta
from .state import Board


class EmptyHistoryError(LookupError):
    """Undo was requested with no recorded moves."""


@dataclass
class History:
    """
    Stack of deltas, most recent last. Unbounded; cleared on a new game.
    """
    _deltas: list[MoveDelta] = field(default_factory=list)

    def push(self, delta: MoveDelta) -> None:
        self._deltas.append(delta)

    def undo(self, board: Board) -> MoveDelta:
        """Pop the latest delta and revert it on the board."""
        if not self._deltas:
            raise EmptyHistoryError("No moves to undo")
        delta = self._deltas.pop()
        revert_delta(board, delta)
        return delta

    def clear(self) -> None:
        self._deltas.clear()

    @property
    def can_undo(self) -> bool:
        return bool(self._deltas)

    @property
    def last(self) -> MoveDelta | None:
        return self._deltas[-1] if self._deltas else None

    def __len__(self) -> int:
        return len(self._deltas)
