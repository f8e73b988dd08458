"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through:
- Created when a player starts a game
- Holds its own GameController
- Destroyed when the player leaves or the session goes stale

Sessions are never persisted.
"""

from .manager import SessionManager, Session

__all__ = [
    "SessionManager",
    "Session",
]
