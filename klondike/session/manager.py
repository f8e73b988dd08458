"""
Session Manager - Creates and manages game sessions.

A session is one player's game:
- Created when a front end starts a game
- Holds its own GameController (board + history)
- Destroyed when the player leaves, or reaped once idle

Sessions are EPHEMERAL: in-memory only. Saving a game is the front
end's job (serialize a Snapshot, resume with GameController.from_snapshot).
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
import time
import uuid

from ..config import RulesConfig
from ..engine_core.controller import GameController

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """An ephemeral game session."""
    session_id: str
    controller: GameController
    created_at: float
    last_active: float = 0.0

    def touch(self) -> None:
        self.last_active = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions, each with an independent controller
    - Track active sessions
    - Reap idle sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, rules: RulesConfig | None = None):
        self.default_rules = rules or RulesConfig()
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        seed: int | None = None,
        max_recycles: int | None = None,
    ) -> Session:
        """
        Create a new game session and deal its first game.

        Args:
            seed: Seed for the deal (random if omitted)
            max_recycles: Recycle limit; falls back to the manager's rules

        Returns:
            New Session with a dealt board
        """
        rules = self.default_rules
        if max_recycles is not None:
            rules = RulesConfig(max_recycles=max_recycles)

        now = time.time()
        session = Session(
            session_id=str(uuid.uuid4()),
            controller=GameController(rules=rules, seed=seed),
            created_at=now,
            last_active=now,
        )
        self._sessions[session.session_id] = session
        logger.info(
            "Created session %s (seed %d, max_recycles %s)",
            session.session_id,
            session.controller.seed,
            rules.max_recycles,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID, marking it as recently used."""
        session = self._sessions.get(session_id)
        if session:
            session.touch()
        return session

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a session and drop it from memory.

        Returns False if no such session exists.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions that have not been ended."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        End sessions idle for longer than max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        stale = [
            sid for sid, session in self._sessions.items()
            if current_time - session.last_active > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
