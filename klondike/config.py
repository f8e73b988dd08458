"""
Configuration - Rule options and process settings.

Rule options live on RulesConfig and are passed to each controller.
Process settings come from the environment:

    KLONDIKE_ENV            deployment name (default: development)
    KLONDIKE_LOG_LEVEL      logging level name (default: INFO)
    KLONDIKE_MAX_RECYCLES   stock recycle limit (default: unlimited)
    KLONDIKE_SESSION_TTL    idle seconds before a session is reaped (default: 3600)
    ALLOWED_ORIGINS         comma-separated CORS origins (default: *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _parse_recycles(value: str | None) -> int | None:
    if value is None or value.strip() == "":
        return None
    limit = int(value)
    if limit < 0:
        raise ValueError(f"KLONDIKE_MAX_RECYCLES must be >= 0, got {limit}")
    return limit


@dataclass(frozen=True)
class RulesConfig:
    """
    House rules for a game.

    max_recycles: how many times the waste may be turned back into
    the stock. None means no limit; 2 gives the classic three passes.
    """
    max_recycles: int | None = None

    def __post_init__(self):
        if self.max_recycles is not None and self.max_recycles < 0:
            raise ValueError("max_recycles must be None or >= 0")

    def recycle_allowed(self, recycles_done: int) -> bool:
        return self.max_recycles is None or recycles_done < self.max_recycles

    @classmethod
    def from_env(cls) -> RulesConfig:
        return cls(max_recycles=_parse_recycles(os.getenv("KLONDIKE_MAX_RECYCLES")))


@dataclass(frozen=True)
class Settings:
    """Process-level settings for the HTTP service and CLI."""
    env: str = "development"
    log_level: str = "INFO"
    session_ttl: int = 3600
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    rules: RulesConfig = field(default_factory=RulesConfig)

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("KLONDIKE_ENV", "development"),
            log_level=os.getenv("KLONDIKE_LOG_LEVEL", "INFO").upper(),
            session_ttl=int(os.getenv("KLONDIKE_SESSION_TTL", "3600")),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
            rules=RulesConfig.from_env(),
        )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once, at the process edge."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
