"""
Application Settings

Environment configuration for tree generation and logging.
"""

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass
class Settings:
    """Application settings from environment."""

    # Leaf generation
    leaf_amount: int = 1000
    script_size: int = 34

    # Tree expiry
    locktime_value: int = 100
    locktime_type: str = "block"

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            leaf_amount=_env_int("ARKTREE_LEAF_AMOUNT", 1000),
            script_size=_env_int("ARKTREE_SCRIPT_SIZE", 34),
            locktime_value=_env_int("ARKTREE_LOCKTIME_VALUE", 100),
            locktime_type=os.getenv("ARKTREE_LOCKTIME_TYPE", "block"),
            log_level=os.getenv("ARKTREE_LOG_LEVEL", "WARNING").upper(),
        )
