"""
Game and AI settings.

Plain module constants. The ones that are worth tuning per deployment can be overridden through environment variables.
"""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from src.core.shared_types import Difficulty


def _int_from_env(name: str, default: int) -> int:
    value = os.environ.get(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring %s=%r: not an integer. Using default %d.", name, value, default
        )
        return default


# --- BOARD ---
MIN_GRID_SIZE = 3  # 3x3 dots = 4 boxes
MAX_GRID_SIZE = 10  # 10x10 dots = 81 boxes
MIN_PLAYERS = 2
MAX_PLAYERS = 4
DEFAULT_GRID_SIZE = _int_from_env("DOTS_DEFAULT_GRID_SIZE", 4)
DEFAULT_PLAYERS = _int_from_env("DOTS_DEFAULT_PLAYERS", 2)
MAX_PLAYER_NAME_LENGTH = 20

# --- SEARCH ---
# With this many (or fewer) undrawn edges left, minimax searches to the end of the game.
EXHAUSTIVE_SEARCH_THRESHOLD = _int_from_env("DOTS_EXHAUSTIVE_SEARCH_THRESHOLD", 12)
MAX_SEARCH_DEPTH = _int_from_env("DOTS_MAX_SEARCH_DEPTH", 6)

# --- GAME STORE ---
GAME_TTL_SECONDS = _int_from_env("DOTS_GAME_TTL_SECONDS", 60 * 60)
FINISHED_GAME_TTL_SECONDS = _int_from_env("DOTS_FINISHED_GAME_TTL_SECONDS", 5 * 60)

# --- LOGGING ---
LOG_LEVEL = os.environ.get("DOTS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AIConfig(BaseModel):
    """Settings for a single computer opponent."""

    difficulty: Difficulty = Difficulty.MEDIUM
    rng_seed: Optional[int] = None
    # chance of ignoring the strategy and playing a uniformly random move instead
    randomness: Optional[float] = Field(None, ge=0, le=1)
