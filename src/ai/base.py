"""
Base class for the computer opponents.

Every opponent treats the rules engine as a simulation oracle: it calls `apply_move()` on the state it is given
and inspects the states that come back. The state passed in is never modified.
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import Optional, TypeVar

from src.core.config import AIConfig
from src.dots.edge import Edge
from src.dots.moves import available_edges
from src.dots.state import GameState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseAI(ABC):
    """Abstract base class for all move-selection strategies"""

    def __init__(self, player_index: int, config: Optional[AIConfig] = None) -> None:
        self.player_index = player_index
        self.config = config or AIConfig()

        # Per-instance RNG used for all stochastic behaviour. A fixed rng_seed makes random and greedy play reproducible;
        # without one, the RNG is seeded from the OS and two opponents will not repeat each other.
        self.rng_seed = self.config.rng_seed
        self.rng = random.Random(self.rng_seed)

    def get_move(self, state: GameState) -> Optional[Edge]:
        """
        Entry point used by the service
        ----

        1. no edges left (the game is over)? -> None
        2. roll for `config.randomness`: on a hit, play a uniformly random edge
        3. otherwise, let the strategy decide
        """
        valid_moves = self.get_valid_moves(state)
        if not valid_moves:
            return None

        if self.should_pick_random_move():
            move = self.get_random_element(valid_moves)
            logger.debug("Player %d plays a random move: %s", self.player_index, move)
            return move

        move = self.select_move(state)
        logger.debug(
            "Player %d (%s) selects %s", self.player_index, type(self).__name__, move
        )
        return move

    @abstractmethod
    def select_move(self, state: GameState) -> Optional[Edge]:
        """Pick an edge from `available_edges(state)`, or None when there is none."""

    def evaluate_position(self, state: GameState) -> float:
        """Own boxes minus the boxes of every other player combined."""
        own_score = state.scores[self.player_index]
        other_scores = sum(
            score for index, score in enumerate(state.scores) if index != self.player_index
        )
        return own_score - other_scores

    def get_valid_moves(self, state: GameState) -> list[Edge]:
        return available_edges(state)

    def should_pick_random_move(self) -> bool:
        if not self.config.randomness:
            return False
        return self.rng.random() < self.config.randomness

    def get_random_element(self, items: list[T]) -> Optional[T]:
        if not items:
            return None
        return self.rng.choice(items)
