"""
Picks the opponent implementation for a difficulty level.

Key idea: strategy pattern. The three opponents are interchangeable behind BaseAI, and the mapping below
is the only place that knows which class plays which level.

Usage:
    ai = create_ai(Difficulty.HARD, player_index=1)
    edge = ai.get_move(state)

    # or in one call
    edge = select_move(state, Strategy.GREEDY, ai_player_index=1)
"""

import logging
from typing import Optional

from src.ai.base import BaseAI
from src.ai.greedy_ai import GreedyAI
from src.ai.minimax_ai import MinimaxAI
from src.ai.random_ai import RandomAI
from src.core.config import AIConfig
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import STRATEGY_FOR_DIFFICULTY, Difficulty, Strategy
from src.dots.edge import Edge
from src.dots.state import GameState

logger = logging.getLogger(__name__)


# --- STRATEGY PATTERN: OPPONENTS ---
AI_CLASSES: dict[Strategy, type[BaseAI]] = {
    Strategy.RANDOM: RandomAI,
    Strategy.GREEDY: GreedyAI,
    Strategy.MINIMAX: MinimaxAI,
}


def resolve_strategy(strategy: Strategy | Difficulty | str) -> Strategy:
    """Accepts a strategy name ('minimax') as well as the difficulty that maps onto it ('hard')."""
    if isinstance(strategy, Strategy):
        return strategy
    if isinstance(strategy, Difficulty):
        return STRATEGY_FOR_DIFFICULTY[strategy]

    name = str(strategy).strip().lower()
    if name in {option.value for option in Strategy}:
        return Strategy(name)
    if name in {option.value for option in Difficulty}:
        return STRATEGY_FOR_DIFFICULTY[Difficulty(name)]
    raise InvalidRequestError(
        f"Unknown AI strategy {strategy!r}. Pick one from {', '.join([*Strategy, *Difficulty])}."
    )


def create_ai(
    strategy: Strategy | Difficulty | str,
    player_index: int,
    config: Optional[AIConfig] = None,
) -> BaseAI:
    resolved = resolve_strategy(strategy)
    ai_class = AI_CLASSES[resolved]
    logger.debug("Creating %s for player %d", ai_class.__name__, player_index)
    return ai_class(player_index, config)


def create_from_config(player_index: int, config: AIConfig) -> BaseAI:
    return create_ai(config.difficulty, player_index, config)


def select_move(
    state: GameState,
    strategy: Strategy | Difficulty | str,
    ai_player_index: int,
    rng_seed: Optional[int] = None,
) -> Optional[Edge]:
    """One-shot move selection. Returns None when no edge is left to draw."""
    resolved = resolve_strategy(strategy)
    difficulty = next(
        level for level, played_by in STRATEGY_FOR_DIFFICULTY.items() if played_by == resolved
    )
    config = AIConfig(difficulty=difficulty, rng_seed=rng_seed)
    return create_ai(resolved, ai_player_index, config).get_move(state)
