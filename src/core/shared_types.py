"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    WAITING_FOR_PLAYERS = "waiting for players"
    IN_PROGRESS = "in progress"
    GAME_OVER = "game over"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Strategy(StrEnum):
    RANDOM = "random"
    GREEDY = "greedy"
    MINIMAX = "minimax"


# Each difficulty level is played by exactly one strategy
STRATEGY_FOR_DIFFICULTY: dict[Difficulty, Strategy] = {
    Difficulty.EASY: Strategy.RANDOM,
    Difficulty.MEDIUM: Strategy.GREEDY,
    Difficulty.HARD: Strategy.MINIMAX,
}


class RejectionReason(StrEnum):
    """Why the rules engine refused a move. Returned as a tag, never raised."""

    GEOMETRY_INVALID = "geometry_invalid"
    OUT_OF_TURN = "out_of_turn"
    EDGE_ALREADY_DRAWN = "edge_already_drawn"
    GAME_ALREADY_OVER = "game_already_over"
