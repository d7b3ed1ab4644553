"""Unit tests for src/ai/random_ai.py"""

from src.ai.random_ai import RandomAI
from src.core.config import AIConfig
from src.dots.moves import available_edges
from src.dots.state import GameState


def test_picks_an_available_edge(new_state: GameState, play) -> None:
    state = play(new_state, [[0, 0, 1, 0], [1, 1, 1, 2]])
    available = available_edges(state)
    for seed in range(20):
        move = RandomAI(state.current_player, AIConfig(rng_seed=seed)).get_move(state)
        assert move in available


def test_same_seed_same_move(new_state: GameState) -> None:
    first = RandomAI(0, AIConfig(rng_seed=42)).get_move(new_state)
    second = RandomAI(0, AIConfig(rng_seed=42)).get_move(new_state)
    assert first == second


def test_moves_spread_over_the_board(new_state: GameState) -> None:
    moves = {RandomAI(0, AIConfig(rng_seed=seed)).get_move(new_state) for seed in range(50)}
    assert len(moves) > 1


def test_unseeded_still_plays(new_state: GameState) -> None:
    assert RandomAI(0).get_move(new_state) in available_edges(new_state)
