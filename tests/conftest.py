"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from collections.abc import Callable, Iterator, Sequence

import pytest

from src.core.models import GameModel
from src.db.memory_repository import InMemoryGameRepository
from src.dots.rules import MoveRejected, apply_move
from src.dots.state import GameState, create_initial_state, start_game

Line = list[int]

# Every edge of a 3x3 grid, in enumeration order (horizontal rows first, then vertical rows)
ALL_LINES_3X3: list[Line] = [
    [0, 0, 1, 0],
    [1, 0, 2, 0],
    [0, 1, 1, 1],
    [1, 1, 2, 1],
    [0, 2, 1, 2],
    [1, 2, 2, 2],
    [0, 0, 0, 1],
    [1, 0, 1, 1],
    [2, 0, 2, 1],
    [0, 1, 0, 2],
    [1, 1, 1, 2],
    [2, 1, 2, 2],
]

# The outline of a 3x3 grid: every box has exactly two sides, no box can be completed with one line
BORDER_LINES_3X3: list[Line] = [
    [0, 0, 1, 0],
    [1, 0, 2, 0],
    [0, 2, 1, 2],
    [1, 2, 2, 2],
    [0, 0, 0, 1],
    [2, 0, 2, 1],
    [0, 1, 0, 2],
    [2, 1, 2, 2],
]


@pytest.fixture
def new_state() -> GameState:
    """Started 3x3 game for two players, nothing drawn yet."""
    return start_game(create_initial_state(3, 2))


@pytest.fixture
def play() -> Callable[[GameState, Sequence[Line]], GameState]:
    """Play the given lines one after the other, each by whoever is to move. Fails the test on any rejection."""

    def _play(state: GameState, lines: Sequence[Line]) -> GameState:
        for line in lines:
            result = apply_move(state, line, state.current_player)
            assert not isinstance(result, MoveRejected), f"{line} rejected: {result}"
            state = result
        return state

    return _play


@pytest.fixture
def board_with_lines() -> Callable[..., GameState]:
    """
    Build a started game straight from a list of drawn lines.
    Only for positions where none of the lines completes a box (all scores stay zero).
    """

    def _board(lines: Sequence[Line], grid_size: int = 3, current_player: int = 0) -> GameState:
        model = GameModel(
            grid_size=grid_size,
            player_count=2,
            lines=[list(line) for line in lines],
            scores=[0, 0],
            current_player=current_player,
            started=True,
        )
        return GameState.from_model(model)

    return _board


@pytest.fixture
def finished_state(new_state: GameState, play) -> GameState:
    """
    Full 3x3 game played in enumeration order.
    Player 1 takes the two top boxes, player 0 the two bottom ones: a 2-2 draw.
    """
    return play(new_state, ALL_LINES_3X3)


@pytest.fixture
def memory_repository() -> Iterator[InMemoryGameRepository]:
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo._games.clear()


@pytest.fixture
def all_lines_3x3() -> list[Line]:
    return [list(line) for line in ALL_LINES_3X3]


@pytest.fixture
def border_lines_3x3() -> list[Line]:
    return [list(line) for line in BORDER_LINES_3X3]
