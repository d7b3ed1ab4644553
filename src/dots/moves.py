"""
Move enumeration: which edges can still be drawn.

The traversal order is fixed (horizontal edges row by row, then vertical edges row by row), so strategies that take
"the first match" or draw from a seeded RNG give reproducible results.
"""

from collections.abc import Iterator
from functools import lru_cache

from src.dots.edge import Edge, EdgeKey
from src.dots.state import GameState


def horizontal_edges(grid_size: int) -> Iterator[Edge]:
    for y in range(grid_size):
        for x in range(grid_size - 1):
            yield Edge.from_coords(x, y, x + 1, y)


def vertical_edges(grid_size: int) -> Iterator[Edge]:
    for y in range(grid_size - 1):
        for x in range(grid_size):
            yield Edge.from_coords(x, y, x, y + 1)


@lru_cache(maxsize=None)
def _keyed_edges(grid_size: int) -> tuple[tuple[Edge, EdgeKey], ...]:
    # the traversal never changes for a given grid size, and the search asks for it at every node
    edges = [*horizontal_edges(grid_size), *vertical_edges(grid_size)]
    return tuple((edge, edge.key()) for edge in edges)


def all_edges(grid_size: int) -> list[Edge]:
    """Every edge of the grid, already in normalized form"""
    return [edge for edge, _ in _keyed_edges(grid_size)]


def available_edges(state: GameState) -> list[Edge]:
    """Edges not drawn yet. Returned as a list, so it can be iterated as often as needed."""
    return [
        edge
        for edge, key in _keyed_edges(state.grid_size)
        if key not in state.edge_keys
    ]
