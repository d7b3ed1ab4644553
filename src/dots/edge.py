"""
Edges: the unit segments players draw between two neighbouring dots.

An `Edge` is built straight from caller input and can therefore still be illegal (diagonal, too long, off the board).
Geometry is checked by `is_valid_edge()`, and the rules engine only ever stores normalized, validated edges.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Optional, Self

from src.dots.point import Point

EdgeKey = str  # "x1,y1-x2,y2" of the normalized edge


@dataclass(frozen=True)
class Edge:
    """Segment from p1 to p2, in whatever direction it was drawn."""

    p1: Point
    p2: Point

    @classmethod
    def from_coords(cls, x1: int, y1: int, x2: int, y2: int) -> Self:
        return cls(Point.at(x1, y1), Point.at(x2, y2))

    @classmethod
    def from_line(cls, line: Sequence[int]) -> Self:
        """
        Line notation
        ---
        ---
        Flat list of four coordinates, [x1, y1, x2, y2], as sent by clients and stored in the GameModel.

        examples:
        * [0, 0, 1, 0]: top-left horizontal edge
        * [2, 1, 2, 2]: vertical edge in the third column, second row of boxes
        """
        x1, y1, x2, y2 = line
        return cls.from_coords(x1, y1, x2, y2)

    @classmethod
    def from_key(cls, key: EdgeKey) -> Self:
        first, second = key.split("-")
        x1, y1 = (int(value) for value in first.split(","))
        x2, y2 = (int(value) for value in second.split(","))
        return cls.from_coords(x1, y1, x2, y2)

    def to_line(self) -> list[int]:
        return [self.p1.x, self.p1.y, self.p2.x, self.p2.y]

    def reverse(self) -> Edge:
        return Edge(self.p2, self.p1)

    def normalized(self) -> Edge:
        """Smaller point (row-major) first, so the direction it was drawn in no longer matters."""
        if self.p2 < self.p1:
            return self.reverse()
        return self

    def key(self) -> EdgeKey:
        edge = self.normalized()
        return f"{edge.p1.x},{edge.p1.y}-{edge.p2.x},{edge.p2.y}"

    @property
    def is_horizontal(self) -> bool:
        return self.p1.y == self.p2.y

    @property
    def is_vertical(self) -> bool:
        return self.p1.x == self.p2.x


def normalize(edge: Edge) -> Edge:
    return edge.normalized()


def edge_key(edge: Edge) -> EdgeKey:
    return edge.key()


def _is_integer(value: Any) -> bool:
    # bool is an Integral too, but True/False are never coordinates
    return isinstance(value, Integral) and not isinstance(value, bool)


def coerce_edge(raw: Any) -> Optional[Edge]:
    """
    Turn untrusted input into an Edge.

    Accepts an Edge or a sequence of four integers. Returns None for anything malformed
    (wrong length, strings, floats, booleans, None...). Says nothing about the board: see `is_valid_edge()`.
    """
    if isinstance(raw, Edge):
        coordinates = [raw.p1.x, raw.p1.y, raw.p2.x, raw.p2.y]
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        coordinates = list(raw)
    else:
        return None

    if len(coordinates) != 4 or not all(_is_integer(value) for value in coordinates):
        return None
    return Edge.from_line([int(value) for value in coordinates])


def is_valid_edge(raw: Any, grid_size: int) -> bool:
    """Both dots on the board and exactly one unit apart along exactly one axis."""
    edge = coerce_edge(raw)
    if edge is None:
        return False

    if not (edge.p1.is_within_bounds(grid_size) and edge.p2.is_within_bounds(grid_size)):
        return False

    # Manhattan distance of 1 rules out diagonals, zero-length and longer segments in one go
    return edge.p1.manhattan_distance(edge.p2) == 1


def total_possible_edges(grid_size: int) -> int:
    """
    Horizontal edges: grid_size rows with (grid_size - 1) edges each.
    Vertical edges: the same, transposed.
    """
    return 2 * grid_size * (grid_size - 1)
