"""
A dot on the grid

(placed in its own module as edges and boxes both need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Point:
    """
    Grid coordinate. `x` is the column, `y` the row, (0, 0) is the top-left dot.

    NOTE: field order is (y, x) so that the generated ordering is row-major.
    """

    y: int
    x: int

    @classmethod
    def at(cls, x: int, y: int) -> Point:
        """Construct with the usual (x, y) argument order."""
        return cls(y=y, x=x)

    def is_within_bounds(self, grid_size: int) -> bool:
        return (0 <= self.x < grid_size) and (0 <= self.y < grid_size)

    def manhattan_distance(self, other: Point) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)
