"""Boxes (unit cells) and how they relate to the edges drawn around them"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import Self

from src.dots.edge import Edge, EdgeKey

BoxKey = str  # "x,y" of the top-left dot


@dataclass(frozen=True)
class Box:
    """Identified by its top-left dot. On a grid of n x n dots the boxes run from (0, 0) to (n - 2, n - 2)."""

    x: int
    y: int

    @classmethod
    def from_key(cls, key: BoxKey) -> Self:
        x, y = (int(value) for value in key.split(","))
        return cls(x, y)

    def key(self) -> BoxKey:
        return f"{self.x},{self.y}"

    def top(self) -> Edge:
        return Edge.from_coords(self.x, self.y, self.x + 1, self.y)

    def bottom(self) -> Edge:
        return Edge.from_coords(self.x, self.y + 1, self.x + 1, self.y + 1)

    def left(self) -> Edge:
        return Edge.from_coords(self.x, self.y, self.x, self.y + 1)

    def right(self) -> Edge:
        return Edge.from_coords(self.x + 1, self.y, self.x + 1, self.y + 1)

    def edges(self) -> tuple[Edge, Edge, Edge, Edge]:
        return self.top(), self.bottom(), self.left(), self.right()

    def edge_keys(self) -> tuple[EdgeKey, ...]:
        return tuple(edge.key() for edge in self.edges())


def count_sides(box: Box, drawn: Collection[EdgeKey]) -> int:
    return sum(1 for key in box.edge_keys() if key in drawn)


def is_box_complete(box: Box, drawn: Collection[EdgeKey]) -> bool:
    return all(key in drawn for key in box.edge_keys())


def adjacent_boxes(edge: Edge, grid_size: int) -> list[Box]:
    """
    The boxes sharing this edge as one of their sides.
    ---

    * horizontal edge: the box above and the box below
    * vertical edge: the box to the left and the box to the right

    Edges on the border of the grid only have one neighbouring box.
    NOTE: assumes the edge is valid for this grid size.
    """
    edge = edge.normalized()
    start = edge.p1
    last_box_index = grid_size - 2
    boxes: list[Box] = []

    if edge.is_horizontal:
        if start.y > 0:
            boxes.append(Box(start.x, start.y - 1))
        if start.y <= last_box_index:
            boxes.append(Box(start.x, start.y))
    else:
        if start.x > 0:
            boxes.append(Box(start.x - 1, start.y))
        if start.x <= last_box_index:
            boxes.append(Box(start.x, start.y))
    return boxes


def all_boxes(grid_size: int) -> list[Box]:
    """Every box on the grid, row-major"""
    return [Box(x, y) for y in range(grid_size - 1) for x in range(grid_size - 1)]
