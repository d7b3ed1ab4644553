"""
Hard opponent: depth-limited minimax with alpha-beta pruning.

Search depth
---
* EXHAUSTIVE_SEARCH_THRESHOLD (12) or fewer edges left: search until the board is full.
* otherwise: MAX_SEARCH_DEPTH (6) plies.

Turn order
---
Completing a box gives the mover another turn, so plies do not simply alternate between maximizing and minimizing.
A node maximizes when it is the AI's turn in that node's state, and minimizes otherwise.

Search board
---
The tree is walked on a `SearchBoard`: a mutable copy of the GameState that draws and undraws edges in place
(make/unmake) instead of building a new GameState per node. Positions reached through different move orders
are looked up in a transposition table that lives for one `select_move()` call.

The search is deterministic: no RNG is involved, and ties at the root go to the first edge in enumeration order.
"""

import logging
import math
from enum import Enum
from functools import lru_cache
from typing import Optional

from src.ai.base import BaseAI
from src.core.config import EXHAUSTIVE_SEARCH_THRESHOLD, MAX_SEARCH_DEPTH
from src.dots.box import adjacent_boxes
from src.dots.edge import Edge
from src.dots.moves import all_edges
from src.dots.state import GameState

logger = logging.getLogger(__name__)


def search_depth(remaining_edges: int) -> int:
    if remaining_edges <= EXHAUSTIVE_SEARCH_THRESHOLD:
        return remaining_edges
    return MAX_SEARCH_DEPTH


@lru_cache(maxsize=None)
def _edge_boxes(grid_size: int) -> tuple[tuple[int, ...], ...]:
    """For every edge (by its index in the enumeration order), the indices of its neighbouring boxes (row-major)."""
    width = grid_size - 1
    return tuple(
        tuple(box.y * width + box.x for box in adjacent_boxes(edge, grid_size))
        for edge in all_edges(grid_size)
    )


class SearchBoard:
    """
    Mutable mirror of a GameState, only as detailed as the search needs
    ----

    * drawn edges: a bitmask over the enumeration order (bit i set = edge i drawn)
    * number of sides drawn per box
    * scores and the player to move

    `make_move()` follows the same rules as `apply_move()`. `unmake_move()` reverts the last one.
    """

    def __init__(self, state: GameState) -> None:
        self.grid_size = state.grid_size
        self.player_count = state.player_count
        self.edges = all_edges(state.grid_size)
        self.edge_boxes = _edge_boxes(state.grid_size)

        self.drawn = 0
        self.sides = [0] * (state.grid_size - 1) ** 2
        for index, edge in enumerate(self.edges):
            if state.has_edge(edge):
                self.drawn |= 1 << index
                for box in self.edge_boxes[index]:
                    self.sides[box] += 1

        self.remaining = len(self.edges) - state.drawn_count
        self.scores = list(state.scores)
        self.current_player = state.current_player
        # (edge index, boxes captured, player who moved)
        self._undo: list[tuple[int, int, int]] = []

    def available(self) -> list[int]:
        """Indices of the undrawn edges, in enumeration order."""
        return [index for index in range(len(self.edges)) if not self.drawn >> index & 1]

    def captures(self, index: int) -> int:
        return sum(1 for box in self.edge_boxes[index] if self.sides[box] == 3)

    def opens_box(self, index: int) -> bool:
        """Drawing the edge gives some box its third side."""
        return any(self.sides[box] == 2 for box in self.edge_boxes[index])

    def make_move(self, index: int) -> None:
        captured = 0
        for box in self.edge_boxes[index]:
            self.sides[box] += 1
            if self.sides[box] == 4:
                captured += 1

        self._undo.append((index, captured, self.current_player))
        self.drawn |= 1 << index
        self.remaining -= 1
        if captured:
            self.scores[self.current_player] += captured
        else:
            self.current_player = (self.current_player + 1) % self.player_count

    def unmake_move(self) -> None:
        index, captured, player = self._undo.pop()
        for box in self.edge_boxes[index]:
            self.sides[box] -= 1
        self.drawn &= ~(1 << index)
        self.remaining += 1
        self.scores[player] -= captured
        self.current_player = player


class Bound(Enum):
    EXACT = "exact"
    LOWER = "lower"
    UPPER = "upper"


class MinimaxAI(BaseAI):
    nodes_visited: int = 0

    def select_move(self, state: GameState) -> Optional[Edge]:
        board = SearchBoard(state)
        valid_moves = board.available()
        if not valid_moves:
            return None

        depth = search_depth(len(valid_moves))
        self.nodes_visited = 0
        # (drawn edges, player to move, depth left) -> (bound, value minus the evaluation of that node)
        self._table: dict[tuple[int, int, int], tuple[Bound, float]] = {}

        best_value = -math.inf
        best_index: Optional[int] = None
        # root in plain enumeration order, so that ties keep going to the first edge
        for index in valid_moves:
            board.make_move(index)
            # Passing the best value so far as alpha is safe for the choice made here:
            # a child only comes back above alpha with its exact value.
            value = self._minimax(board, depth - 1, best_value, math.inf)
            board.unmake_move()

            # strictly greater: on a tie the edge found first is kept
            if value > best_value:
                best_value = value
                best_index = index

        best_move = None if best_index is None else board.edges[best_index]
        logger.debug(
            "Minimax (player %d, depth %d) picked %s with value %s after %d nodes",
            self.player_index,
            depth,
            best_move,
            best_value,
            self.nodes_visited,
        )
        return best_move

    def _evaluate(self, board: SearchBoard) -> float:
        """Same measure as `evaluate_position()`: own boxes minus everybody else's."""
        own_score = board.scores[self.player_index]
        return own_score - (sum(board.scores) - own_score)

    def _ordered_moves(self, board: SearchBoard) -> list[int]:
        """Captures first, then edges that open nothing, then edges handing a box to the next player."""

        def priority(index: int) -> int:
            if board.captures(index):
                return 0
            if board.opens_box(index):
                return 2
            return 1

        # sorted() is stable: enumeration order within each group
        return sorted(board.available(), key=priority)

    def _minimax(self, board: SearchBoard, depth: int, alpha: float, beta: float) -> float:
        self.nodes_visited += 1

        evaluation = self._evaluate(board)
        if depth == 0 or board.remaining == 0:
            return evaluation

        # What is left to win from a position does not depend on the score so far:
        # the table stores values relative to the evaluation of the node.
        key = (board.drawn, board.current_player, depth)
        entry = self._table.get(key)
        if entry is not None:
            bound, relative_value = entry
            value = evaluation + relative_value
            if bound is Bound.EXACT:
                return value
            if bound is Bound.LOWER and value >= beta:
                return value
            if bound is Bound.UPPER and value <= alpha:
                return value

        original_alpha, original_beta = alpha, beta
        maximizing = board.current_player == self.player_index
        best = -math.inf if maximizing else math.inf
        for index in self._ordered_moves(board):
            board.make_move(index)
            value = self._minimax(board, depth - 1, alpha, beta)
            board.unmake_move()

            if maximizing:
                best = max(best, value)
                alpha = max(alpha, best)
            else:
                best = min(best, value)
                beta = min(beta, best)
            if beta <= alpha:
                break

        if best <= original_alpha:
            bound = Bound.UPPER
        elif best >= original_beta:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT
        self._table[key] = (bound, best - evaluation)
        return best
