"""
Medium opponent: take what is on offer, never offer anything yourself.

Looks one move ahead only. Moves are considered in the fixed enumeration order.
"""

from typing import Optional

from src.ai.base import BaseAI
from src.dots.box import all_boxes, count_sides
from src.dots.edge import Edge
from src.dots.rules import MoveRejected, apply_move, boxes_won_by
from src.dots.state import GameState


def leaves_box_open(state: GameState) -> bool:
    """True if some box without an owner has exactly three sides drawn: the next player can take it."""
    return any(
        count_sides(box, state.edge_keys) == 3 and state.box_owner(box) is None
        for box in all_boxes(state.grid_size)
    )


def is_safe_move(state: GameState, edge: Edge) -> bool:
    """A safe move does not leave a three-sided box behind for the opponent."""
    after = apply_move(state, edge, state.current_player)
    if isinstance(after, MoveRejected):
        return False
    return not leaves_box_open(after)


class GreedyAI(BaseAI):
    def select_move(self, state: GameState) -> Optional[Edge]:
        """
        Priority order
        ---

        1. the FIRST edge (in enumeration order) that completes a box
        2. a random edge among the safe ones
        3. a random edge among all of them: every option gives something away
        """
        valid_moves = self.get_valid_moves(state)
        if not valid_moves:
            return None

        # NOTE: deliberately the first scoring edge found, not the one scoring the most boxes
        for edge in valid_moves:
            if boxes_won_by(state, edge) > 0:
                return edge

        safe_moves = [edge for edge in valid_moves if is_safe_move(state, edge)]
        if safe_moves:
            return self.get_random_element(safe_moves)

        return self.get_random_element(valid_moves)
