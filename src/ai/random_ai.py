"""Easy opponent: any undrawn edge, chosen uniformly at random."""

from typing import Optional

from src.ai.base import BaseAI
from src.dots.edge import Edge
from src.dots.state import GameState


class RandomAI(BaseAI):
    def select_move(self, state: GameState) -> Optional[Edge]:
        return self.get_random_element(self.get_valid_moves(state))
