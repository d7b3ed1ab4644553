"""
Boundary layer data model.

The store keeps games as GameModel, the service reads and writes them, and the rules engine converts them
to and from its own GameState. Only plain lists, dicts and ints in here, so any layer can hold one.
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
Line = list[int]  # [x1, y1, x2, y2], normalized
BoxKey = str  # "x,y" of the top-left dot
PlayerIndex = int
PlayerName = str


@dataclass
class GameModel:
    """Transport-safe representation of a dots & boxes game used between API, Service, DB, and domain layers."""

    grid_size: int
    player_count: int
    lines: list[Line] = field(default_factory=list)
    boxes: dict[BoxKey, PlayerIndex] = field(default_factory=dict)
    scores: list[int] = field(default_factory=list)
    current_player: PlayerIndex = 0
    started: bool = False
    game_over: bool = False
    winner: Optional[PlayerIndex] = None
    # seat order: the name at index i plays as player i
    players: list[PlayerName] = field(default_factory=list)
