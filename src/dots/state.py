"""
Snapshot of a single game.

A GameState is never changed in place: the rules engine hands back a new value after every accepted move.
Ownership of the current value belongs to whoever manages the game (the service and its repository).
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Optional, Self

from src.core.config import MAX_GRID_SIZE, MAX_PLAYERS, MIN_GRID_SIZE, MIN_PLAYERS
from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.dots.box import Box, all_boxes, is_box_complete
from src.dots.edge import Edge, EdgeKey, is_valid_edge, total_possible_edges


def is_valid_grid_size(grid_size: int) -> bool:
    return (
        isinstance(grid_size, int)
        and not isinstance(grid_size, bool)
        and MIN_GRID_SIZE <= grid_size <= MAX_GRID_SIZE
    )


def is_valid_player_count(player_count: int) -> bool:
    return (
        isinstance(player_count, int)
        and not isinstance(player_count, bool)
        and MIN_PLAYERS <= player_count <= MAX_PLAYERS
    )


def determine_winner(scores: Sequence[int]) -> Optional[int]:
    """Index of the single highest score. None when two or more players share the top score (a draw)."""
    best = max(scores)
    if list(scores).count(best) > 1:
        return None
    return list(scores).index(best)


@dataclass(frozen=True)
class GameState:
    grid_size: int
    player_count: int
    edges: tuple[Edge, ...] = ()  # normalized, in the order they were drawn
    edge_keys: frozenset[EdgeKey] = frozenset()
    # read-only view, left out of the hash (equal states still hash equal: same edges, same owners)
    owners: Mapping[Box, int] = field(default_factory=dict, hash=False)
    scores: tuple[int, ...] = ()
    current_player: int = 0
    started: bool = False
    game_over: bool = False
    winner: Optional[int] = None  # None while playing, and for a draw

    def __post_init__(self) -> None:
        if not isinstance(self.owners, MappingProxyType):
            object.__setattr__(self, "owners", MappingProxyType(dict(self.owners)))

    @property
    def drawn_count(self) -> int:
        return len(self.edge_keys)

    @property
    def is_draw(self) -> bool:
        return self.game_over and self.winner is None

    def has_edge(self, edge: Edge) -> bool:
        return edge.key() in self.edge_keys

    def box_owner(self, box: Box) -> Optional[int]:
        return self.owners.get(box)

    # --- CONVERSION FROM/TO THE TRANSPORT MODEL ---
    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a GameState from the information the Service layer actually has"""

        # Validation
        if not is_valid_grid_size(model.grid_size):
            raise GameStateError(
                f"Invalid grid size: {model.grid_size!r}. Must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}."
            )
        if not is_valid_player_count(model.player_count):
            raise GameStateError(
                f"Invalid player count: {model.player_count!r}. Must be between {MIN_PLAYERS} and {MAX_PLAYERS}."
            )
        if len(model.scores) != model.player_count:
            raise GameStateError(
                f"Expected {model.player_count} scores, got {len(model.scores)}."
            )
        if not 0 <= model.current_player < model.player_count:
            raise GameStateError(f"Invalid current player: {model.current_player}.")

        for line in model.lines:
            if not is_valid_edge(line, model.grid_size):
                raise GameStateError(f"Invalid line in game record: {line!r}")
        edges = tuple(Edge.from_line(line).normalized() for line in model.lines)
        edge_keys = frozenset(edge.key() for edge in edges)
        if len(edge_keys) != len(edges):
            raise GameStateError("Game record contains the same line twice.")

        try:
            owners = {Box.from_key(key): owner for key, owner in model.boxes.items()}
        except ValueError as error:
            raise GameStateError(f"Invalid box key in game record: {error}") from error
        for box, owner in owners.items():
            if not (0 <= box.x < model.grid_size - 1 and 0 <= box.y < model.grid_size - 1):
                raise GameStateError(f"Box {box.key()!r} is not on the board.")
            if not 0 <= owner < model.player_count:
                raise GameStateError(f"Box {box.key()!r} owned by unknown player {owner}.")

        for box in all_boxes(model.grid_size):
            complete = is_box_complete(box, edge_keys)
            if complete != (box in owners):
                raise GameStateError(
                    f"Box {box.key()!r} is {'complete' if complete else 'not complete'} but "
                    f"{'has no owner' if complete else 'has an owner'}."
                )

        # every point on the scoreboard is a box owned by that player
        owned_counts = [
            sum(1 for owner in owners.values() if owner == player)
            for player in range(model.player_count)
        ]
        if owned_counts != list(model.scores):
            raise GameStateError(
                f"Scores {model.scores} do not match the owned boxes {owned_counts}."
            )

        game_over = len(edge_keys) == total_possible_edges(model.grid_size)
        if game_over != model.game_over:
            raise GameStateError(
                f"Game over flag ({model.game_over}) does not match the {len(edge_keys)} lines drawn."
            )

        expected_winner = determine_winner(model.scores) if game_over else None
        if model.winner != expected_winner:
            raise GameStateError(
                f"Winner {model.winner!r} does not match the scores {model.scores} (expected {expected_winner!r})."
            )

        return cls(
            grid_size=model.grid_size,
            player_count=model.player_count,
            edges=edges,
            edge_keys=edge_keys,
            owners=owners,
            scores=tuple(model.scores),
            current_player=model.current_player,
            started=model.started,
            game_over=model.game_over,
            winner=model.winner,
        )

    def to_model(self, players: Optional[list[str]] = None) -> GameModel:
        """Encode back into a format the Service layer uses. Player names are bookkeeping of the service: just passed along."""
        return GameModel(
            grid_size=self.grid_size,
            player_count=self.player_count,
            lines=[edge.to_line() for edge in self.edges],
            boxes={box.key(): owner for box, owner in self.owners.items()},
            scores=list(self.scores),
            current_player=self.current_player,
            started=self.started,
            game_over=self.game_over,
            winner=self.winner,
            players=list(players or []),
        )


def create_initial_state(grid_size: int, player_count: int) -> GameState:
    """Empty board, all scores zero, first player to move."""
    if not is_valid_grid_size(grid_size):
        raise GameStateError(
            f"Cannot create new game. Grid size {grid_size!r} not in [{MIN_GRID_SIZE}, {MAX_GRID_SIZE}]."
        )
    if not is_valid_player_count(player_count):
        raise GameStateError(
            f"Cannot create new game. Player count {player_count!r} not in [{MIN_PLAYERS}, {MAX_PLAYERS}]."
        )
    return GameState(
        grid_size=grid_size,
        player_count=player_count,
        scores=(0,) * player_count,
    )


def start_game(state: GameState) -> GameState:
    return replace(state, started=True)
