"""
The rules engine: applies one move to a GameState and returns the next GameState.

It is a pure value transformer. An invalid move is not an exceptional situation here: it is classified and
handed back as a `MoveRejected` value, and the caller keeps the state it already had.
"""

from collections.abc import Collection
from dataclasses import dataclass, replace
from typing import Any, Optional

from src.core.shared_types import RejectionReason
from src.dots.box import Box, adjacent_boxes, is_box_complete
from src.dots.edge import Edge, EdgeKey, coerce_edge, is_valid_edge, total_possible_edges
from src.dots.state import GameState, determine_winner


@dataclass(frozen=True)
class MoveRejected:
    reason: RejectionReason


MoveResult = GameState | MoveRejected


def completed_boxes(edge: Edge, grid_size: int, drawn: Collection[EdgeKey]) -> list[Box]:
    """Boxes next to `edge` that have all four sides in `drawn` (which should already include `edge`)."""
    return [box for box in adjacent_boxes(edge, grid_size) if is_box_complete(box, drawn)]


def is_game_over(state: GameState) -> bool:
    return state.drawn_count == total_possible_edges(state.grid_size)


def check_move(state: GameState, edge: Any, player_index: int) -> Optional[RejectionReason]:
    """
    Preconditions of a move, in the order they are checked
    ---

    1. the game has not ended
    2. it is this player's turn
    3. the edge is a unit segment on this board
    4. the edge has not been drawn yet (in either direction)

    Returns None when the move is allowed.
    """
    if state.game_over:
        return RejectionReason.GAME_ALREADY_OVER

    if state.current_player != player_index:
        return RejectionReason.OUT_OF_TURN

    if not is_valid_edge(edge, state.grid_size):
        return RejectionReason.GEOMETRY_INVALID

    # validated above, so coercion cannot fail here
    candidate = coerce_edge(edge)
    assert candidate is not None
    if state.has_edge(candidate):
        return RejectionReason.EDGE_ALREADY_DRAWN

    return None


def apply_move(state: GameState, edge: Any, player_index: int) -> MoveResult:
    """
    Attempt a move
    -----

    1. draw the (normalized) edge
    2. look at the one or two boxes next to it, using the drawn edges INCLUDING the new one
    3. every box that is now complete and had no owner yet goes to the mover: +1 point each
    4. completed at least one box? the mover plays again. Otherwise the turn passes on.
    5. all edges drawn? the game is over and the winner is decided.
    """
    reason = check_move(state, edge, player_index)
    if reason is not None:
        return MoveRejected(reason)

    candidate = coerce_edge(edge)
    assert candidate is not None
    new_edge = candidate.normalized()

    edge_keys = state.edge_keys | {new_edge.key()}
    edges = state.edges + (new_edge,)

    owners = dict(state.owners)
    scores = list(state.scores)
    boxes_won = 0
    for box in completed_boxes(new_edge, state.grid_size, edge_keys):
        if box in owners:
            continue
        owners[box] = player_index
        scores[player_index] += 1
        boxes_won += 1

    next_player = (
        player_index if boxes_won > 0 else (player_index + 1) % state.player_count
    )

    game_over = len(edge_keys) == total_possible_edges(state.grid_size)
    winner = determine_winner(scores) if game_over else None

    return replace(
        state,
        edges=edges,
        edge_keys=edge_keys,
        owners=owners,
        scores=tuple(scores),
        current_player=next_player,
        game_over=game_over,
        winner=winner,
    )


def boxes_won_by(state: GameState, edge: Edge) -> int:
    """How many boxes the current player would complete by drawing `edge`. Zero for a move that would be rejected."""
    result = apply_move(state, edge, state.current_player)
    if isinstance(result, MoveRejected):
        return 0
    return result.scores[state.current_player] - state.scores[state.current_player]
