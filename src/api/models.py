"""Requests and Response models"""

from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.config import (
    DEFAULT_GRID_SIZE,
    DEFAULT_PLAYERS,
    MAX_GRID_SIZE,
    MAX_PLAYER_NAME_LENGTH,
    MAX_PLAYERS,
    MIN_GRID_SIZE,
    MIN_PLAYERS,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Difficulty, Status

BoxKey = str
PlayerName = str


def _validate_player_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise InvalidRequestError("Player name cannot be empty.")
    if len(name) > MAX_PLAYER_NAME_LENGTH:
        raise InvalidRequestError(
            f"Player name can be at most {MAX_PLAYER_NAME_LENGTH} characters long."
        )
    return name


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    player_name: str
    grid_size: int = DEFAULT_GRID_SIZE
    player_count: int = DEFAULT_PLAYERS

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)

    @field_validator("grid_size")
    @classmethod
    def validate_grid_size(cls, value: int) -> int:
        if not MIN_GRID_SIZE <= value <= MAX_GRID_SIZE:
            raise InvalidRequestError(
                f"Invalid grid size (must be {MIN_GRID_SIZE}-{MAX_GRID_SIZE})."
            )
        return value

    @field_validator("player_count")
    @classmethod
    def validate_player_count(cls, value: int) -> int:
        if not MIN_PLAYERS <= value <= MAX_PLAYERS:
            raise InvalidRequestError(
                f"Invalid player count (must be {MIN_PLAYERS}-{MAX_PLAYERS})."
            )
        return value


class JoinGameRequest(BaseModel):
    game_id: UUID
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)


class StartGameRequest(BaseModel):
    game_id: UUID
    player_name: str

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)


class AvailableMovesRequest(BaseModel):
    game_id: UUID


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: str
    line: list[int]

    @field_validator("player_name")
    @classmethod
    def validate_player_name(cls, value: str) -> str:
        return _validate_player_name(value)

    @field_validator("line", mode="before")
    @classmethod
    def validate_line(cls, value: Any) -> Any:
        # Runs before pydantic would turn "1" or 1.0 into 1: coordinates must already be integers.
        # Only the shape is checked here. Whether the line fits on the board is up to the rules engine.
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(coordinate, int) and not isinstance(coordinate, bool) for coordinate in value
        ):
            raise InvalidRequestError(
                f"A line is a list of integer coordinates [x1, y1, x2, y2], got {value!r}."
            )
        if len(value) != 4:
            raise InvalidRequestError(
                f"A line needs exactly 4 coordinates [x1, y1, x2, y2], got {len(value)}."
            )
        return value


class AIMoveRequest(BaseModel):
    game_id: UUID
    player_index: int
    difficulty: Difficulty = Difficulty.MEDIUM
    rng_seed: Optional[int] = None


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    status: Status
    players: list[PlayerName]
    grid_size: int
    lines: list[list[int]]
    boxes: dict[BoxKey, int]
    scores: list[int]
    current_player: int
    started: bool
    game_over: bool
    winner: Optional[int]
    is_draw: bool


class AvailableMovesResponse(BaseModel):
    game_id: UUID
    current_player: int
    lines: list[list[int]]


class AIMoveResponse(BaseModel):
    game_id: UUID
    line: list[int]
    game: GameResponse
