"""Orchestration of communication from API router to business logic and the game store (and the reverse direction)."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.ai.factory import create_ai
from src.api.models import (
    AIMoveRequest,
    AIMoveResponse,
    AvailableMovesRequest,
    AvailableMovesResponse,
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    MoveRequest,
    StartGameRequest,
)
from src.core.config import MIN_PLAYERS, AIConfig
from src.core.exceptions import (
    GameNotStartedError,
    GameOverError,
    GameStateError,
    NotEnoughPlayersError,
    NotGameCreatorError,
    NotYourTurnError,
    RepositoryError,
    error_for_rejection,
)
from src.core.models import GameModel
from src.core.shared_types import Status
from src.db.repository import GameRepository
from src.dots.moves import available_edges
from src.dots.rules import MoveRejected, apply_move
from src.dots.state import GameState, create_initial_state, start_game

logger = logging.getLogger(__name__)


class GameService:
    """Orchestration of layers for a dots & boxes game."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """First player requested to create a new game. The creator always plays first (player index 0)."""

        # Use info in CreateGameRequest to create a new GameState, and convert into GameModel
        new_game = create_initial_state(request.grid_size, request.player_count)
        created_game_data = new_game.to_model(players=[request.player_name])

        # Store the GameModel in the repository
        stored_game, game_id = self.repo.create_game(created_game_data)

        # Return a GameResponse
        return self._create_game_response(game_id, stored_game)

    def join_game(self, request: JoinGameRequest) -> GameResponse:
        """Another player requested to join a game that has not started yet."""

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(request.game_id)

        # Joining twice under the same name is harmless
        if request.player_name in stored_model.players:
            return self._create_game_response(request.game_id, stored_model)

        if stored_model.started:
            raise GameStateError("Cannot join this game. Game already in progress.")

        if len(stored_model.players) >= stored_model.player_count:
            raise GameStateError(
                f"Cannot join this game. All {stored_model.player_count} seats are taken."
            )

        # Register the requested player and store in repository
        stored_model.players.append(request.player_name)
        self.repo.update_game(request.game_id, stored_model)
        logger.info(
            "Player joined game %s (%d/%d players)",
            request.game_id,
            len(stored_model.players),
            stored_model.player_count,
        )

        # Return a GameResponse
        return self._create_game_response(request.game_id, stored_model)

    def start_game(self, request: StartGameRequest) -> GameResponse:
        """
        The creator starts the game
        ----

        Only the creator (first registered player) can do this, and only once at least two players joined.
        Seats nobody took are dropped: the game is played by the players that are actually there.
        """
        stored_model = self._fetch_game(request.game_id)

        if stored_model.started:
            raise GameStateError("Game already started.")

        if not stored_model.players or stored_model.players[0] != request.player_name:
            raise NotGameCreatorError("Only the creator of the game can start it.")

        if len(stored_model.players) < MIN_PLAYERS:
            raise NotEnoughPlayersError(f"Need at least {MIN_PLAYERS} players to start.")

        state = start_game(
            create_initial_state(stored_model.grid_size, len(stored_model.players))
        )
        started_model = state.to_model(players=stored_model.players)
        self.repo.update_game(request.game_id, started_model)
        logger.info(
            "Game %s started with %d players", request.game_id, state.player_count
        )
        return self._create_game_response(request.game_id, started_model)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def available_moves(self, request: AvailableMovesRequest) -> AvailableMovesResponse:
        """Retrieve the lines that can still be drawn (for whoever is to move)."""
        stored_model = self._fetch_game(request.game_id)
        state = GameState.from_model(stored_model)
        return AvailableMovesResponse(
            game_id=request.game_id,
            current_player=state.current_player,
            lines=[edge.to_line() for edge in available_edges(state)],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt."""

        # Retrieve persisted GameModel from repository
        stored_model = self._fetch_game(request.game_id)

        if not stored_model.started:
            raise GameNotStartedError("Game not started.")

        player_index = self._get_player_index(stored_model, request.player_name)

        # Create a GameState from the retrieved GameModel and attempt the move
        state = GameState.from_model(stored_model)
        after_move = self._apply(state, request.line, player_index)

        # Capture updated state in GameModel and store in repository
        return self._store_move(request.game_id, stored_model, after_move)

    def ai_move(self, request: AIMoveRequest) -> AIMoveResponse:
        """Let a computer opponent play the seat `player_index`."""
        stored_model = self._fetch_game(request.game_id)

        if not stored_model.started:
            raise GameNotStartedError("Game not started.")
        if stored_model.game_over:
            raise GameOverError("Game is over.")

        state = GameState.from_model(stored_model)
        if not 0 <= request.player_index < state.player_count:
            raise GameStateError(f"No player with index {request.player_index} in this game.")
        if state.current_player != request.player_index:
            raise NotYourTurnError(
                f"It is not the turn of player {request.player_index}. Waiting for player {state.current_player}."
            )

        config = AIConfig(difficulty=request.difficulty, rng_seed=request.rng_seed)
        ai = create_ai(request.difficulty, request.player_index, config)
        edge = ai.get_move(state)
        if edge is None:
            # only happens on a full board, which is game over and refused above
            raise GameOverError("No lines left to draw.")

        after_move = self._apply(state, edge.to_line(), request.player_index)
        response = self._store_move(request.game_id, stored_model, after_move)
        return AIMoveResponse(game_id=request.game_id, line=edge.to_line(), game=response)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    def sweep_expired_games(self, now: Optional[datetime] = None) -> list[UUID]:
        """Meant to be called periodically by whoever hosts the service."""
        return self.repo.sweep_expired(now)

    # -- Internal helpers --
    def _apply(self, state: GameState, line: list[int], player_index: int) -> GameState:
        """Run the rules engine and turn a rejection into the matching exception."""
        result = apply_move(state, line, player_index)
        if isinstance(result, MoveRejected):
            raise error_for_rejection(
                result.reason, f"Move {line} by player {player_index} rejected: {result.reason}"
            )
        return result

    def _store_move(
        self, game_id: UUID, stored_model: GameModel, after_move: GameState
    ) -> GameResponse:
        after_move_model = after_move.to_model(players=stored_model.players)
        self.repo.update_game(game_id, after_move_model)
        if after_move.game_over:
            logger.info(
                "Game %s over. Scores %s, winner %s",
                game_id,
                list(after_move.scores),
                "none (draw)" if after_move.winner is None else after_move.winner,
            )
        return self._create_game_response(game_id, after_move_model)

    def _get_player_index(self, model: GameModel, player_name: str) -> int:
        if player_name not in model.players:
            raise NotYourTurnError(f"Player {player_name!r} is not in this game.")
        return model.players.index(player_name)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            status=self._status(model),
            players=model.players,
            grid_size=model.grid_size,
            lines=model.lines,
            boxes=model.boxes,
            scores=model.scores,
            current_player=model.current_player,
            started=model.started,
            game_over=model.game_over,
            winner=model.winner,
            is_draw=model.game_over and model.winner is None,
        )

    def _status(self, model: GameModel) -> Status:
        if model.game_over:
            return Status.GAME_OVER
        if model.started:
            return Status.IN_PROGRESS
        return Status.WAITING_FOR_PLAYERS

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
