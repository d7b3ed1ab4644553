"""Implementation of (Game)Repository keeping every game in a dictionary owned by the repository instance"""

import logging
from copy import deepcopy
from datetime import datetime, timedelta
from typing import Callable, Optional
from uuid import UUID, uuid4

from src.core.config import FINISHED_GAME_TTL_SECONDS, GAME_TTL_SECONDS
from src.core.models import GameModel
from src.db.schema import StoredGame, utc_now

logger = logging.getLogger(__name__)


class InMemoryGameRepository:
    """
    Games live as long as the process (or until swept).

    Models are copied on the way in and on the way out: callers can never change a stored game except through `update_game()`.
    """

    def __init__(
        self,
        game_ttl: timedelta = timedelta(seconds=GAME_TTL_SECONDS),
        finished_game_ttl: timedelta = timedelta(seconds=FINISHED_GAME_TTL_SECONDS),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._games: dict[UUID, StoredGame] = {}
        self.game_ttl = game_ttl
        self.finished_game_ttl = finished_game_ttl
        self.clock = clock

    def __len__(self) -> int:
        return len(self._games)

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        record = self._games.get(game_id)
        if record:
            return deepcopy(record.game)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        new_id = uuid4()
        now = self.clock()
        self._games[new_id] = StoredGame(
            id=new_id, game=deepcopy(game), created_at=now, updated_at=now
        )
        logger.info(
            "Game %s created (grid %d, %d players)",
            new_id,
            game.grid_size,
            game.player_count,
        )
        return deepcopy(game), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the game state of an existing record."""
        record = self._games.get(game_id)
        if not record:
            return None
        record.game = deepcopy(game)
        record.updated_at = self.clock()
        return deepcopy(game)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        record = self._games.pop(game_id, None)
        if not record:
            return None
        logger.info("Game %s deleted", game_id)
        return record.game

    def sweep_expired(self, now: Optional[datetime] = None) -> list[UUID]:
        """
        Remove games that are no longer worth keeping
        ----

        1. any game older than the game TTL (default: 1 hour)
        2. a finished game older than the finished-game TTL (default: 5 minutes)

        Age is counted from creation.
        """
        now = now or self.clock()
        expired: list[UUID] = []
        for game_id, record in self._games.items():
            age = now - record.created_at
            if age > self.game_ttl:
                expired.append(game_id)
            elif record.game.game_over and age > self.finished_game_ttl:
                expired.append(game_id)

        for game_id in expired:
            del self._games[game_id]

        if expired:
            logger.info(
                "Game sweep removed %d game(s), %d remaining",
                len(expired),
                len(self._games),
            )
        return expired
