"""Protocol repository: the store that owns every active game. Injected into the service, never a module-level global."""

from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """Game store orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Replace the game state of an existing record."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...

    def sweep_expired(self, now: Optional[datetime] = None) -> list[UUID]:
        """Remove games that outlived their time-to-live. Returns the IDs removed."""
        ...
