"""Records kept by the game store"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from src.core.models import GameModel


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class StoredGame:
    id: UUID
    game: GameModel
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)
