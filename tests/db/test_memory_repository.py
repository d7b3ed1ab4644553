"""Unit tests for src/db/memory_repository.py"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from src.core.models import GameModel
from src.db.memory_repository import InMemoryGameRepository

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def game_model() -> GameModel:
    return GameModel(grid_size=4, player_count=2, scores=[0, 0], players=["ann"])


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# -- CRUD --
def test_create_and_get(memory_repository: InMemoryGameRepository, game_model: GameModel) -> None:
    stored, game_id = memory_repository.create_game(game_model)
    assert isinstance(game_id, UUID)
    assert stored == game_model
    assert memory_repository.get_game(game_id) == game_model
    assert len(memory_repository) == 1


def test_unknown_id(memory_repository: InMemoryGameRepository, game_model: GameModel) -> None:
    missing = uuid4()
    assert memory_repository.get_game(missing) is None
    assert memory_repository.update_game(missing, game_model) is None
    assert memory_repository.delete_game(missing) is None


def test_stored_game_cannot_be_changed_from_outside(
    memory_repository: InMemoryGameRepository, game_model: GameModel
) -> None:
    _, game_id = memory_repository.create_game(game_model)

    # neither the model passed in nor the one handed out is the stored one
    game_model.players.append("bob")
    fetched = memory_repository.get_game(game_id)
    assert fetched is not None
    assert fetched.players == ["ann"]

    fetched.lines.append([0, 0, 1, 0])
    again = memory_repository.get_game(game_id)
    assert again is not None
    assert again.lines == []


def test_update_game(memory_repository: InMemoryGameRepository, game_model: GameModel) -> None:
    _, game_id = memory_repository.create_game(game_model)
    game_model.players.append("bob")
    assert memory_repository.update_game(game_id, game_model) == game_model

    fetched = memory_repository.get_game(game_id)
    assert fetched is not None
    assert fetched.players == ["ann", "bob"]


def test_delete_game(memory_repository: InMemoryGameRepository, game_model: GameModel) -> None:
    _, game_id = memory_repository.create_game(game_model)
    assert memory_repository.delete_game(game_id) == game_model
    assert memory_repository.get_game(game_id) is None
    assert len(memory_repository) == 0


def test_repositories_do_not_share_games(game_model: GameModel) -> None:
    first = InMemoryGameRepository()
    second = InMemoryGameRepository()
    _, game_id = first.create_game(game_model)
    assert second.get_game(game_id) is None


# -- EXPIRY --
def test_sweep_keeps_recent_games(clock: FakeClock, game_model: GameModel) -> None:
    repo = InMemoryGameRepository(clock=clock)
    _, game_id = repo.create_game(game_model)
    clock.advance(minutes=59)
    assert repo.sweep_expired() == []
    assert repo.get_game(game_id) is not None


def test_sweep_removes_old_games(clock: FakeClock, game_model: GameModel) -> None:
    repo = InMemoryGameRepository(clock=clock)
    _, old_id = repo.create_game(game_model)
    clock.advance(minutes=30)
    _, new_id = repo.create_game(game_model)
    clock.advance(minutes=31)

    assert repo.sweep_expired() == [old_id]
    assert repo.get_game(old_id) is None
    assert repo.get_game(new_id) is not None


def test_sweep_removes_finished_games_sooner(clock: FakeClock, game_model: GameModel) -> None:
    repo = InMemoryGameRepository(clock=clock)
    _, playing_id = repo.create_game(game_model)
    finished = GameModel(grid_size=4, player_count=2, scores=[0, 0], game_over=True)
    _, finished_id = repo.create_game(finished)

    clock.advance(minutes=4)
    assert repo.sweep_expired() == []

    clock.advance(minutes=2)
    assert repo.sweep_expired() == [finished_id]
    assert repo.get_game(playing_id) is not None


def test_sweep_with_explicit_time(game_model: GameModel) -> None:
    repo = InMemoryGameRepository(
        game_ttl=timedelta(seconds=10), clock=FakeClock()
    )
    _, game_id = repo.create_game(game_model)
    assert repo.sweep_expired(now=START + timedelta(seconds=5)) == []
    assert repo.sweep_expired(now=START + timedelta(seconds=11)) == [game_id]
