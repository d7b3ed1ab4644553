"""Unit tests for src/core/config.py, src/core/exceptions.py and src/core/logging_config.py"""

import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from src.core.config import LOG_FORMAT, AIConfig, _int_from_env
from src.core.exceptions import (
    EdgeTakenError,
    GameError,
    GameOverError,
    GameStateError,
    IllegalMoveError,
    NotYourTurnError,
    error_for_rejection,
)
from src.core.logging_config import configure_logging
from src.core.models import GameModel
from src.core.shared_types import RejectionReason
from src.db.memory_repository import InMemoryGameRepository


# -- CONFIG --
def test_int_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOTS_TEST_VALUE", "7")
    assert _int_from_env("DOTS_TEST_VALUE", 3) == 7


@pytest.mark.parametrize("value", ["", "   ", "seven", "7.5"])
def test_int_from_env_falls_back(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("DOTS_TEST_VALUE", value)
    assert _int_from_env("DOTS_TEST_VALUE", 3) == 3


def test_int_from_env_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DOTS_TEST_VALUE", raising=False)
    assert _int_from_env("DOTS_TEST_VALUE", 3) == 3


@pytest.mark.parametrize("randomness", [-0.1, 1.5])
def test_ai_config_randomness_bounds(randomness: float) -> None:
    with pytest.raises(ValidationError):
        _ = AIConfig(randomness=randomness)


# -- EXCEPTIONS --
@pytest.mark.parametrize(
    "reason, error_type, code",
    [
        (RejectionReason.GEOMETRY_INVALID, IllegalMoveError, "INVALID_LINE"),
        (RejectionReason.OUT_OF_TURN, NotYourTurnError, "NOT_YOUR_TURN"),
        (RejectionReason.EDGE_ALREADY_DRAWN, EdgeTakenError, "LINE_TAKEN"),
        (RejectionReason.GAME_ALREADY_OVER, GameOverError, "GAME_OVER"),
    ],
)
def test_error_for_rejection(reason: RejectionReason, error_type: type[GameError], code: str) -> None:
    error = error_for_rejection(reason)
    assert type(error) is error_type
    assert error.code == code
    assert isinstance(error, GameError)
    assert str(reason) in error.message


def test_error_hierarchy() -> None:
    assert issubclass(GameOverError, GameStateError)
    assert issubclass(EdgeTakenError, IllegalMoveError)
    assert not issubclass(GameError, ValueError)


# -- LOGGING --
def test_configure_logging() -> None:
    with patch("src.core.logging_config.logging.basicConfig") as basic_config:
        configure_logging("DEBUG")
    basic_config.assert_called_once_with(level="DEBUG", format=LOG_FORMAT)


def test_modules_log_under_their_own_name(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="src.db.memory_repository"):
        InMemoryGameRepository().create_game(GameModel(grid_size=3, player_count=2, scores=[0, 0]))
    assert any(record.name == "src.db.memory_repository" for record in caplog.records)
