"""
Exception hierarchy shared by all layers.

The rules engine itself never raises for an invalid move: it returns a rejection tag.
The service layer translates those tags into the exceptions below, and every exception carries a
machine-readable `code` so a transport layer can forward it without parsing messages.
"""

from src.core.shared_types import RejectionReason


class GameError(Exception):
    """Base class for every error raised on purpose by this project."""

    code: str = "GAME_ERROR"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class GameStateError(GameError):
    """Request does not fit the lifecycle of the game (joining a started game, a full room, bad stored data...)"""

    code = "GAME_STATE"


class GameNotStartedError(GameStateError):
    code = "GAME_NOT_STARTED"


class GameOverError(GameStateError):
    code = "GAME_OVER"


class NotGameCreatorError(GameStateError):
    """Only the player who created the game may start it."""

    code = "UNAUTHORIZED"


class NotEnoughPlayersError(GameStateError):
    code = "NOT_ENOUGH_PLAYERS"


class IllegalMoveError(GameError):
    """Line is not a unit segment between two dots on the board."""

    code = "INVALID_LINE"


class EdgeTakenError(IllegalMoveError):
    code = "LINE_TAKEN"


class NotYourTurnError(GameError):
    code = "NOT_YOUR_TURN"


class RepositoryError(GameError):
    code = "NOT_FOUND"


class InvalidRequestError(GameError):
    """Raised by request validators. Not a ValueError, so pydantic lets it propagate unchanged."""

    code = "VALIDATION_ERROR"


REJECTION_ERRORS: dict[RejectionReason, type[GameError]] = {
    RejectionReason.GEOMETRY_INVALID: IllegalMoveError,
    RejectionReason.OUT_OF_TURN: NotYourTurnError,
    RejectionReason.EDGE_ALREADY_DRAWN: EdgeTakenError,
    RejectionReason.GAME_ALREADY_OVER: GameOverError,
}


def error_for_rejection(reason: RejectionReason, message: str = "") -> GameError:
    """Build (not raise) the exception matching a rejection tag."""
    error_type = REJECTION_ERRORS[reason]
    return error_type(message or f"Move rejected: {reason}")
