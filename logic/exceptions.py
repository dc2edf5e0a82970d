"""
Exceptions raised by the game logic.
"""


class GameError(Exception):
    """Base class for every game rule violation."""


class InvalidMove(GameError):
    """A move was rejected: wrong state, wrong turn, bad index or occupied cell."""

    def __init__(self, message: str, index: int = -1):
        super().__init__(message)
        self.index = index


class NoMoveAvailable(GameError):
    """The AI was asked to move on a full board."""


class InvalidPlayerName(GameError):
    """The player name does not pass validation."""


class DifficultyLocked(GameError):
    """Difficulty can only be changed while no game is running."""
