"""Exceptions raised by the game tracker core."""


class GameTrackerError(Exception):
    """Base class for all game tracker errors."""
    pass


class InvalidTransitionError(GameTrackerError):
    """Raised when a game state transition is not allowed from the current phase."""

    def __init__(self, operation: str, phase: object):
        self.operation = operation
        self.phase = phase
        super().__init__(f"Cannot {operation} while game is in phase {phase}")


class GameAlreadyActiveError(GameTrackerError):
    """Raised when starting a game while another game is still active."""
    pass
