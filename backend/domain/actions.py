"""
Actions accepted by the reducer.

There are exactly three kinds. Anything else handed to the reducer is a
programmer error and raises InvalidActionError.
"""

from dataclasses import dataclass

from .grid import normalize_direction


class InvalidActionError(TypeError):
    """Raised when the reducer receives something that is not a known action."""

    def __init__(self, action):
        self.action = action
        super().__init__(f"Unrecognized action: {action!r}")


@dataclass(frozen=True)
class ChangeDirection:
    """Replace the buffered direction. The snake does not move."""
    direction: str

    def __post_init__(self):
        object.__setattr__(self, "direction", normalize_direction(self.direction))


@dataclass(frozen=True)
class Move:
    """Advance the snake one cell in the buffered direction."""


@dataclass(frozen=True)
class GameOver:
    """Freeze the game."""
