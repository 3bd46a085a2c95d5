"""
Snake entity for the game engine.
"""

from dataclasses import dataclass
from typing import Tuple

from .grid import Coordinate


@dataclass(frozen=True)
class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: tuple of Coordinates from head at index 0 to tail tip at the end
    """

    positions: Tuple[Coordinate, ...]

    def __post_init__(self):
        if not self.positions:
            raise ValueError("A snake needs at least one position.")
        # Accept plain (x, y) tuples and lists from callers
        object.__setattr__(
            self, "positions", tuple(Coordinate(*p) for p in self.positions)
        )

    @property
    def head(self) -> Coordinate:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[Coordinate, ...]:
        """Every segment except the head."""
        return self.positions[1:]

    @property
    def without_stub(self) -> Tuple[Coordinate, ...]:
        """Every segment except the last one (what remains after a shift)."""
        return self.positions[:-1]

    def __len__(self) -> int:
        return len(self.positions)
