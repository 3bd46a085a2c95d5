"""
Geometry helpers over the fixed-size grid.

Everything here is a pure function of its arguments (apart from
random_coordinate, which consumes randomness).
"""

import random
from typing import Iterable, NamedTuple, Optional, Tuple

from .constants import GRID_SIZE, VALID_MOVES, DIRECTION_ALIASES, DIRECTION_TICKS


class Coordinate(NamedTuple):
    """An (x, y) cell on the grid. Compares equal to a plain tuple."""
    x: int
    y: int


def random_coordinate(rng: Optional[random.Random] = None) -> Coordinate:
    """
    Return a random coordinate strictly inside the border.

    Both axes are drawn uniformly from [1, GRID_SIZE - 1].

    Args:
        rng: optional random.Random instance (defaults to the module RNG)
    """
    source = rng or random
    return Coordinate(
        source.randint(1, GRID_SIZE - 1),
        source.randint(1, GRID_SIZE - 1),
    )


def is_border(x: int, y: int) -> bool:
    """True for the outermost ring of the grid."""
    return x == 0 or y == 0 or x == GRID_SIZE or y == GRID_SIZE


def is_same_position(x1: int, y1: int, x2: int, y2: int) -> bool:
    return x1 == x2 and y1 == y2


def is_occupied_by_snake(x: int, y: int, snake_coordinates: Iterable[Tuple[int, int]]) -> bool:
    """True if (x, y) matches any coordinate in snake_coordinates."""
    return any(is_same_position(cx, cy, x, y) for cx, cy in snake_coordinates)


def normalize_direction(direction: str) -> str:
    """
    Map a direction name onto one of VALID_MOVES.

    Accepts any casing and the BOTTOM alias.

    Raises:
        ValueError: if the name is not a known direction
    """
    if not isinstance(direction, str):
        raise ValueError(f"Invalid direction: {direction!r}")

    name = direction.strip().upper()
    name = DIRECTION_ALIASES.get(name, name)
    if name not in VALID_MOVES:
        raise ValueError(f"Invalid direction: {direction!r}")
    return name


def displace(coordinate: Tuple[int, int], direction: str) -> Coordinate:
    """Return the cell one step from coordinate in the given direction."""
    dx, dy = DIRECTION_TICKS[normalize_direction(direction)]
    x, y = coordinate
    return Coordinate(x + dx, y + dy)
