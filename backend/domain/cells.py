"""
Cell classification for renderers.

A renderer walks every (x, y) in [0, GRID_SIZE]^2 and asks which kinds
apply to it. Several kinds can apply at once (a snake segment sitting
on the border, the head on the food cell, ...); an empty set means a
plain cell.
"""

from enum import Enum
from typing import FrozenSet, Iterator, Tuple

from .constants import GRID_SIZE
from .grid import is_border, is_same_position, is_occupied_by_snake


class CellKind(str, Enum):
    BORDER = "border"
    SNAKE = "snake"
    FOOD = "food"
    HIT = "hit"     # the head cell once the game is over


def classify_cell(state, x: int, y: int) -> FrozenSet[CellKind]:
    """Return the set of CellKinds that apply to (x, y) for the given GameState."""
    head = state.snake.head
    food = state.food.coordinate

    kinds = set()
    if is_border(x, y):
        kinds.add(CellKind.BORDER)
    if is_occupied_by_snake(x, y, state.snake.positions):
        kinds.add(CellKind.SNAKE)
    if is_same_position(x, y, food.x, food.y):
        kinds.add(CellKind.FOOD)
    if state.status.is_game_over and is_same_position(x, y, head.x, head.y):
        kinds.add(CellKind.HIT)
    return frozenset(kinds)


def iter_cells(state) -> Iterator[Tuple[int, int, FrozenSet[CellKind]]]:
    """Yield (x, y, kinds) for every cell, row by row from y = 0."""
    for y in range(GRID_SIZE + 1):
        for x in range(GRID_SIZE + 1):
            yield x, y, classify_cell(state, x, y)
