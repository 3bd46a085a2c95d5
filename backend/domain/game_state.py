"""
GameState entity - a snapshot of the game at a point in time.
"""

import random
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .cells import CellKind, iter_cells
from .constants import GRID_SIZE, INITIAL_DIRECTION
from .grid import Coordinate, normalize_direction, random_coordinate
from .snake import Snake


@dataclass(frozen=True)
class GameStatus:
    """The buffered direction and whether the game has ended."""
    direction: str = INITIAL_DIRECTION
    is_game_over: bool = False

    def __post_init__(self):
        object.__setattr__(self, "direction", normalize_direction(self.direction))


@dataclass(frozen=True)
class Food:
    coordinate: Coordinate

    def __post_init__(self):
        object.__setattr__(self, "coordinate", Coordinate(*self.coordinate))


# Characters used by print_board, checked in priority order
BOARD_SYMBOLS = [
    (CellKind.HIT, "X"),
    (CellKind.SNAKE, "S"),
    (CellKind.FOOD, "F"),
    (CellKind.BORDER, "#"),
]


@dataclass(frozen=True)
class GameState:
    """
    A snapshot of the game at a specific point in time.

    Instances are never mutated; the reducer returns a new GameState for
    every applied action.

    Attributes:
        status: buffered direction + game-over flag
        snake: the snake body, head first
        food: the single food item on the board
        score: number of food items eaten so far
    """

    status: GameStatus
    snake: Snake
    food: Food
    score: int = 0

    def __post_init__(self):
        if self.score < 0:
            raise ValueError(f"Score cannot be negative: {self.score}")

    @classmethod
    def new_game(cls, rng: Optional[random.Random] = None) -> "GameState":
        """Fresh game: one-cell snake and food at random in-bounds positions."""
        return cls(
            status=GameStatus(),
            snake=Snake((random_coordinate(rng),)),
            food=Food(random_coordinate(rng)),
            score=0,
        )

    @property
    def direction(self) -> str:
        return self.status.direction

    @property
    def is_game_over(self) -> bool:
        return self.status.is_game_over

    def with_status(self, **changes) -> "GameState":
        return replace(self, status=replace(self.status, **changes))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (tuples become lists)."""
        return {
            "direction": self.status.direction,
            "is_game_over": self.status.is_game_over,
            "snake": [[x, y] for x, y in self.snake.positions],
            "food": [self.food.coordinate.x, self.food.coordinate.y],
            "score": self.score,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty cell
        # = border
        F = food
        S = snake
        X = snake head after game over
        Row 0 is printed first, matching the y-down grid.
        """
        board = [['.' for _ in range(GRID_SIZE + 1)] for _ in range(GRID_SIZE + 1)]

        for x, y, kinds in iter_cells(self):
            for kind, symbol in BOARD_SYMBOLS:
                if kind in kinds:
                    board[y][x] = symbol
                    break

        return "\n".join("".join(row) for row in board)

    def __repr__(self):
        return (
            f"<GameState head={tuple(self.snake.head)}, length={len(self.snake)}, "
            f"food={tuple(self.food.coordinate)}, score={self.score}, "
            f"direction={self.status.direction}, game_over={self.status.is_game_over}>"
        )
