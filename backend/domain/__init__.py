"""
Domain entities for the GridSnake game engine.

This module contains the core game state machine, independent of
timers, input handling and rendering.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, GRID_SIZE, TICK_RATE, KEY_CODES_MAP,
)
from .grid import (
    Coordinate,
    random_coordinate,
    is_border,
    is_same_position,
    is_occupied_by_snake,
    normalize_direction,
    displace,
)
from .snake import Snake
from .game_state import GameState, GameStatus, Food
from .actions import ChangeDirection, Move, GameOver, InvalidActionError
from .reducer import (
    reduce,
    decide_tick,
    is_snake_outside,
    is_snake_hitting_itself,
    is_snake_eating,
)
from .cells import CellKind, classify_cell, iter_cells

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'GRID_SIZE', 'TICK_RATE', 'KEY_CODES_MAP',
    'Coordinate', 'random_coordinate', 'is_border', 'is_same_position',
    'is_occupied_by_snake', 'normalize_direction', 'displace',
    'Snake',
    'GameState', 'GameStatus', 'Food',
    'ChangeDirection', 'Move', 'GameOver', 'InvalidActionError',
    'reduce', 'decide_tick', 'is_snake_outside', 'is_snake_hitting_itself', 'is_snake_eating',
    'CellKind', 'classify_cell', 'iter_cells',
]
