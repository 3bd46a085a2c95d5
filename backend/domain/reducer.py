"""
The game state machine.

reduce() maps (state, action) -> new state. decide_tick() is what the
timer calls once per tick to pick the action for the current state.
"""

import random
from dataclasses import replace
from typing import Optional, Union

from .actions import ChangeDirection, GameOver, InvalidActionError, Move
from .constants import GRID_SIZE
from .game_state import Food, GameState
from .grid import displace, is_occupied_by_snake, is_same_position, random_coordinate
from .snake import Snake


def is_snake_outside(snake: Snake) -> bool:
    """True once the head sits on or past the outer ring."""
    x, y = snake.head
    return x >= GRID_SIZE or y >= GRID_SIZE or x <= 0 or y <= 0


def is_snake_hitting_itself(snake: Snake) -> bool:
    x, y = snake.head
    return is_occupied_by_snake(x, y, snake.tail)


def is_snake_eating(state: GameState) -> bool:
    """True when the current head is on the food cell."""
    head = state.snake.head
    food = state.food.coordinate
    return is_same_position(head.x, head.y, food.x, food.y)


def decide_tick(state: GameState) -> Union[Move, GameOver]:
    """
    Pick the action for this tick.

    The lethal checks look at the *current* head, so a snake that just
    stepped onto the border (or into itself) is only stopped on the
    following tick.
    """
    if is_snake_outside(state.snake) or is_snake_hitting_itself(state.snake):
        return GameOver()
    return Move()


def _move(state: GameState, rng: Optional[random.Random]) -> GameState:
    is_eating = is_snake_eating(state)

    new_head = displace(state.snake.head, state.status.direction)

    if is_eating:
        # grow: keep the whole old body
        body = state.snake.positions
        food = Food(random_coordinate(rng))
        score = state.score + 1
    else:
        # shift: drop the tail tip
        body = state.snake.without_stub
        food = state.food
        score = state.score

    return replace(
        state,
        snake=Snake((new_head,) + body),
        food=food,
        score=score,
    )


def reduce(state: GameState, action, rng: Optional[random.Random] = None) -> GameState:
    """
    Apply one action and return the resulting state.

    Args:
        state: current GameState (left untouched)
        action: ChangeDirection, Move or GameOver
        rng: optional random.Random used when food has to be regenerated

    Raises:
        InvalidActionError: if action is not one of the known kinds
    """
    if isinstance(action, ChangeDirection):
        return state.with_status(direction=action.direction)
    if isinstance(action, Move):
        return _move(state, rng)
    if isinstance(action, GameOver):
        return state.with_status(is_game_over=True)
    raise InvalidActionError(action)
