"""
Game constants for GridSnake.
"""

# Board settings
GRID_SIZE = 50      # cells are indexed 0..GRID_SIZE inclusive on both axes
TICK_RATE = 150     # milliseconds between ticks

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Older clients send BOTTOM for DOWN
DIRECTION_ALIASES = {"BOTTOM": DOWN}

# Per-tick head displacement (dx, dy); y grows downwards
DIRECTION_TICKS = {
    UP: (0, -1),
    DOWN: (0, 1),
    RIGHT: (1, 0),
    LEFT: (-1, 0),
}

# Raw key identifiers -> direction. Anything else is ignored.
KEY_CODES_MAP = {
    38: UP,
    39: RIGHT,
    37: LEFT,
    40: DOWN,
    "ArrowUp": UP,
    "ArrowRight": RIGHT,
    "ArrowLeft": LEFT,
    "ArrowDown": DOWN,
}

INITIAL_DIRECTION = RIGHT
