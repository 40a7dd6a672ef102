"""
Game constants for the arcade engine.

Coordinates are screen-style: (0, 0) is the top-left cell and y grows downward.
All durations are in milliseconds.
"""

from typing import Dict, Tuple

Point = Tuple[int, int]
Direction = Tuple[int, int]

# Movement directions
UP: Direction = (0, -1)
DOWN: Direction = (0, 1)
LEFT: Direction = (-1, 0)
RIGHT: Direction = (1, 0)

DIRECTIONS: Dict[str, Direction] = {
    "UP": UP,
    "DOWN": DOWN,
    "LEFT": LEFT,
    "RIGHT": RIGHT,
}
VALID_MOVES = set(DIRECTIONS)

# Run lifecycle
ELAPSED_INTERVAL_MS = 1000

# Snake settings
SNAKE_BOARD_WIDTH = 18
SNAKE_BOARD_HEIGHT = 16
SNAKE_INITIAL_LENGTH = 3
SNAKE_TICK_DELAY_MS = 180
FOOD_INITIAL_DELAY_MS = 520
FOOD_MIN_DELAY_MS = 220
FOOD_ACCELERATION_STEP_MS = 4
GROWTH_INTERVAL_MS = 5000
HUNTER_PENALTY_SEGMENTS = 2

# Chaos Drop settings
CHAOS_BOARD_WIDTH = 10
CHAOS_BOARD_HEIGHT = 18
DROP_DELAY_MS = 700
SOFT_DROP_DELAY_MS = 70
CLEARED_ROW_PENALTY = 2
HOLE_WEIGHT = 3
