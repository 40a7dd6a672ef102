"""
Snake entity and the single-player Snake game.

The game runs three independent timers on its scheduler:
  - move:   advances the snake one cell every SNAKE_TICK_DELAY_MS
  - growth: adds a segment every GROWTH_INTERVAL_MS regardless of eating
  - food:   moves the "hunter" food one cell toward the head; the interval
            shortens on every move and resets whenever the food respawns
"""

import logging
import random
from collections import deque
from typing import Any, Dict, List, Optional, Tuple, Union

from .board import Board, merge_entity_into_board
from .collision import hits_self, hits_wall
from .constants import (
    DIRECTIONS,
    FOOD_ACCELERATION_STEP_MS,
    FOOD_INITIAL_DELAY_MS,
    FOOD_MIN_DELAY_MS,
    GROWTH_INTERVAL_MS,
    HUNTER_PENALTY_SEGMENTS,
    RIGHT,
    SNAKE_BOARD_HEIGHT,
    SNAKE_BOARD_WIDTH,
    SNAKE_INITIAL_LENGTH,
    SNAKE_TICK_DELAY_MS,
    Direction,
    Point,
)
from .run import RunController

logger = logging.getLogger(__name__)

MOVE_TIMER = "move"
GROWTH_TIMER = "growth"
FOOD_TIMER = "food"


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    tag = True

    def __init__(self, positions: List[Tuple[int, int]]):
        self.positions = deque(positions)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Tuple[int, int]:
        return self.positions[-1]

    def __len__(self):
        return len(self.positions)

    def __contains__(self, point) -> bool:
        return point in self.positions

    def advance(self, next_head: Point, grow: bool = False) -> None:
        """Prepend the new head; keep the tail only when growing."""
        self.positions.appendleft(next_head)
        if not grow:
            self.positions.pop()

    def cells(self) -> List[Point]:
        return list(self.positions)

    def shrink(self, count: int) -> int:
        """Drop up to `count` tail segments and return the remaining length."""
        for _ in range(min(count, len(self.positions))):
            self.positions.pop()
        return len(self.positions)

    def __repr__(self):
        return f"<Snake length={len(self)}, head={self.head if self.positions else None}>"


def step_toward(point: Point, target: Point, width: int, height: int) -> Point:
    """
    Move `point` one cell toward `target` along the dominant axis (x wins
    ties), clamped to the board.
    """
    dx = target[0] - point[0]
    dy = target[1] - point[1]
    if dx == 0 and dy == 0:
        return point
    if abs(dx) >= abs(dy):
        step = ((dx > 0) - (dx < 0), 0)
    else:
        step = (0, (dy > 0) - (dy < 0))
    next_x = min(max(0, point[0] + step[0]), width - 1)
    next_y = min(max(0, point[1] + step[1]), height - 1)
    return (next_x, next_y)


class SnakeGame(RunController):
    """
    Manages:
      - Board size
      - The snake and its heading
      - A single food cell (optionally a hunter that chases the head)
      - Forced growth, score and end-of-run statistics
    """

    game_name = "snake"

    def __init__(
        self,
        width: int = SNAKE_BOARD_WIDTH,
        height: int = SNAKE_BOARD_HEIGHT,
        hunter_food: bool = True,
        forced_growth: bool = True,
        track_longest: bool = False,
        rng: Optional[random.Random] = None,
    ):
        super().__init__()
        if width < SNAKE_INITIAL_LENGTH or height < 1:
            raise ValueError(f"Board {width}x{height} is too small for a snake.")
        self.width = width
        self.height = height
        self.hunter_food = hunter_food
        self.forced_growth = forced_growth
        self.track_longest = track_longest
        self.rng = rng or random.Random()
        self._reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self.snake = Snake(self._initial_positions())
        self.direction: Direction = RIGHT
        self.heading: Direction = RIGHT
        self.food: Optional[Point] = self._random_free_cell()
        self.food_delay = FOOD_INITIAL_DELAY_MS
        self.longest = len(self.snake)
        self.pending_growth = 0
        self.food_eaten = 0
        self.times_caught = 0

    def _schedule_timers(self) -> None:
        self.scheduler.schedule(MOVE_TIMER, SNAKE_TICK_DELAY_MS, self.step)
        if self.forced_growth:
            self.scheduler.schedule(GROWTH_TIMER, GROWTH_INTERVAL_MS, self.grow)
        if self.hunter_food:
            self.scheduler.schedule(FOOD_TIMER, self.food_delay, self.move_food)

    def _initial_positions(self) -> List[Point]:
        # Keep the tail on the board for the narrowest accepted widths
        origin_x = max(self.width // 2, SNAKE_INITIAL_LENGTH - 1)
        origin_y = self.height // 2
        return [(origin_x - i, origin_y) for i in range(SNAKE_INITIAL_LENGTH)]

    @property
    def score(self) -> int:
        return self.longest if self.track_longest else len(self.snake)

    def _final_extras(self) -> Dict[str, Any]:
        return {
            'length': len(self.snake),
            'longest': self.longest,
            'food_eaten': self.food_eaten,
            'times_caught': self.times_caught,
        }

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def change_direction(self, direction: Union[str, Direction]) -> bool:
        """
        Request a new heading for the next move.

        The exact reverse of the heading the snake last moved in is refused
        (it would drive the head into the neck) unless the snake is a single
        segment.

        Returns:
            True if the direction was accepted
        """
        if isinstance(direction, str):
            key = direction.upper()
            if key not in DIRECTIONS:
                raise ValueError(f"Unknown direction '{direction}'.")
            direction = DIRECTIONS[key]
        direction = tuple(direction)
        if direction not in DIRECTIONS.values():
            raise ValueError(f"Unknown direction {direction}.")

        reverses = direction[0] + self.heading[0] == 0 and direction[1] + self.heading[1] == 0
        if reverses and len(self.snake) > 1:
            return False
        self.direction = direction
        return True

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    def step(self) -> None:
        """
        Execute one movement tick:
          1) Compute the next head from the current direction
          2) Wall -> run over
          3) Self-bite (tail excluded unless this move grows) -> run over
          4) Commit the move, growing when the head lands on food or a
             forced growth is pending
        """
        if not self.is_running or len(self.snake) == 0:
            return

        hx, hy = self.snake.head
        next_head = (hx + self.direction[0], hy + self.direction[1])

        if hits_wall(self.width, self.height, next_head):
            self.end_run("wall")
            return

        eats = self.food is not None and next_head == self.food
        grows = eats or self.pending_growth > 0
        if hits_self(self.snake.positions, next_head, grows=grows):
            self.end_run("self")
            return

        self.snake.advance(next_head, grow=grows)
        if grows and not eats:
            self.pending_growth -= 1
        self.heading = self.direction
        self._update_longest()

        if eats:
            self.food_eaten += 1
            self._respawn_food()
            logger.debug(f"Snake ate food, length now {len(self.snake)}")

    def grow(self) -> None:
        """Forced growth tick: the tail stays put on the next move."""
        if not self.is_running or len(self.snake) == 0:
            return
        self.pending_growth += 1

    def move_food(self) -> None:
        """Hunter tick: the food steps toward the head and may catch the snake."""
        if not self.is_running or self.food is None or len(self.snake) == 0:
            return

        next_food = step_toward(self.food, self.snake.head, self.width, self.height)
        if next_food in self.snake:
            self.times_caught += 1
            remaining = self.snake.shrink(HUNTER_PENALTY_SEGMENTS)
            logger.debug(f"Hunter food caught the snake, length now {remaining}")
            if remaining == 0:
                self.end_run("caught")
                return
            self._respawn_food()
            return

        self.food = next_food
        self.food_delay = max(FOOD_MIN_DELAY_MS, self.food_delay - FOOD_ACCELERATION_STEP_MS)
        self.scheduler.set_interval(FOOD_TIMER, self.food_delay)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _respawn_food(self) -> None:
        self.food = self._random_free_cell()
        self.food_delay = FOOD_INITIAL_DELAY_MS
        self.scheduler.set_interval(FOOD_TIMER, self.food_delay)

    def _update_longest(self) -> None:
        self.longest = max(self.longest, len(self.snake))

    def _random_free_cell(self) -> Optional[Point]:
        """
        Return a random cell (x, y) not covered by the snake, or None when the
        snake fills the board.
        """
        occupied = set(self.snake.positions)
        candidates = [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if (x, y) not in occupied
        ]
        if not candidates:
            return None
        return self.rng.choice(candidates)

    def board(self) -> Board:
        """The snake composited onto an empty board (food excluded)."""
        return merge_entity_into_board(Board.empty(self.width, self.height), self.snake)

    def render(self) -> str:
        """
        Text view of the board:
        H = head, T = body, A = food, . = empty
        """
        overlay = {}
        for idx, point in enumerate(self.snake.positions):
            overlay[point] = 'H' if idx == 0 else 'T'
        if self.food is not None and self.food not in overlay:
            overlay[self.food] = 'A'
        return Board.empty(self.width, self.height).render(overlay)

    def __repr__(self):
        return (
            f"<SnakeGame status={self.status.value}, length={len(self.snake)}, "
            f"food={self.food}, elapsed={self.elapsed_seconds}s>"
        )
