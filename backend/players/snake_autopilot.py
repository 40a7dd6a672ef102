"""
Snake autopilot - picks random safe headings, preferring ones that close in on the food.
"""

import random
from typing import List, Optional

from domain.constants import DIRECTIONS
from domain.collision import hits_self, hits_wall
from domain.snake import SnakeGame
from .base import Player


class SnakeAutopilot(Player):
    """
    A random AI that picks a direction that avoids walls and self-collisions.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def safe_moves(self, game: SnakeGame) -> List[str]:
        head_x, head_y = game.snake.head
        valid_moves: List[str] = []
        for move, (dx, dy) in DIRECTIONS.items():
            # Reversing onto the neck is refused by the game anyway
            if len(game.snake) > 1 and (dx + game.heading[0], dy + game.heading[1]) == (0, 0):
                continue
            next_head = (head_x + dx, head_y + dy)
            if hits_wall(game.width, game.height, next_head):
                continue
            if hits_self(game.snake.positions, next_head, grows=next_head == game.food):
                continue
            valid_moves.append(move)
        return valid_moves

    def choose_action(self, game: SnakeGame) -> None:
        valid_moves = self.safe_moves(game)

        # No safe move left, keep going and take the hit
        if not valid_moves:
            return

        if game.food is not None:
            head_x, head_y = game.snake.head
            food_x, food_y = game.food
            current = abs(food_x - head_x) + abs(food_y - head_y)
            closer = [
                move for move in valid_moves
                if abs(food_x - head_x - DIRECTIONS[move][0])
                + abs(food_y - head_y - DIRECTIONS[move][1]) < current
            ]
            if closer:
                valid_moves = closer

        game.change_direction(self.rng.choice(valid_moves))
