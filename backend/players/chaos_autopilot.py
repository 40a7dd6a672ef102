"""
Chaos Drop autopilot - drops each piece at a random rotation and column.
"""

import random
from typing import Optional

from domain.chaos import ChaosGame
from .base import Player


class ChaosAutopilot(Player):
    """
    Saboteur bot: for every new piece it spins a random number of times,
    slides toward a random column, then hard drops.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def choose_action(self, game: ChaosGame) -> None:
        piece = game.current_piece
        if not game.is_running or piece is None:
            return

        for _ in range(self.rng.randrange(piece.rotation_count)):
            game.rotate(1)

        piece = game.current_piece
        target_x = self.rng.randrange(max(1, game.width - piece.width + 1))
        step = 1 if target_x > piece.x else -1
        while game.current_piece is not None and game.current_piece.x != target_x:
            if not game.move_piece(step, 0):
                break

        game.hard_drop()
