"""
Tests for the headless autopilots in players/.
"""

import pytest
import random
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import UP, DOWN, RIGHT
from domain.chaos import ChaosGame
from domain.snake import Snake, SnakeGame
from players import Player, SnakeAutopilot, ChaosAutopilot, AUTOPILOTS


class TestPlayerBase:

    def test_base_player_is_abstract(self):
        with pytest.raises(NotImplementedError):
            Player().choose_action(None)

    def test_autopilot_registry(self):
        assert AUTOPILOTS['snake'] is SnakeAutopilot
        assert AUTOPILOTS['chaos'] is ChaosAutopilot


class TestSnakeAutopilot:
    """The snake autopilot avoids walls and its own body."""

    def _game(self, positions, heading, food):
        game = SnakeGame(hunter_food=False, forced_growth=False, rng=random.Random(2))
        game.start()
        game.snake = Snake(positions)
        game.direction = heading
        game.heading = heading
        game.food = food
        return game

    def test_avoids_the_wall(self):
        game = self._game([(17, 5), (16, 5), (15, 5)], RIGHT, (0, 0))
        autopilot = SnakeAutopilot(rng=random.Random(0))

        assert sorted(autopilot.safe_moves(game)) == ['DOWN', 'UP']
        for _ in range(10):
            autopilot.choose_action(game)
            assert game.direction in (UP, DOWN)

    def test_prefers_food(self):
        game = self._game([(5, 5), (4, 5), (3, 5)], RIGHT, (5, 1))
        autopilot = SnakeAutopilot(rng=random.Random(0))

        autopilot.choose_action(game)

        assert game.direction == UP

    def test_no_safe_move_keeps_heading(self):
        # Boxed in: wall above, body on both sides
        game = self._game(
            [(1, 0), (0, 0), (0, 1), (1, 1), (2, 1), (2, 0), (3, 0)], RIGHT, (10, 10)
        )
        autopilot = SnakeAutopilot(rng=random.Random(0))

        assert autopilot.safe_moves(game) == []
        autopilot.choose_action(game)
        assert game.direction == RIGHT


class TestChaosAutopilot:

    def test_drops_one_piece_per_decision(self):
        game = ChaosGame(rng=random.Random(4))
        game.start()
        autopilot = ChaosAutopilot(rng=random.Random(4))

        autopilot.choose_action(game)
        autopilot.choose_action(game)

        assert game.placements == 2

    def test_plays_until_board_full(self):
        game = ChaosGame(rng=random.Random(9))
        game.start()
        autopilot = ChaosAutopilot(rng=random.Random(9))

        for _ in range(2000):
            if not game.is_running:
                break
            autopilot.choose_action(game)

        assert game.is_over
        assert game.end_reason == "board_full"
        # Every settled cell stays on the board
        for x, y in game.board.occupied_cells():
            assert 0 <= x < game.width and 0 <= y < game.height

    def test_does_nothing_when_idle(self):
        game = ChaosGame(rng=random.Random(1))
        ChaosAutopilot().choose_action(game)
        assert game.placements == 0
