"""
Player implementations for the arcade engine.

Headless players drive a game from the CLI or from tests, one decision per
tick, through the same controls a human would use.
"""

from .base import Player
from .snake_autopilot import SnakeAutopilot
from .chaos_autopilot import ChaosAutopilot

AUTOPILOTS = {
    'snake': SnakeAutopilot,
    'chaos': ChaosAutopilot,
}

__all__ = [
    'Player',
    'SnakeAutopilot',
    'ChaosAutopilot',
    'AUTOPILOTS',
]
