"""
Domain entities for the arcade game engine.

This module contains the board, pieces, collision rules, scoring and the two
game controllers. Nothing here touches the database, HTTP or a real clock.
"""

from .constants import UP, DOWN, LEFT, RIGHT, DIRECTIONS, VALID_MOVES
from .board import Board, create_empty_board, merge_entity_into_board, clear_full_rows
from .pieces import PieceType, Piece, spawn_piece, random_piece
from .collision import can_place, drop_distance, hits_self, hits_wall
from .scoring import BoardAnalysis, evaluate_board, apply_lock_score
from .scheduler import TickScheduler
from .run import RunController, RunSnapshot, RunStatus
from .snake import Snake, SnakeGame
from .chaos import ChaosGame

GAMES = {
    SnakeGame.game_name: SnakeGame,
    ChaosGame.game_name: ChaosGame,
}

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'DIRECTIONS', 'VALID_MOVES',
    'Board', 'create_empty_board', 'merge_entity_into_board', 'clear_full_rows',
    'PieceType', 'Piece', 'spawn_piece', 'random_piece',
    'can_place', 'drop_distance', 'hits_self', 'hits_wall',
    'BoardAnalysis', 'evaluate_board', 'apply_lock_score',
    'TickScheduler',
    'RunController', 'RunSnapshot', 'RunStatus',
    'Snake', 'SnakeGame',
    'ChaosGame',
    'GAMES',
]
