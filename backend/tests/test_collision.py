"""
Tests for domain/collision.py - placement and snake collision rules.
"""

import pytest
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.board import Board
from domain.collision import can_place, drop_distance, hits_self, hits_wall
from domain.pieces import PieceType, spawn_piece


class TestCanPlace:
    """Tests for can_place."""

    def test_empty_board_spawn_is_legal(self):
        board = Board.empty(10, 18)
        piece = spawn_piece(PieceType.T, 0, 10)
        assert can_place(board, piece) is True

    def test_none_piece_is_never_placeable(self):
        assert can_place(Board.empty(4, 4), None) is False

    def test_side_walls_are_illegal(self):
        board = Board.empty(10, 18)
        piece = spawn_piece(PieceType.O, 0, 10)
        assert can_place(board, piece, -piece.x - 1, 0) is False
        assert can_place(board, piece, 10 - piece.x - 1, 0) is False

    def test_floor_is_illegal(self):
        board = Board.empty(10, 18)
        piece = spawn_piece(PieceType.O, 0, 10)
        assert can_place(board, piece, 0, 16) is True
        assert can_place(board, piece, 0, 17) is False

    def test_above_top_is_legal(self):
        """Blocks above the top edge are allowed (partial spawns)."""
        board = Board.empty(10, 18)
        piece = spawn_piece(PieceType.I, 1, 10)
        assert can_place(board, piece, 0, -2) is True

    def test_occupied_cell_is_illegal(self):
        piece = spawn_piece(PieceType.O, 0, 10)
        board = Board.empty(10, 18).merge([(piece.x, 1)], True)
        assert can_place(board, piece) is False

    def test_can_place_is_pure(self):
        """Repeated calls give identical results and never touch the board."""
        piece = spawn_piece(PieceType.L, 2, 10)
        board = Board.empty(10, 18).merge([(0, 17), (5, 10)], True)
        before = board.copy()

        results = [can_place(board, piece, 1, 5) for _ in range(3)]

        assert len(set(results)) == 1
        assert board == before


class TestDropDistance:

    def test_drop_to_floor(self):
        piece = spawn_piece(PieceType.O, 0, 10)
        assert drop_distance(Board.empty(10, 18), piece) == 16

    def test_drop_onto_stack(self):
        piece = spawn_piece(PieceType.O, 0, 10)
        board = Board.empty(10, 18).merge([(piece.x, 10)], True)
        assert drop_distance(board, piece) == 8


class TestSnakeCollisions:

    def test_hits_wall(self):
        assert hits_wall(18, 16, (-1, 5)) is True
        assert hits_wall(18, 16, (18, 5)) is True
        assert hits_wall(18, 16, (3, 16)) is True
        assert hits_wall(18, 16, (0, 0)) is False

    def test_tail_is_excluded_when_not_growing(self):
        segments = [(5, 5), (5, 6), (6, 6), (6, 5)]
        assert hits_self(segments, (6, 5), grows=False) is False

    def test_tail_counts_when_growing(self):
        segments = [(5, 5), (5, 6), (6, 6), (6, 5)]
        assert hits_self(segments, (6, 5), grows=True) is True

    def test_body_hit(self):
        segments = [(5, 5), (5, 6), (6, 6), (6, 5), (7, 5)]
        assert hits_self(segments, (6, 5), grows=False) is True
