"""
Collision and placement checks shared by both games.

Every function here is a pure query: nothing is mutated, so callers can test
candidate positions as often as they like.
"""

from typing import Sequence

from .board import Board
from .constants import Point
from .pieces import Piece


def can_place(board: Board, piece: Piece, offset_x: int = 0, offset_y: int = 0) -> bool:
    """
    Decide whether `piece`, shifted by the offset, fits on the board.

    Rules per block:
    1. x outside the board -> illegal
    2. y at or below the bottom edge -> illegal
    3. y above the top edge -> legal (pieces may spawn partially off-top)
    4. otherwise the target cell must be empty
    """
    if piece is None:
        return False
    for x, y in piece.cells(offset_x, offset_y):
        if x < 0 or x >= board.width:
            return False
        if y >= board.height:
            return False
        if y < 0:
            continue
        if board.is_occupied(x, y):
            return False
    return True


def drop_distance(board: Board, piece: Piece) -> int:
    """Maximal number of rows the piece can fall from where it is."""
    distance = 0
    while can_place(board, piece, 0, distance + 1):
        distance += 1
    return distance


def hits_wall(width: int, height: int, point: Point) -> bool:
    x, y = point
    return x < 0 or x >= width or y < 0 or y >= height


def hits_self(segments: Sequence[Point], next_head: Point, grows: bool) -> bool:
    """
    Check whether moving the head to `next_head` bites the snake's own body.

    When the move does not grow the snake, its tail vacates its cell on the
    same tick, so the tail is excluded from the check.
    """
    body = list(segments) if grows else list(segments)[:-1]
    return next_head in body
