"""
Scoring for Chaos Drop.

After each lock the settled board is analysed for surface chaos (stack height
plus bumpiness) and buried holes. Messier boards score more; every cleared row
takes points back.
"""

import math
from dataclasses import dataclass
from typing import List

from .board import Board
from .constants import CLEARED_ROW_PENALTY, HOLE_WEIGHT


@dataclass(frozen=True)
class BoardAnalysis:
    total_height: int
    bumpiness: int
    holes: int
    surface_chaos: int
    chaos_score: int


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def column_heights(board: Board) -> List[int]:
    return board.column_heights()


def count_holes(board: Board) -> int:
    """Empty cells that have at least one occupied cell above them in the same column."""
    holes = 0
    for x in range(board.width):
        seen_block = False
        for y in range(board.height):
            if board.rows[y][x] is not None:
                seen_block = True
            elif seen_block:
                holes += 1
    return holes


def bumpiness(heights: List[int]) -> int:
    return sum(abs(heights[i] - heights[i - 1]) for i in range(1, len(heights)))


def evaluate_board(board: Board) -> BoardAnalysis:
    heights = column_heights(board)
    total_height = sum(heights)
    bumps = bumpiness(heights)
    holes = count_holes(board)
    surface_chaos = total_height + bumps
    return BoardAnalysis(
        total_height=total_height,
        bumpiness=bumps,
        holes=holes,
        surface_chaos=surface_chaos,
        chaos_score=max(1, round_half_up(surface_chaos / 2 + holes * HOLE_WEIGHT)),
    )


def score_delta(analysis: BoardAnalysis, cleared_rows: int) -> int:
    return analysis.chaos_score - cleared_rows * CLEARED_ROW_PENALTY


def apply_lock_score(score: int, analysis: BoardAnalysis, cleared_rows: int) -> int:
    """Add one lock's contribution to the running score, never dropping below 0."""
    return max(0, score + score_delta(analysis, cleared_rows))
