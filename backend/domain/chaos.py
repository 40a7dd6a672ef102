"""
Chaos Drop - the falling-block game.

The board only stores locked blocks; the falling piece lives in
`current_piece` and is merged into the board when it locks. Every lock
clears full rows, re-scores the surface and spawns the queued next piece.
"""

import logging
import random
from typing import Any, Dict, Optional

from .board import Board
from .collision import can_place, drop_distance
from .constants import (
    CHAOS_BOARD_HEIGHT,
    CHAOS_BOARD_WIDTH,
    DROP_DELAY_MS,
    SOFT_DROP_DELAY_MS,
)
from .pieces import Piece, random_piece
from .run import RunController
from .scoring import BoardAnalysis, apply_lock_score, count_holes, evaluate_board

logger = logging.getLogger(__name__)

GRAVITY_TIMER = "gravity"


class ChaosGame(RunController):
    """
    Manages:
      - The settled board
      - The falling piece and the next-piece preview
      - Gravity (normal and soft drop speed)
      - Chaos score, lines cleared and placements
    """

    game_name = "chaos"

    def __init__(
        self,
        width: int = CHAOS_BOARD_WIDTH,
        height: int = CHAOS_BOARD_HEIGHT,
        rng: Optional[random.Random] = None,
    ):
        super().__init__()
        if width < 4 or height < 4:
            raise ValueError(f"Board {width}x{height} is too small for Chaos Drop pieces.")
        self.width = width
        self.height = height
        self.rng = rng or random.Random()
        self._reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self.board = Board.empty(self.width, self.height)
        self.current_piece: Optional[Piece] = None
        self.next_piece: Piece = random_piece(self.width, self.rng)
        self.chaos_score = 0
        self.lines_cleared = 0
        self.placements = 0
        self.soft_dropping = False
        self.last_analysis: Optional[BoardAnalysis] = None

    def _schedule_timers(self) -> None:
        self.scheduler.schedule(GRAVITY_TIMER, DROP_DELAY_MS, self.gravity_tick)

    def _after_start(self) -> None:
        self._spawn_next()

    @property
    def score(self) -> int:
        return self.chaos_score

    def _final_extras(self) -> Dict[str, Any]:
        return {
            'placements': self.placements,
            'holes': count_holes(self.board),
            'lines_cleared': self.lines_cleared,
        }

    # ------------------------------------------------------------------
    # Timer callback
    # ------------------------------------------------------------------

    def gravity_tick(self) -> None:
        """Move the piece down one row, locking it when it cannot fall."""
        if not self.is_running or self.current_piece is None:
            return
        if can_place(self.board, self.current_piece, 0, 1):
            self.current_piece = self.current_piece.moved(0, 1)
        else:
            self._lock(self.current_piece)

    # ------------------------------------------------------------------
    # Player controls
    # ------------------------------------------------------------------

    def move_piece(self, dx: int, dy: int) -> bool:
        """
        Shift the falling piece. A blocked sideways move is ignored; a blocked
        downward move locks the piece.

        Returns:
            True if the piece moved
        """
        if not self.is_running or self.current_piece is None:
            return False
        if can_place(self.board, self.current_piece, dx, dy):
            self.current_piece = self.current_piece.moved(dx, dy)
            return True
        if dy > 0:
            self._lock(self.current_piece)
        return False

    def move(self, dx: int) -> bool:
        """Horizontal shift; ignored when blocked."""
        return self.move_piece(dx, 0)

    def move_left(self) -> bool:
        return self.move_piece(-1, 0)

    def move_right(self) -> bool:
        return self.move_piece(1, 0)

    def soft_drop_step(self) -> bool:
        return self.move_piece(0, 1)

    def rotate(self, direction: int = 1) -> bool:
        """
        Rotate the falling piece, nudging it back inside the side walls.
        If the rotated piece does not fit, the piece keeps its old rotation.

        Returns:
            True if the rotation was applied
        """
        if not self.is_running or self.current_piece is None:
            return False
        candidate = self.current_piece.rotated(direction)
        if candidate.x + candidate.width > self.width:
            candidate = candidate.moved(self.width - candidate.width - candidate.x, 0)
        if candidate.x < 0:
            candidate = candidate.moved(-candidate.x, 0)
        if can_place(self.board, candidate):
            self.current_piece = candidate
            return True
        return False

    def hard_drop(self) -> int:
        """
        Drop the piece as far as it goes and lock it immediately.

        Returns:
            Number of rows the piece fell
        """
        if not self.is_running or self.current_piece is None:
            return 0
        distance = drop_distance(self.board, self.current_piece)
        self._lock(self.current_piece.moved(0, distance))
        return distance

    def set_soft_drop(self, enabled: bool) -> None:
        """Switch gravity between normal and soft-drop speed."""
        if enabled == self.soft_dropping:
            return
        self.soft_dropping = enabled
        if self.is_running:
            self.scheduler.set_interval(
                GRAVITY_TIMER, SOFT_DROP_DELAY_MS if enabled else DROP_DELAY_MS
            )

    # ------------------------------------------------------------------
    # Locking and spawning
    # ------------------------------------------------------------------

    def _lock(self, piece: Piece) -> None:
        merged = self.board.merge(piece.cells(), piece.tag)
        cleared_board, cleared_rows = merged.clear_full_rows()
        analysis = evaluate_board(cleared_board)

        self.board = cleared_board
        self.current_piece = None
        self.lines_cleared += cleared_rows
        self.chaos_score = apply_lock_score(self.chaos_score, analysis, cleared_rows)
        self.placements += 1
        self.last_analysis = analysis
        logger.debug(
            f"Locked {piece.kind.value} at ({piece.x}, {piece.y}): cleared={cleared_rows}, "
            f"holes={analysis.holes}, score={self.chaos_score}"
        )
        self._spawn_next()

    def _spawn_next(self) -> bool:
        """Bring in the queued piece; a blocked spawn ends the run."""
        candidate = self.next_piece or random_piece(self.width, self.rng)
        if not can_place(self.board, candidate):
            self.current_piece = None
            self.soft_dropping = False
            self.end_run("board_full")
            return False
        self.current_piece = candidate
        self.next_piece = random_piece(self.width, self.rng)
        return True

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def ghost_piece(self) -> Optional[Piece]:
        """Where the falling piece would land with a hard drop."""
        if self.current_piece is None:
            return None
        return self.current_piece.moved(0, drop_distance(self.board, self.current_piece))

    def composite_board(self) -> Board:
        """The settled board with the falling piece merged in."""
        if self.current_piece is None:
            return self.board.copy()
        return self.board.merge(self.current_piece.cells(), self.current_piece.tag)

    def render(self) -> str:
        """
        Text view of the board: locked blocks show their piece letter, the
        falling piece is drawn with '@'.
        """
        overlay = {}
        if self.current_piece is not None:
            for cell in self.current_piece.cells():
                overlay[cell] = '@'
        return self.board.render(overlay)

    def __repr__(self):
        return (
            f"<ChaosGame status={self.status.value}, score={self.chaos_score}, "
            f"placements={self.placements}, lines={self.lines_cleared}>"
        )
