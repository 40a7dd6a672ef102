"""
Run lifecycle shared by every arcade game.

A run goes idle -> running -> over. `start()` always rebuilds the game from
scratch, so a finished run can be restarted, and ending a run cancels every
timer so nothing keeps ticking against a frozen or reset board.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .constants import ELAPSED_INTERVAL_MS
from .scheduler import TickScheduler

logger = logging.getLogger(__name__)

ELAPSED_TIMER = "elapsed"


class RunStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    OVER = "over"


@dataclass(frozen=True)
class RunSnapshot:
    """
    Immutable end-of-run record handed to the score submission collaborator.

    Attributes:
        game: game key ('snake', 'chaos')
        score: final score
        elapsed_seconds: whole seconds the run lasted
        reason: why the run ended, e.g. 'wall', 'self', 'caught', 'board_full'
        extras: game-specific statistics (placements, holes, longest, ...)
    """

    game: str
    score: int
    elapsed_seconds: int
    reason: str
    extras: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'extras', MappingProxyType(dict(self.extras)))

    def to_submission(self, username: str) -> Dict[str, Any]:
        return {
            'username': username,
            'score': self.score,
            'completion_time_seconds': self.elapsed_seconds,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game': self.game,
            'score': self.score,
            'elapsed_seconds': self.elapsed_seconds,
            'reason': self.reason,
            'extras': dict(self.extras),
        }


class RunController:
    """
    Base class for a single-player arcade run.

    Subclasses implement `_reset()` to rebuild their state, `_schedule_timers()`
    to register their movement timers, `score` and `_final_extras()`.
    """

    game_name = "arcade"

    def __init__(self):
        self.scheduler = TickScheduler()
        self.status = RunStatus.IDLE
        self.elapsed_seconds = 0
        self.end_reason: Optional[str] = None
        self.final_snapshot: Optional[RunSnapshot] = None

    @property
    def is_running(self) -> bool:
        return self.status is RunStatus.RUNNING

    @property
    def is_over(self) -> bool:
        return self.status is RunStatus.OVER

    @property
    def score(self) -> int:
        raise NotImplementedError

    def start(self) -> None:
        """Reset everything and begin a new run."""
        self.scheduler.clear()
        self.elapsed_seconds = 0
        self.end_reason = None
        self.final_snapshot = None
        self._reset()
        self.status = RunStatus.RUNNING
        self.scheduler.schedule(ELAPSED_TIMER, ELAPSED_INTERVAL_MS, self._tick_elapsed)
        self._schedule_timers()
        logger.info(f"Started {self.game_name} run")
        self._after_start()

    def advance(self, dt_ms: int) -> int:
        """
        Feed `dt_ms` of time to the run. Does nothing unless the run is live.

        Returns:
            Number of timer callbacks fired
        """
        if not self.is_running:
            return 0
        return self.scheduler.advance(dt_ms, keep_going=lambda: self.is_running)

    def end_run(self, reason: str) -> Optional[RunSnapshot]:
        """
        Transition to `over` and freeze the final snapshot. Safe to call twice;
        only the first call captures a snapshot.
        """
        if not self.is_running:
            return self.final_snapshot
        self.status = RunStatus.OVER
        self.end_reason = reason
        self.scheduler.clear()
        self.final_snapshot = RunSnapshot(
            game=self.game_name,
            score=self.score,
            elapsed_seconds=self.elapsed_seconds,
            reason=reason,
            extras=self._final_extras(),
        )
        logger.info(
            f"{self.game_name} run over ({reason}): score={self.final_snapshot.score}, "
            f"time={self.elapsed_seconds}s"
        )
        return self.final_snapshot

    def _tick_elapsed(self) -> None:
        if self.is_running:
            self.elapsed_seconds += 1

    def _reset(self) -> None:
        raise NotImplementedError

    def _schedule_timers(self) -> None:
        raise NotImplementedError

    def _after_start(self) -> None:
        """Hook run once the run is live (e.g. spawn the first piece)."""

    def _final_extras(self) -> Dict[str, Any]:
        return {}
