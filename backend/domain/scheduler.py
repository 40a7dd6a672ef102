"""
Tick scheduler driving the games.

The engine never touches a real clock. An outer loop (a UI frame loop, the
headless CLI, or a test) calls `advance(dt_ms)` and the scheduler fires every
timer that came due during that slice, oldest deadline first. Callbacks run to
completion one at a time, so game state is never mutated concurrently.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class Timer:
    name: str
    interval_ms: int
    callback: Callable[[], None]
    due_at: int
    order: int


class TickScheduler:
    """
    A set of named periodic timers on a simulated millisecond clock.
    """

    def __init__(self):
        self.now = 0
        self._timers: Dict[str, Timer] = {}
        self._order = 0

    def schedule(self, name: str, interval_ms: int, callback: Callable[[], None]) -> None:
        """Register (or replace) a periodic timer first due `interval_ms` from now."""
        if interval_ms <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval_ms}.")
        self._order += 1
        self._timers[name] = Timer(
            name=name,
            interval_ms=interval_ms,
            callback=callback,
            due_at=self.now + interval_ms,
            order=self._order,
        )

    def set_interval(self, name: str, interval_ms: int) -> None:
        """Change a timer's interval and re-arm it from the current time."""
        if interval_ms <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval_ms}.")
        timer = self._timers.get(name)
        if timer is None:
            return
        timer.interval_ms = interval_ms
        timer.due_at = self.now + interval_ms

    def interval(self, name: str) -> Optional[int]:
        timer = self._timers.get(name)
        return timer.interval_ms if timer else None

    def cancel(self, name: str) -> None:
        self._timers.pop(name, None)

    def clear(self) -> None:
        self._timers.clear()

    def is_scheduled(self, name: str) -> bool:
        return name in self._timers

    def _next_due(self, until: int) -> Optional[Timer]:
        due = [t for t in self._timers.values() if t.due_at <= until]
        if not due:
            return None
        return min(due, key=lambda t: (t.due_at, t.order))

    def advance(self, dt_ms: int, keep_going: Optional[Callable[[], bool]] = None) -> int:
        """
        Move the clock forward by `dt_ms`, firing due timers in deadline order.

        Args:
            dt_ms: Milliseconds to simulate (must be >= 0)
            keep_going: Optional predicate checked before every firing; once it
                        returns False no further callbacks run in this slice.

        Returns:
            Number of callbacks fired
        """
        if dt_ms < 0:
            raise ValueError(f"Cannot advance by a negative duration ({dt_ms} ms).")
        until = self.now + dt_ms
        fired = 0
        while True:
            if keep_going is not None and not keep_going():
                break
            timer = self._next_due(until)
            if timer is None:
                break
            self.now = timer.due_at
            # Re-arm before the callback so it can override the next deadline.
            timer.due_at = self.now + timer.interval_ms
            timer.callback()
            fired += 1
        self.now = until
        return fired
