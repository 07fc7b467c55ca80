"""
Progression Ledger — the single authority for points, derived level, climb
height and accumulated focus time.

Every mutation is clamped (points never drop below zero), recomputes the level
from points, records a ProgressEvent in the in-memory history and notifies
subscribers with the new snapshot.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Callable, Deque, List

logger = logging.getLogger(__name__)

POINTS_PER_LEVEL = 1000


def level_for(points: int) -> int:
    return max(1, points // POINTS_PER_LEVEL + 1)


@dataclass(frozen=True)
class UserProgress:
    points: int = 0
    level: int = 1
    climb_height: int = 0
    total_focus_time: int = 0      # seconds


@dataclass
class ProgressEvent:
    kind: str           # "points" | "height" | "focus_time" | "spend"
    requested: int
    applied: int
    reason: str = ""
    timestamp: float = field(default_factory=time.time)


Listener = Callable[[UserProgress], None]


class ProgressionLedger:
    """
    Usage:
        ledger = ProgressionLedger(starting_points=150)
        ledger.add_points(-20, reason="distraction")
        ledger.snapshot().level
    """

    def __init__(self, starting_points: int = 0, history_size: int = 500):
        if starting_points < 0:
            raise ValueError("starting_points must be >= 0")
        self._state = UserProgress(points=starting_points, level=level_for(starting_points))
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._history: Deque[ProgressEvent] = deque(maxlen=history_size)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_points(self, delta: int, reason: str = "") -> int:
        """Add *delta* (may be negative). Returns the delta actually applied."""
        with self._lock:
            before = self._state.points
            after = max(0, before + int(delta))
            applied = after - before
            self._record("points", delta, applied, reason)
            if applied:
                self._commit(replace(self._state, points=after, level=level_for(after)))
            return applied

    def add_height(self, delta: int, reason: str = "") -> int:
        if delta < 0:
            raise ValueError("climb height only increases")
        with self._lock:
            self._record("height", delta, delta, reason)
            if delta:
                self._commit(replace(self._state, climb_height=self._state.climb_height + delta))
            return delta

    def add_focus_time(self, seconds: int, reason: str = "") -> int:
        if seconds < 0:
            raise ValueError("focus time only increases")
        with self._lock:
            self._record("focus_time", seconds, seconds, reason)
            if seconds:
                self._commit(
                    replace(self._state, total_focus_time=self._state.total_focus_time + seconds)
                )
            return seconds

    def try_debit(self, amount: int, reason: str = "") -> bool:
        """Atomic check-then-debit. No partial debits. *amount* must be a positive int."""
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise ValueError(f"debit amount must be a positive integer, got {amount!r}")
        with self._lock:
            if self._state.points < amount:
                self._record("spend", -amount, 0, reason)
                return False
            after = self._state.points - amount
            self._record("spend", -amount, -amount, reason)
            self._commit(replace(self._state, points=after, level=level_for(after)))
            return True

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def snapshot(self) -> UserProgress:
        return self._state

    @property
    def points(self) -> int:
        return self._state.points

    def history(self, limit: int = 100) -> List[ProgressEvent]:
        with self._lock:
            events = list(self._history)
        return events[-limit:] if limit else events

    def subscribe(self, fn: Listener) -> Callable[[], None]:
        """Register a callback(snapshot) called after every change. Returns an unsubscribe."""
        self._listeners.append(fn)

        def _unsubscribe() -> None:
            if fn in self._listeners:
                self._listeners.remove(fn)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _record(self, kind: str, requested: int, applied: int, reason: str) -> None:
        self._history.append(ProgressEvent(kind, int(requested), int(applied), reason))

    def _commit(self, new_state: UserProgress) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Ledger listener %r failed", listener)
