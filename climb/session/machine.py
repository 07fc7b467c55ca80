"""
Focus Session State Machine — owns the session lifecycle and the one-second
countdown that drives it.

    IDLE → RUNNING → {COMPLETED, ABORTED} → IDLE

The countdown ticker is acquired in start() and released on every exit path
(completion and abort) before listeners are told the session has ended.
COMPLETED and ABORTED are only held while those listeners run; completed_count
keeps the record afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..clock import Scheduler, TimerHandle
from .presets import Preset

logger = logging.getLogger(__name__)


class SessionPhase(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class InvalidTransition(Exception):
    """Raised when an operation is not allowed from the current phase."""

    def __init__(self, operation: str, phase: SessionPhase):
        super().__init__(f"cannot {operation} while {phase.value}")
        self.operation = operation
        self.phase = phase


@dataclass
class FocusSession:
    preset_id: str
    focus_duration_seconds: int
    started_at_ms: int
    remaining_seconds: int

    def elapsed_seconds(self) -> int:
        return self.focus_duration_seconds - self.remaining_seconds


@dataclass(frozen=True)
class SessionCompleted:
    preset_id: str
    focus_seconds: int


class FocusSessionMachine:

    def __init__(self, scheduler: Scheduler, tick_interval_s: float = 1.0):
        self._scheduler = scheduler
        self._tick_interval_s = tick_interval_s
        self._ticker: Optional[TimerHandle] = None
        self.phase = SessionPhase.IDLE
        self.session: Optional[FocusSession] = None
        self.completed_count = 0

        self._on_started: List[Callable[[FocusSession], None]] = []
        self._on_ended: List[Callable[[FocusSession, SessionPhase], None]] = []
        self._on_completed: List[Callable[[SessionCompleted], None]] = []

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def on_started(self, fn: Callable[[FocusSession], None]) -> None:
        self._on_started.append(fn)

    def on_ended(self, fn: Callable[[FocusSession, SessionPhase], None]) -> None:
        """fn(session, phase) — phase is COMPLETED or ABORTED."""
        self._on_ended.append(fn)

    def on_completed(self, fn: Callable[[SessionCompleted], None]) -> None:
        self._on_completed.append(fn)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.phase == SessionPhase.RUNNING

    def start(self, preset: Preset) -> FocusSession:
        if self.phase == SessionPhase.RUNNING:
            raise InvalidTransition("start", self.phase)
        if preset.focus_minutes <= 0:
            raise ValueError("focus_minutes must be positive")

        duration = preset.focus_minutes * 60
        self.session = FocusSession(
            preset_id=preset.id,
            focus_duration_seconds=duration,
            started_at_ms=self._scheduler.now_ms(),
            remaining_seconds=duration,
        )
        self.phase = SessionPhase.RUNNING
        self._ticker = self._scheduler.every(self._tick_interval_s, self.tick)
        logger.info("Focus session started: %s (%d s)", preset.id, duration)

        for fn in list(self._on_started):
            fn(self.session)
        return self.session

    def tick(self) -> None:
        """Advance the countdown by one second. No-op unless running."""
        if self.phase != SessionPhase.RUNNING or self.session is None:
            return
        self.session.remaining_seconds = max(0, self.session.remaining_seconds - 1)
        if self.session.remaining_seconds == 0:
            self._complete()

    def abort(self) -> FocusSession:
        if self.phase != SessionPhase.RUNNING or self.session is None:
            raise InvalidTransition("abort", self.phase)
        session = self.session
        self._release_ticker()
        self.phase = SessionPhase.ABORTED
        logger.info("Focus session aborted with %d s left", session.remaining_seconds)
        self._notify_ended(session, SessionPhase.ABORTED)
        self.phase = SessionPhase.IDLE
        self.session = None
        return session

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _complete(self) -> None:
        session = self.session
        self._release_ticker()
        self.phase = SessionPhase.COMPLETED
        self.completed_count += 1
        logger.info("Focus session completed: %s", session.preset_id)

        self._notify_ended(session, SessionPhase.COMPLETED)
        event = SessionCompleted(
            preset_id=session.preset_id,
            focus_seconds=session.focus_duration_seconds,
        )
        for fn in list(self._on_completed):
            fn(event)
        self.phase = SessionPhase.IDLE
        self.session = None

    def _notify_ended(self, session: FocusSession, phase: SessionPhase) -> None:
        for fn in list(self._on_ended):
            fn(session, phase)

    def _release_ticker(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
