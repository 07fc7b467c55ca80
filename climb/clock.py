"""
Clock & Ticker — the heartbeats that drive the focus countdown (1 s) and the
distraction penalty (1 min).

Both implementations share one small contract:

    handle = scheduler.every(1.0, callback)
    scheduler.now_ms()
    handle.cancel()

AsyncioScheduler runs on the event loop (real time). VirtualScheduler keeps its
own clock and only moves when advance() is called, which makes sessions and
distraction episodes reproducible in tests and in scripts/simulate.py.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """A cancellable periodic timer. Cancelling twice is harmless."""

    def __init__(self, interval_s: float, callback: Callable[[], None]):
        self.interval_s = interval_s
        self.callback = callback
        self.cancelled = False
        self._on_cancel: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> None:
        if self.cancelled:
            return
        self.cancelled = True
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None

    def _fire(self) -> None:
        try:
            self.callback()
        except Exception:
            logger.exception("Timer callback %r failed", self.callback)


class Scheduler:
    """Base interface used by the session machine and the distraction monitor."""

    def every(self, interval_s: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError

    def now_ms(self) -> int:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Real time
# ---------------------------------------------------------------------------

class AsyncioScheduler(Scheduler):

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def every(self, interval_s: float, callback: Callable[[], None]) -> TimerHandle:
        """Fire on fixed deadlines (start + n * interval) so slow callbacks do not drift."""
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        loop = self._get_loop()
        handle = TimerHandle(interval_s, callback)
        start = loop.time()
        fires = itertools.count(1)

        def _run() -> None:
            if not handle.active:
                return
            handle._fire()
            if handle.active:
                _arm()

        def _arm() -> None:
            deadline = start + next(fires) * interval_s
            pending = loop.call_at(deadline, _run)
            handle._on_cancel = pending.cancel

        _arm()
        return handle

    def now_ms(self) -> int:
        return int(time.time() * 1000)


# ---------------------------------------------------------------------------
# Virtual time
# ---------------------------------------------------------------------------

class VirtualScheduler(Scheduler):
    """
    Deterministic scheduler with a manually advanced clock.

    Timers due at the same instant fire in the order they were queued.
    """

    def __init__(self, start_ms: int = 0):
        self._now_ms = start_ms
        self._skew_ms = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int, TimerHandle]] = []

    def every(self, interval_s: float, callback: Callable[[], None]) -> TimerHandle:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        handle = TimerHandle(interval_s, callback)
        self._push(self._now_ms + int(interval_s * 1000), handle)
        return handle

    def now_ms(self) -> int:
        return self._now_ms + self._skew_ms

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every due timer. Returns the fire count."""
        target = self._now_ms + int(seconds * 1000)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._now_ms = due
            handle._fire()
            fired += 1
            if handle.active:
                self._push(due + int(handle.interval_s * 1000), handle)
        self._now_ms = target
        return fired

    def skew(self, delta_ms: int) -> None:
        """Shift the reported wall clock only; timers keep their own pace."""
        self._skew_ms += delta_ms

    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.active)

    def _push(self, due: int, handle: TimerHandle) -> None:
        heapq.heappush(self._queue, (due, next(self._seq), handle))
