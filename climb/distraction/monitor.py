"""
Distraction Monitor — turns attention lost/regained edges into point penalties
while a focus session is running.

Penalty modes (settings["distraction_penalty_mode"]):
    double    periodic 1-per-minute ticks AND a lump of elapsed minutes on regain
    periodic  ticks only
    elapsed   lump on regain only

"double" is the default and matches the behavior the app has always had.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..clock import Scheduler, TimerHandle
from ..progress.ledger import ProgressionLedger
from ..settings import get_settings
from .attention import AttentionSignal

logger = logging.getLogger(__name__)

MS_PER_MINUTE = 60_000


class MonitorState(str, Enum):
    INACTIVE = "inactive"        # no session, signals ignored
    ATTENTIVE = "attentive"
    DISTRACTED = "distracted"


@dataclass
class DistractionEpisode:
    started_at_ms: int
    minutes_ticked: int = 0
    points_lost: int = 0         # sum actually debited, after clamping


@dataclass(frozen=True)
class DistractionReport:
    minutes_lost: int
    points_lost: int
    reason: str                  # "regained" | "session_ended" | "simulated"


class DistractionMonitor:

    def __init__(
        self,
        ledger: ProgressionLedger,
        scheduler: Scheduler,
        tick_interval_s: float = 60.0,
    ):
        self._ledger = ledger
        self._scheduler = scheduler
        self._tick_interval_s = tick_interval_s
        self._session_active = False
        self._ticker: Optional[TimerHandle] = None
        self.episode: Optional[DistractionEpisode] = None
        self._listeners: List[Callable[[DistractionReport], None]] = []

    # ------------------------------------------------------------------
    # Session gate
    # ------------------------------------------------------------------

    def session_started(self) -> None:
        self._session_active = True

    def session_ended(self) -> Optional[DistractionReport]:
        """Detach the gate; an open episode closes without a lump penalty."""
        self._session_active = False
        if self.episode is None:
            return None
        episode = self._close_episode()
        return self._report(episode, self._elapsed_minutes(episode), "session_ended")

    @property
    def state(self) -> MonitorState:
        if self.episode is not None:
            return MonitorState.DISTRACTED
        return MonitorState.ATTENTIVE if self._session_active else MonitorState.INACTIVE

    @property
    def distracted(self) -> bool:
        return self.episode is not None

    def on_report(self, fn: Callable[[DistractionReport], None]) -> None:
        self._listeners.append(fn)

    # ------------------------------------------------------------------
    # Attention signal
    # ------------------------------------------------------------------

    def handle(self, signal: AttentionSignal) -> Optional[DistractionReport]:
        if signal == AttentionSignal.LOST:
            self.attention_lost()
            return None
        return self.attention_regained()

    def attention_lost(self) -> bool:
        """Open an episode. Returns False (no-op) without a running session."""
        if not self._session_active or self.episode is not None:
            return False
        self.episode = DistractionEpisode(started_at_ms=self._scheduler.now_ms())
        self._ticker = self._scheduler.every(self._tick_interval_s, self._on_minute)
        logger.info("Attention lost during focus session")
        return True

    def attention_regained(self) -> Optional[DistractionReport]:
        if self.episode is None:
            return None
        s = get_settings()
        episode = self._close_episode()
        minutes = self._elapsed_minutes(episode)
        if s["distraction_penalty_mode"] in ("double", "elapsed") and minutes >= 1:
            self._penalise(episode, minutes * s["distraction_penalty_per_minute"], "distraction:elapsed")
        return self._report(episode, max(minutes, episode.minutes_ticked), "regained")

    def simulate_distraction(self, minutes: int = 5) -> Optional[DistractionReport]:
        """Apply a ready-made episode of *minutes* length. Needs a running, attentive session."""
        if not self._session_active or self.episode is not None or minutes <= 0:
            return None
        episode = DistractionEpisode(started_at_ms=self._scheduler.now_ms())
        per_minute = get_settings()["distraction_penalty_per_minute"]
        self._penalise(episode, minutes * per_minute, "distraction:simulated")
        return self._report(episode, minutes, "simulated")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _on_minute(self) -> None:
        if self.episode is None:
            return
        s = get_settings()
        self.episode.minutes_ticked += 1
        if s["distraction_penalty_mode"] in ("double", "periodic"):
            self._penalise(self.episode, s["distraction_penalty_per_minute"], "distraction:minute")

    def _penalise(self, episode: DistractionEpisode, points: int, reason: str) -> None:
        applied = self._ledger.add_points(-points, reason=reason)
        episode.points_lost += -applied

    def _elapsed_minutes(self, episode: DistractionEpisode) -> int:
        # a host clock moved backwards must not turn into a negative penalty
        return max(0, (self._scheduler.now_ms() - episode.started_at_ms) // MS_PER_MINUTE)

    def _close_episode(self) -> DistractionEpisode:
        episode = self.episode
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        self.episode = None
        return episode

    def _report(self, episode: DistractionEpisode, minutes: int, reason: str) -> DistractionReport:
        report = DistractionReport(
            minutes_lost=minutes,
            points_lost=episode.points_lost,
            reason=reason,
        )
        logger.info(
            "Distraction episode closed (%s): %d min, %d points lost",
            reason, report.minutes_lost, report.points_lost,
        )
        for fn in list(self._listeners):
            fn(report)
        return report
