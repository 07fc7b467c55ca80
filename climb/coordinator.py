"""
Session/Reward Coordinator — wires session completion, distraction penalties
and task rewards into the one ProgressionLedger.

Usage:
    coord = Coordinator(VirtualScheduler())
    coord.start_session("classic")
    coord.attention(AttentionSignal.LOST)
    coord.ledger.snapshot()
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Tuple

from .clock import Scheduler
from .config import config
from .distraction.attention import AttentionSignal, VisibilityTracker
from .distraction.monitor import DistractionMonitor, DistractionReport
from .progress.economy import EconomyGateway
from .progress.ledger import ProgressionLedger
from .progress.profile import Profile
from .progress.store import Store
from .services.genai import sanitize_points
from .session.machine import FocusSession, FocusSessionMachine, SessionCompleted, SessionPhase
from .session.presets import get_preset
from .settings import get_settings
from .tasks.board import TaskBoard

logger = logging.getLogger(__name__)


class View(str, Enum):
    DASHBOARD = "dashboard"
    TASKS = "tasks"
    STORE = "store"
    SOCIAL = "social"
    SETTINGS = "settings"


class Coordinator:

    def __init__(
        self,
        scheduler: Scheduler,
        ledger: Optional[ProgressionLedger] = None,
        session_tick_s: Optional[float] = None,
        distraction_tick_s: Optional[float] = None,
    ):
        self.scheduler = scheduler
        self.ledger = ledger or ProgressionLedger(
            starting_points=config.starting_points,
            history_size=config.history_size,
        )
        self.economy = EconomyGateway(self.ledger)
        self.profile = Profile(name=config.profile_name)
        self.store = Store(self.economy, self.profile.avatar)
        self.tasks = TaskBoard()

        self.session = FocusSessionMachine(
            scheduler, tick_interval_s=session_tick_s or config.session_tick_s
        )
        self.monitor = DistractionMonitor(
            self.ledger, scheduler,
            tick_interval_s=distraction_tick_s or config.distraction_tick_s,
        )

        self.visibility = VisibilityTracker()
        self.active_view = View.DASHBOARD
        self.pending_penalty: Optional[DistractionReport] = None

        self.session.on_started(self._on_session_started)
        self.session.on_ended(self._on_session_ended)
        self.session.on_completed(self._on_session_completed)
        self.monitor.on_report(self._on_distraction_report)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    @property
    def session_active(self) -> bool:
        return self.session.is_running

    def start_session(self, preset_id: str) -> FocusSession:
        return self.session.start(get_preset(preset_id))

    def abort_session(self) -> FocusSession:
        return self.session.abort()

    def _on_session_started(self, session: FocusSession) -> None:
        self.monitor.session_started()

    def _on_session_ended(self, session: FocusSession, phase: SessionPhase) -> None:
        self.monitor.session_ended()

    def _on_session_completed(self, event: SessionCompleted) -> None:
        s = get_settings()
        self.ledger.add_points(s["session_reward_points"], reason=f"session:{event.preset_id}")
        self.ledger.add_height(s["session_reward_height"], reason=f"session:{event.preset_id}")
        self.ledger.add_focus_time(event.focus_seconds, reason=f"session:{event.preset_id}")

    # ------------------------------------------------------------------
    # Distraction
    # ------------------------------------------------------------------

    def attention(self, signal: AttentionSignal) -> Optional[DistractionReport]:
        self.visibility.update(signal == AttentionSignal.LOST)
        return self.monitor.handle(signal)

    def report_visibility(
        self, hidden: bool
    ) -> Tuple[Optional[AttentionSignal], Optional[DistractionReport]]:
        """Level-style report. Repeats of the current visibility are dropped."""
        signal = self.visibility.update(hidden)
        if signal is None:
            return None, None
        return signal, self.monitor.handle(signal)

    def _on_distraction_report(self, report: DistractionReport) -> None:
        if report.points_lost > 0:
            self.pending_penalty = report
        if report.reason in ("regained", "simulated"):
            # corrective action: send the user back to the focus view
            self.active_view = View.DASHBOARD

    def acknowledge_penalty(self) -> None:
        """Dismiss the last penalty notice. The ledger is not touched."""
        self.pending_penalty = None

    # ------------------------------------------------------------------
    # Task rewards
    # ------------------------------------------------------------------

    def award_task_points(self, value: Any, reason: str = "task") -> int:
        points = sanitize_points(value)
        if points == 0 and value not in (0, 0.0):
            logger.warning("Ignoring unusable task reward %r", value)
        return self.ledger.add_points(points, reason=reason)

    def toggle_subtask(self, task_id: str, subtask_id: str) -> int:
        earned = self.tasks.toggle_subtask(task_id, subtask_id)
        if earned:
            return self.award_task_points(earned, reason=f"subtask:{subtask_id}")
        return 0

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def select_character(self, character_id: str) -> None:
        self.profile.select_character(character_id)

    def set_view(self, view: View) -> None:
        self.active_view = view
