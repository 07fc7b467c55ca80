"""Tests for the focus session state machine."""

import pytest

from climb.clock import VirtualScheduler
from climb.session.machine import FocusSessionMachine, InvalidTransition, SessionPhase
from climb.session.presets import PRESETS, Preset, get_preset

CLASSIC = get_preset("classic")


def _machine():
    sched = VirtualScheduler()
    return FocusSessionMachine(sched), sched


class TestPresets:
    def test_catalog_ids(self):
        assert [p.id for p in PRESETS] == ["classic", "short", "deep", "study"]

    def test_classic_is_25_minutes(self):
        assert CLASSIC.focus_minutes == 25

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("marathon")


class TestStart:
    def test_start_sets_countdown(self):
        machine, sched = _machine()
        session = machine.start(CLASSIC)
        assert machine.phase == SessionPhase.RUNNING
        assert session.remaining_seconds == 1500
        assert session.started_at_ms == sched.now_ms()
        assert sched.pending() == 1

    def test_second_start_rejected_and_countdown_kept(self):
        machine, _ = _machine()
        machine.start(CLASSIC)
        for _ in range(100):
            machine.tick()
        with pytest.raises(InvalidTransition):
            machine.start(get_preset("deep"))
        assert machine.session.remaining_seconds == 1400
        assert machine.session.preset_id == "classic"

    def test_zero_length_preset_rejected(self):
        machine, _ = _machine()
        with pytest.raises(ValueError):
            machine.start(Preset("none", "None", 0, 0, 0, 0))
        assert machine.phase == SessionPhase.IDLE


class TestTick:
    def test_1500_ticks_complete_exactly_once(self):
        machine, sched = _machine()
        completions = []
        machine.on_completed(completions.append)
        machine.start(CLASSIC)
        for _ in range(1499):
            machine.tick()
            assert machine.session.remaining_seconds >= 0
        assert machine.session.remaining_seconds == 1
        machine.tick()
        assert machine.phase == SessionPhase.IDLE
        assert len(completions) == 1
        assert completions[0].focus_seconds == 1500
        # ticker released; extra ticks are ignored
        assert sched.pending() == 0
        machine.tick()
        assert machine.session is None
        assert len(completions) == 1

    def test_scheduler_drives_countdown(self):
        machine, sched = _machine()
        completions = []
        machine.on_completed(completions.append)
        machine.start(CLASSIC)
        sched.advance(600)
        assert machine.session.remaining_seconds == 900
        sched.advance(2000)
        assert machine.phase == SessionPhase.IDLE
        assert len(completions) == 1

    def test_tick_when_idle_is_noop(self):
        machine, _ = _machine()
        machine.tick()
        assert machine.phase == SessionPhase.IDLE
        assert machine.session is None

    def test_completion_returns_to_idle_after_listeners(self):
        machine, sched = _machine()
        seen = []
        machine.on_ended(lambda s, phase: seen.append(("ended", machine.phase)))
        machine.on_completed(lambda e: seen.append(("completed", machine.phase)))
        machine.start(get_preset("short"))
        sched.advance(900)
        assert seen == [
            ("ended", SessionPhase.COMPLETED),
            ("completed", SessionPhase.COMPLETED),
        ]
        assert machine.phase == SessionPhase.IDLE
        assert machine.session is None
        assert machine.completed_count == 1

    def test_restart_after_completion(self):
        machine, sched = _machine()
        machine.start(get_preset("short"))
        sched.advance(900)
        assert machine.phase == SessionPhase.IDLE
        machine.start(CLASSIC)
        assert machine.phase == SessionPhase.RUNNING
        assert machine.completed_count == 1


class TestAbort:
    def test_abort_returns_to_idle(self):
        machine, sched = _machine()
        ended = []
        machine.on_ended(lambda s, phase: ended.append(phase))
        machine.start(CLASSIC)
        sched.advance(600)
        session = machine.abort()
        assert session.remaining_seconds == 900
        assert machine.phase == SessionPhase.IDLE
        assert machine.session is None
        assert ended == [SessionPhase.ABORTED]
        assert sched.pending() == 0

    def test_abort_when_idle_rejected(self):
        machine, _ = _machine()
        with pytest.raises(InvalidTransition):
            machine.abort()

    def test_no_ticks_after_abort(self):
        machine, sched = _machine()
        machine.start(CLASSIC)
        machine.abort()
        sched.advance(3000)
        assert machine.phase == SessionPhase.IDLE
        assert machine.completed_count == 0
