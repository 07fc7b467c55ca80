"""Tests for the ProgressionLedger."""

import random

import pytest

from climb.progress.ledger import ProgressionLedger, level_for


class TestLevelFormula:
    @pytest.mark.parametrize("points,level", [
        (0, 1), (999, 1), (1000, 2), (1999, 2), (2000, 3), (12345, 13),
    ])
    def test_level_for(self, points, level):
        assert level_for(points) == level


class TestAddPoints:
    def test_positive_delta(self):
        ledger = ProgressionLedger(starting_points=150)
        assert ledger.add_points(100) == 100
        assert ledger.points == 250

    def test_negative_delta_clamps_to_zero(self):
        ledger = ProgressionLedger(starting_points=30)
        applied = ledger.add_points(-50)
        assert applied == -30
        assert ledger.points == 0

    def test_level_recomputed_on_change(self):
        ledger = ProgressionLedger(starting_points=950)
        ledger.add_points(100)
        assert ledger.snapshot().level == 2
        ledger.add_points(-200)
        assert ledger.snapshot().level == 1

    def test_random_sequences_keep_invariants(self):
        rng = random.Random(7)
        ledger = ProgressionLedger(starting_points=150)
        for _ in range(2000):
            ledger.add_points(rng.randint(-700, 900))
            snap = ledger.snapshot()
            assert snap.points >= 0
            assert snap.level == max(1, snap.points // 1000 + 1)

    def test_negative_starting_points_rejected(self):
        with pytest.raises(ValueError):
            ProgressionLedger(starting_points=-1)


class TestHeightAndFocusTime:
    def test_add_height(self):
        ledger = ProgressionLedger()
        ledger.add_height(50)
        ledger.add_height(50)
        assert ledger.snapshot().climb_height == 100

    def test_negative_height_rejected(self):
        ledger = ProgressionLedger()
        with pytest.raises(ValueError):
            ledger.add_height(-10)
        assert ledger.snapshot().climb_height == 0

    def test_focus_time_accumulates(self):
        ledger = ProgressionLedger()
        ledger.add_focus_time(1500)
        assert ledger.snapshot().total_focus_time == 1500
        with pytest.raises(ValueError):
            ledger.add_focus_time(-1)


class TestTryDebit:
    def test_insufficient_funds_no_change(self):
        ledger = ProgressionLedger(starting_points=300)
        assert ledger.try_debit(500) is False
        assert ledger.points == 300

    def test_exact_funds(self):
        ledger = ProgressionLedger(starting_points=300)
        assert ledger.try_debit(300) is True
        assert ledger.points == 0

    @pytest.mark.parametrize("amount", [-500, 0, True, 2.5, "10"])
    def test_invalid_amount_rejected_without_change(self, amount):
        ledger = ProgressionLedger(starting_points=100)
        with pytest.raises(ValueError):
            ledger.try_debit(amount)
        assert ledger.points == 100
        assert ledger.history() == []


class TestSubscribeAndHistory:
    def test_subscriber_receives_snapshot(self):
        ledger = ProgressionLedger(starting_points=10)
        seen = []
        ledger.subscribe(seen.append)
        ledger.add_points(5)
        assert seen[-1].points == 15

    def test_unsubscribe(self):
        ledger = ProgressionLedger()
        seen = []
        unsubscribe = ledger.subscribe(seen.append)
        unsubscribe()
        ledger.add_points(5)
        assert seen == []

    def test_no_notification_when_clamped_to_no_change(self):
        ledger = ProgressionLedger(starting_points=0)
        seen = []
        ledger.subscribe(seen.append)
        ledger.add_points(-5)
        assert seen == []

    def test_failing_listener_does_not_break_mutation(self):
        ledger = ProgressionLedger()

        def boom(_snap):
            raise RuntimeError("display crashed")

        ledger.subscribe(boom)
        ledger.add_points(10)
        assert ledger.points == 10

    def test_history_records_requested_and_applied(self):
        ledger = ProgressionLedger(starting_points=3)
        ledger.add_points(-5, reason="distraction:minute")
        event = ledger.history()[-1]
        assert event.kind == "points"
        assert event.requested == -5
        assert event.applied == -3
        assert event.reason == "distraction:minute"

    def test_history_is_bounded(self):
        ledger = ProgressionLedger(history_size=3)
        for _ in range(10):
            ledger.add_points(1)
        assert len(ledger.history(limit=0)) == 3
