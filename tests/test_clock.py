"""Tests for the virtual and asyncio schedulers."""

import asyncio

import pytest

from climb.clock import AsyncioScheduler, VirtualScheduler


class TestVirtualScheduler:
    def test_fires_on_interval(self):
        sched = VirtualScheduler()
        calls = []
        sched.every(1.0, lambda: calls.append(sched.now_ms()))
        sched.advance(3)
        assert calls == [1000, 2000, 3000]

    def test_cancel_stops_firing(self):
        sched = VirtualScheduler()
        calls = []
        handle = sched.every(1.0, lambda: calls.append(1))
        sched.advance(2)
        handle.cancel()
        handle.cancel()
        sched.advance(10)
        assert len(calls) == 2
        assert sched.pending() == 0

    def test_ties_fire_in_queue_order(self):
        sched = VirtualScheduler()
        order = []
        sched.every(60, lambda: order.append("a"))
        sched.every(60, lambda: order.append("b"))
        sched.advance(60)
        assert order == ["a", "b"]

    def test_callback_can_cancel_itself(self):
        sched = VirtualScheduler()
        calls = []

        def once():
            calls.append(1)
            handle.cancel()

        handle = sched.every(5, once)
        sched.advance(60)
        assert calls == [1]

    def test_failing_callback_is_contained(self):
        sched = VirtualScheduler()
        calls = []

        def boom():
            calls.append(1)
            raise RuntimeError("nope")

        sched.every(1, boom)
        sched.advance(3)
        assert len(calls) == 3

    def test_skew_moves_reported_clock_only(self):
        sched = VirtualScheduler(start_ms=1_000_000)
        calls = []
        sched.every(60, lambda: calls.append(1))
        sched.skew(-500_000)
        assert sched.now_ms() == 500_000
        sched.advance(60)
        assert calls == [1]

    def test_non_positive_interval_rejected(self):
        with pytest.raises(ValueError):
            VirtualScheduler().every(0, lambda: None)


class TestAsyncioScheduler:
    async def test_fires_and_cancels(self):
        sched = AsyncioScheduler()
        calls = []
        handle = sched.every(0.01, lambda: calls.append(1))
        await asyncio.sleep(0.1)
        handle.cancel()
        fired = len(calls)
        assert fired >= 2
        await asyncio.sleep(0.05)
        assert len(calls) == fired

    async def test_now_ms_is_wall_clock(self):
        import time
        sched = AsyncioScheduler()
        assert abs(sched.now_ms() - time.time() * 1000) < 1000


class _ManualTimer:
    cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class _ManualLoop:
    """Just enough of an event loop to record call_at deadlines."""

    def __init__(self, now: float = 100.0):
        self.now = now
        self.calls = []

    def time(self) -> float:
        return self.now

    def call_at(self, when, callback):
        self.calls.append((when, callback))
        return _ManualTimer()


class TestAsyncioDeadlines:
    def test_slow_callbacks_do_not_push_later_deadlines(self):
        loop = _ManualLoop(now=100.0)
        sched = AsyncioScheduler(loop=loop)

        def slow():
            loop.now += 0.3             # callback overruns by 300 ms

        sched.every(1.0, slow)
        for _ in range(3):
            when, callback = loop.calls[-1]
            loop.now = when
            callback()

        deadlines = [when for when, _ in loop.calls]
        assert deadlines == pytest.approx([101.0, 102.0, 103.0, 104.0])

    def test_cancel_stops_rearming(self):
        loop = _ManualLoop()
        sched = AsyncioScheduler(loop=loop)
        handle = sched.every(1.0, lambda: None)
        assert handle.active
        handle.cancel()
        _, callback = loop.calls[-1]
        callback()
        assert len(loop.calls) == 1
        assert not handle.active
