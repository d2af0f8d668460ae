"""Tests for the manual clock and timer adapters."""

from datetime import UTC, datetime, timedelta

from storefront.scheduling import Clock, ManualClock, ManualTimer, SystemClock, Timer


class TestManualClock:
    def test_starts_at_fixed_time(self):
        assert ManualClock().now() == datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def test_advance_moves_time(self):
        clock = ManualClock()
        start = clock.now()
        clock.advance(minutes=15)
        assert clock.now() - start == timedelta(minutes=15)

    def test_implements_port(self):
        assert isinstance(ManualClock(), Clock)


class TestManualTimer:
    def test_callback_fires_when_due(self):
        timer = ManualTimer(ManualClock())
        fired = []
        timer.schedule(60, lambda: fired.append("x"))

        assert timer.advance(seconds=59) == 0
        assert fired == []
        assert timer.advance(seconds=1) == 1
        assert fired == ["x"]

    def test_callback_fires_once(self):
        timer = ManualTimer(ManualClock())
        fired = []
        timer.schedule(1, lambda: fired.append("x"))
        timer.advance(seconds=5)
        timer.advance(seconds=5)
        assert fired == ["x"]

    def test_cancelled_callback_does_not_fire(self):
        timer = ManualTimer(ManualClock())
        fired = []
        handle = timer.schedule(1, lambda: fired.append("x"))
        handle.cancel()
        timer.advance(seconds=5)
        assert fired == []
        assert timer.pending == []

    def test_forced_fire_runs_cancelled_callbacks(self):
        timer = ManualTimer(ManualClock())
        fired = []
        handle = timer.schedule(1, lambda: fired.append("x"))
        handle.cancel()
        assert timer.fire_all(force=True) == 1
        assert fired == ["x"]

    def test_implements_port(self):
        assert isinstance(ManualTimer(ManualClock()), Timer)


class TestSystemClock:
    def test_returns_aware_time(self):
        assert SystemClock().now().tzinfo is not None
