"""Manually driven clock and timer for development and testing.

Time only moves when ``advance`` is called, and due callbacks only run when
the timer is told to fire them. This makes expiry races reproducible: a test
can move the clock past a deadline without firing the timer, then call
``pay()`` and watch the order expire lazily.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from storefront.scheduling.port import Clock, Timer, TimerHandle


class ManualClock(Clock):
    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)

    def now(self) -> datetime:
        return self._now

    def advance(self, **delta) -> datetime:
        """Move time forward, e.g. ``advance(minutes=15)``."""
        self._now = self._now + timedelta(**delta)
        return self._now


class ScheduledCall(TimerHandle):
    def __init__(self, due_at: datetime, callback: Callable[[], None]) -> None:
        self.due_at = due_at
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)


class ManualTimer(Timer):
    """Collects scheduled callbacks and fires them on demand."""

    def __init__(self, clock: ManualClock) -> None:
        self.clock = clock
        self.calls: list[ScheduledCall] = []

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        call = ScheduledCall(self.clock.now() + timedelta(seconds=delay_seconds), callback)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> list[ScheduledCall]:
        return [call for call in self.calls if call.active]

    def fire_due(self) -> int:
        """Run every active callback whose due time has been reached."""
        due = [call for call in self.pending if call.due_at <= self.clock.now()]
        for call in due:
            call.fired = True
            call.callback()
        return len(due)

    def fire_all(self, force: bool = False) -> int:
        """Run every scheduled callback, cancelled ones too when ``force`` is set.

        Forcing simulates a timer that was already on its way when it was
        cancelled.
        """
        calls = [call for call in self.calls if force or call.active]
        for call in calls:
            call.fired = True
            call.callback()
        return len(calls)

    def advance(self, **delta) -> int:
        self.clock.advance(**delta)
        return self.fire_due()
