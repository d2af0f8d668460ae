"""Wall-clock adapters backed by the standard library."""

import threading
from collections.abc import Callable
from datetime import UTC, datetime

from storefront.scheduling.port import Clock, Timer, TimerHandle


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(UTC)


class _ThreadHandle(TimerHandle):
    def __init__(self, thread: threading.Timer) -> None:
        self._thread = thread

    def cancel(self) -> None:
        self._thread.cancel()


class ThreadingTimer(Timer):
    """Fires callbacks on a daemon ``threading.Timer`` thread."""

    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        thread = threading.Timer(max(0.0, delay_seconds), callback)
        thread.daemon = True
        thread.start()
        return _ThreadHandle(thread)
