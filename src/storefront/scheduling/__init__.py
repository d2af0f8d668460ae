"""Clock and timer adapters used to drive reservation expiry."""

from storefront.scheduling.fake_adapter import ManualClock, ManualTimer
from storefront.scheduling.port import Clock, Timer, TimerHandle
from storefront.scheduling.system_adapter import SystemClock, ThreadingTimer

__all__ = [
    "Clock",
    "ManualClock",
    "ManualTimer",
    "SystemClock",
    "ThreadingTimer",
    "Timer",
    "TimerHandle",
]
