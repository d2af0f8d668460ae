"""Clock and timer ports (abstract interfaces).

The checkout needs to know the current time and to be woken up when a
reservation window closes. How that happens (a thread, an event loop, a
test stepping time by hand) is up to the adapter.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime


class Clock(ABC):
    """Source of the current, timezone-aware UTC time."""

    @abstractmethod
    def now(self) -> datetime: ...


class TimerHandle(ABC):
    """A scheduled callback that can still be called off."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once."""
        ...


class Timer(ABC):
    """Runs a callback once after a delay."""

    @abstractmethod
    def schedule(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle: ...
