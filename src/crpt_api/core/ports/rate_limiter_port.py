from __future__ import annotations

from threading import Event
from typing import Optional, Protocol


class RateLimiterPort(Protocol):
    def acquire(self, timeout: Optional[float] = None, cancel: Optional[Event] = None) -> None:
        """Block until a permit is available according to the configured window.

        Raises AcquireCancelledError if the wait is abandoned (timeout, cancel
        event set, limiter closed). No permit is consumed in that case.
        """

    def close(self) -> None:
        """Stop any background replenishment and release waiters."""
