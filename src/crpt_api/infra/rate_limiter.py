from __future__ import annotations

import logging
import time
from datetime import timedelta
from threading import Condition, Event, Lock, Thread, current_thread
from typing import Optional

from ..core.domain.enums import TimeUnit
from ..core.errors import AcquireCancelledError
from ..core.ports.rate_limiter_port import RateLimiterPort

logger = logging.getLogger(__name__)

# Upper bound on how long a waiter sleeps before re-checking its cancel event.
_CANCEL_POLL_SECONDS = 0.05


class FixedWindowRateLimiter(RateLimiterPort):
    """Fixed window rate limiter with a background replenishment thread.

    At most ``request_limit`` permits are handed out per window. A ticker
    thread fires every ``window`` (at ``start + k * window``, so the cadence
    does not drift with call volume) and resets the available permits back
    to ``request_limit``. Unused permits are discarded at each tick; they do
    not accumulate across windows.

    Bursts of up to ``2 * request_limit`` calls are possible around a window
    boundary. That is inherent to the fixed window policy.

    Example:
        # 5 document submissions per second
        with FixedWindowRateLimiter(request_limit=5, window=1.0) as limiter:
            limiter.acquire()

        # Same thing expressed with a time unit
        limiter = FixedWindowRateLimiter.per(TimeUnit.MINUTES, request_limit=100)
        try:
            limiter.acquire(timeout=2.0)
        finally:
            limiter.close()
    """

    def __init__(
        self,
        request_limit: int,
        window: float | timedelta,
        *,
        autostart: bool = True,
    ) -> None:
        """Initialize the limiter.

        Args:
            request_limit: Permits available per window. Must be > 0.
            window: Window length in seconds, or a timedelta. Must be > 0.
            autostart: Start the replenishment thread immediately. When False,
                      ``start()`` must be called, or ``replenish()`` driven by hand.

        Raises:
            ValueError: If request_limit or window is not positive.
        """
        if request_limit <= 0:
            raise ValueError("request_limit must be > 0")
        window_seconds = window.total_seconds() if isinstance(window, timedelta) else float(window)
        if window_seconds <= 0:
            raise ValueError("window must be > 0")

        self._limit = request_limit
        self._window = window_seconds
        self._available = request_limit
        self._cond = Condition(Lock())
        self._stop = Event()
        self._closed = False
        self._ticks = 0
        self._thread: Optional[Thread] = None

        if autostart:
            self.start()

    @classmethod
    def per(
        cls,
        time_unit: TimeUnit,
        request_limit: int,
        count: int = 1,
        *,
        autostart: bool = True,
    ) -> "FixedWindowRateLimiter":
        """Build a limiter allowing ``request_limit`` calls per ``count`` time units."""
        return cls(request_limit, time_unit.window(count), autostart=autostart)

    @property
    def request_limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window

    @property
    def available(self) -> int:
        with self._cond:
            return self._available

    @property
    def ticks(self) -> int:
        """Number of replenishments performed so far."""
        with self._cond:
            return self._ticks

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        with self._cond:
            if self._closed:
                raise RuntimeError("rate limiter is closed")
            if self._thread is not None:
                return
            self._thread = Thread(target=self._run, name="crpt-api-rate-limiter", daemon=True)
            self._thread.start()
        logger.info(f"Rate limiter started: {self._limit} requests per {self._window}s")

    def _run(self) -> None:
        next_tick = time.monotonic() + self._window
        while not self._stop.wait(max(0.0, next_tick - time.monotonic())):
            self.replenish()
            next_tick += self._window

    def replenish(self) -> None:
        """Reset available permits to the limit and wake every waiter."""
        with self._cond:
            unused = self._available
            self._available = self._limit
            self._ticks += 1
            ticks = self._ticks
            self._cond.notify_all()
        logger.debug(f"Rate limiter tick #{ticks}: {unused} unused permits discarded")

    def try_acquire(self) -> bool:
        """Take a permit if one is available right now, without blocking."""
        with self._cond:
            if self._closed or self._available <= 0:
                return False
            self._available -= 1
            return True

    def acquire(self, timeout: Optional[float] = None, cancel: Optional[Event] = None) -> None:
        """Acquire a permit, blocking until the next window if none is left.

        Args:
            timeout: Maximum seconds to wait. None waits indefinitely.
            cancel: Optional event; setting it abandons the wait.

        Raises:
            AcquireCancelledError: If the timeout expires, ``cancel`` is set,
                                   or the limiter is closed while waiting.
        """
        deadline = None if timeout is None else time.monotonic() + max(0.0, timeout)
        with self._cond:
            while True:
                if self._closed:
                    raise AcquireCancelledError("rate limiter is closed")
                if self._available > 0:
                    self._available -= 1
                    return
                if cancel is not None and cancel.is_set():
                    logger.debug("Permit wait cancelled by caller")
                    raise AcquireCancelledError("permit wait cancelled")

                wait: Optional[float] = None
                if deadline is not None:
                    wait = deadline - time.monotonic()
                    if wait <= 0:
                        logger.debug(f"Permit wait timed out after {timeout}s")
                        raise AcquireCancelledError(f"timed out after {timeout}s waiting for a permit")
                if cancel is not None:
                    wait = _CANCEL_POLL_SECONDS if wait is None else min(wait, _CANCEL_POLL_SECONDS)
                self._cond.wait(wait)

    def close(self) -> None:
        """Stop the replenishment thread. Pending waiters get AcquireCancelledError."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not current_thread():
            thread.join()
        logger.info("Rate limiter stopped")

    def __enter__(self) -> FixedWindowRateLimiter:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
