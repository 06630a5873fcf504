from __future__ import annotations

from datetime import timedelta
from enum import Enum


class TimeUnit(str, Enum):
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    def to_seconds(self, count: float = 1) -> float:
        return count * _UNIT_SECONDS[self]

    def window(self, count: int = 1) -> timedelta:
        """Return ``count`` units of this time unit as a window length."""
        return timedelta(seconds=self.to_seconds(count))


_UNIT_SECONDS = {
    TimeUnit.MILLISECONDS: 0.001,
    TimeUnit.SECONDS: 1.0,
    TimeUnit.MINUTES: 60.0,
    TimeUnit.HOURS: 3600.0,
    TimeUnit.DAYS: 86400.0,
}


class SubmissionStatus(str, Enum):
    OK = "OK"
    API_ERROR = "API_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    CANCELLED = "CANCELLED"
