from __future__ import annotations


class CrptApiError(Exception):
    """Base class for every error raised by the document client."""


class ApiError(CrptApiError):
    """The registration API answered with a status code >= 400."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


class TransportError(CrptApiError):
    """The request never produced an HTTP response (connect, TLS, read...)."""


class AcquireCancelledError(CrptApiError):
    """A caller stopped waiting for a rate limiter permit.

    Raised on timeout, on the caller's cancel event, or when the limiter is
    closed underneath a waiter. No permit has been consumed.
    """
