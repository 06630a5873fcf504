from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .enums import SubmissionStatus
from ..errors import AcquireCancelledError, ApiError, CrptApiError, TransportError


@dataclass(frozen=True)
class SubmissionResult:
    status: SubmissionStatus
    status_code: Optional[int] = None
    body: Optional[str] = None
    error: Optional[CrptApiError] = None

    @property
    def ok(self) -> bool:
        return self.status is SubmissionStatus.OK

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    @staticmethod
    def success(status_code: int, body: str) -> "SubmissionResult":
        return SubmissionResult(SubmissionStatus.OK, status_code=status_code, body=body)

    @staticmethod
    def api_error(error: ApiError) -> "SubmissionResult":
        return SubmissionResult(
            SubmissionStatus.API_ERROR,
            status_code=error.status_code,
            body=error.body,
            error=error,
        )

    @staticmethod
    def transport_error(error: TransportError) -> "SubmissionResult":
        return SubmissionResult(SubmissionStatus.TRANSPORT_ERROR, error=error)

    @staticmethod
    def cancelled(error: AcquireCancelledError) -> "SubmissionResult":
        return SubmissionResult(SubmissionStatus.CANCELLED, error=error)
