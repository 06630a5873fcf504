"""crpt_api package: app/core/infra/config.

Expose the rate-limited registration API client at the package level.
"""

from .app.api import AppConfig, CrptApiClient
from .core.domain.enums import SubmissionStatus, TimeUnit
from .core.domain.models import Document, DocumentOptions
from .core.domain.results import SubmissionResult
from .core.errors import AcquireCancelledError, ApiError, CrptApiError, TransportError
from .infra.rate_limiter import FixedWindowRateLimiter

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "CrptApiClient",
    "AppConfig",
    "Document",
    "DocumentOptions",
    "SubmissionResult",
    "SubmissionStatus",
    "TimeUnit",
    "FixedWindowRateLimiter",
    "CrptApiError",
    "ApiError",
    "TransportError",
    "AcquireCancelledError",
]
