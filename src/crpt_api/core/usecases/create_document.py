from __future__ import annotations

import logging
from threading import Event
from typing import Optional

from ..domain.models import Document
from ..domain.results import SubmissionResult
from ..domain.schemas import CreateDocumentRequest
from ..errors import AcquireCancelledError, ApiError, TransportError
from ..ports.rate_limiter_port import RateLimiterPort
from ..ports.transport_port import TransportPort

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json"
DEFAULT_USER_AGENT = "CrptApi/1.0"


class CreateDocumentUseCase:
    """Submit one document through the rate limiter.

    The permit taken by ``acquire`` is never returned: a request that ends in
    an API or transport error still counts against the current window.
    """

    def __init__(
        self,
        rate_limiter: RateLimiterPort,
        transport: TransportPort,
        url: str,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._transport = transport
        self._url = url
        self._headers = {
            "Content-Type": CONTENT_TYPE,
            "Accept": CONTENT_TYPE,
            "User-Agent": user_agent,
        }

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def execute(
        self,
        document: Document,
        signature: str,
        *,
        timeout: Optional[float] = None,
        cancel: Optional[Event] = None,
    ) -> SubmissionResult:
        try:
            self._rate_limiter.acquire(timeout=timeout, cancel=cancel)
        except AcquireCancelledError as e:
            return SubmissionResult.cancelled(e)

        body = CreateDocumentRequest.build(document, signature).to_bytes()
        try:
            resp = self._transport.post(self._url, body, self._headers)
        except TransportError as e:
            logger.warning(f"Transport failure submitting document {document.oms_id}: {e}")
            return SubmissionResult.transport_error(e)

        if resp.status_code >= 400:
            logger.warning(f"API rejected document {document.oms_id}: {resp.status_code}")
            return SubmissionResult.api_error(ApiError(resp.status_code, resp.text))

        logger.debug(f"Document {document.oms_id} accepted: {resp.status_code}")
        return SubmissionResult.success(resp.status_code, resp.text)
