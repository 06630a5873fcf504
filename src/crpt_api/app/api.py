from __future__ import annotations

from threading import Event

from .container import Container
from ..config.settings import AppConfig
from ..core.domain.enums import TimeUnit
from ..core.domain.models import Document
from ..core.domain.results import SubmissionResult
from ..core.errors import AcquireCancelledError
from ..infra.rate_limiter import FixedWindowRateLimiter


class CrptApiClient:
    """Thread-safe client for the document registration API.

    Every submission first takes a permit from a fixed window rate limiter
    shared by all threads using this client, so no more than
    ``request_limit`` requests leave the process per window.

    Example:
        # 5 requests per second
        with CrptApiClient(time_unit=TimeUnit.SECONDS, request_limit=5) as client:
            doc = Document("oms-1", "RU", "milk", description="2.5%")
            client.create_document(doc, signature)

        # Branch on the outcome instead of catching exceptions
        with CrptApiClient() as client:
            result = client.submit(doc, signature, timeout=1.0)
            if result.status is SubmissionStatus.API_ERROR:
                print(result.status_code, result.body)
    """

    def __init__(
        self,
        time_unit: TimeUnit | str | None = None,
        request_limit: int | None = None,
        *,
        window_count: int | None = None,
        base_url: str | None = None,
        user_agent: str | None = None,
        connect_timeout_seconds: float | None = None,
        read_timeout_seconds: float | None = None,
    ):
        """Initialize the client and start its rate limiter.

        Args:
            time_unit: Window unit. If None, uses CRPT_API_WINDOW_UNIT or SECONDS.
            request_limit: Requests allowed per window, must be > 0.
                          If None, uses CRPT_API_REQUEST_LIMIT or default (10).
            window_count: Window length in time_unit units (default: 1).
            base_url: Registration API root. Documents are POSTed to {base_url}/documents.
            user_agent: User-Agent header value (default: CrptApi/1.0).
            connect_timeout_seconds: Connect timeout (default: 10).
            read_timeout_seconds: Response read timeout (default: 30).

        Raises:
            ValueError: If request_limit is not positive or another setting is invalid.
                       Nothing is started in that case.
        """
        if request_limit is not None and request_limit <= 0:
            raise ValueError("request_limit must be > 0")

        self._container = Container()

        # Build config dict with only provided values
        config_dict: dict[str, object] = {}
        if time_unit is not None:
            config_dict["window_unit"] = TimeUnit(time_unit)
        if request_limit is not None:
            config_dict["request_limit"] = request_limit
        if window_count is not None:
            config_dict["window_count"] = window_count
        if base_url is not None:
            config_dict["base_url"] = base_url
        if user_agent is not None:
            config_dict["user_agent"] = user_agent
        if connect_timeout_seconds is not None:
            config_dict["connect_timeout_seconds"] = connect_timeout_seconds
        if read_timeout_seconds is not None:
            config_dict["read_timeout_seconds"] = read_timeout_seconds

        if config_dict:
            config = AppConfig(**config_dict)
            self._container.config.from_pydantic(config)

        self._container.init_resources()
        # Resource providers re-initialize on access after shutdown; keep the live instances
        self._rate_limiter: FixedWindowRateLimiter = self._container.rate_limiter()
        self._create_document_uc = self._container.create_document_uc()
        self._closed = False

    @property
    def rate_limiter(self) -> FixedWindowRateLimiter:
        return self._rate_limiter

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(
        self,
        document: Document,
        signature: str,
        *,
        timeout: float | None = None,
        cancel: Event | None = None,
    ) -> SubmissionResult:
        """Submit a document and return the outcome without raising.

        Blocks while the current window's permits are exhausted.

        Args:
            document: Document to register.
            signature: Signature string, sent verbatim.
            timeout: Maximum seconds to wait for a permit. None waits indefinitely.
            cancel: Optional event; setting it abandons the permit wait.

        Returns:
            SubmissionResult with status OK, API_ERROR, TRANSPORT_ERROR or CANCELLED.
            A closed client always returns CANCELLED without sending anything.
        """
        if self._closed:
            return SubmissionResult.cancelled(AcquireCancelledError("client is closed"))
        return self._create_document_uc.execute(document, signature, timeout=timeout, cancel=cancel)

    def create_document(
        self,
        document: Document,
        signature: str,
        *,
        timeout: float | None = None,
        cancel: Event | None = None,
    ) -> SubmissionResult:
        """Submit a document, raising on any failure.

        Returns:
            The successful SubmissionResult (status code and response body).

        Raises:
            ApiError: The API answered with status >= 400.
            TransportError: No response could be obtained.
            AcquireCancelledError: The permit wait timed out or was cancelled,
                                   or the client is closed.
        """
        result = self.submit(document, signature, timeout=timeout, cancel=cancel)
        result.raise_for_error()
        return result

    def close(self) -> None:
        """Stop the rate limiter thread and close HTTP connections.

        Example:
            client = CrptApiClient(TimeUnit.SECONDS, 5)
            try:
                client.create_document(doc, signature)
            finally:
                client.close()
        """
        if self._closed:
            return
        self._closed = True
        self._container.shutdown_resources()

    def __enter__(self) -> CrptApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "CrptApiClient",
    "AppConfig",
]
