from __future__ import annotations

import json
import threading

import pytest

from crpt_api.core.domain.enums import SubmissionStatus
from crpt_api.core.domain.models import Document
from crpt_api.core.errors import AcquireCancelledError, ApiError, TransportError
from crpt_api.core.ports.transport_port import TransportResponse
from crpt_api.core.usecases.create_document import CreateDocumentUseCase
from crpt_api.infra.rate_limiter import FixedWindowRateLimiter

URL = "https://api.example/v1/documents"


class _StubLimiter:
    def __init__(self, cancel: bool = False) -> None:
        self.calls: list[tuple[float | None, threading.Event | None]] = []
        self._cancel = cancel

    def acquire(self, timeout=None, cancel=None) -> None:
        self.calls.append((timeout, cancel))
        if self._cancel:
            raise AcquireCancelledError("timed out")

    def close(self) -> None:
        pass


class _StubTransport:
    def __init__(self, response: TransportResponse | None = None, error: Exception | None = None) -> None:
        self.sent: list[tuple[str, bytes, dict]] = []
        self._response = response
        self._error = error

    def post(self, url, content, headers):
        self.sent.append((url, content, dict(headers)))
        if self._error is not None:
            raise self._error
        return self._response

    def close(self) -> None:
        pass


DOC = Document("1", "RU", "milk")


def test_success_sends_payload_and_headers():
    limiter = _StubLimiter()
    transport = _StubTransport(TransportResponse(200, '{"ok":true}'))
    uc = CreateDocumentUseCase(limiter, transport, URL)

    result = uc.execute(DOC, "sig", timeout=1.5)

    assert result.ok
    assert result.status_code == 200
    assert result.body == '{"ok":true}'
    assert limiter.calls == [(1.5, None)]
    url, content, headers = transport.sent[0]
    assert url == URL
    assert json.loads(content) == {
        "document": {"omsId": "1", "country": "RU", "product": "milk", "description": None, "serialNumber": None},
        "signature": "sig",
    }
    assert headers == {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "User-Agent": "CrptApi/1.0",
    }


def test_custom_user_agent():
    transport = _StubTransport(TransportResponse(200, ""))
    uc = CreateDocumentUseCase(_StubLimiter(), transport, URL, user_agent="acme/2")
    uc.execute(DOC, "sig")
    assert transport.sent[0][2]["User-Agent"] == "acme/2"


def test_status_429_maps_to_api_error_and_keeps_permit_consumed():
    limiter = FixedWindowRateLimiter(request_limit=2, window=60.0, autostart=False)
    body = '{"error":"too many requests"}'
    uc = CreateDocumentUseCase(limiter, _StubTransport(TransportResponse(429, body)), URL)

    result = uc.execute(DOC, "sig")

    assert result.status is SubmissionStatus.API_ERROR
    assert result.status_code == 429
    assert result.body == body
    assert isinstance(result.error, ApiError)
    assert result.error.status_code == 429
    assert result.error.body == body
    assert limiter.available == 1


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_error_statuses_map_to_api_error(status):
    uc = CreateDocumentUseCase(_StubLimiter(), _StubTransport(TransportResponse(status, "x")), URL)
    assert uc.execute(DOC, "sig").status is SubmissionStatus.API_ERROR


@pytest.mark.parametrize("status", [200, 201, 202, 302, 399])
def test_statuses_below_400_are_success(status):
    uc = CreateDocumentUseCase(_StubLimiter(), _StubTransport(TransportResponse(status, "")), URL)
    assert uc.execute(DOC, "sig").ok


def test_transport_error_is_reported():
    err = TransportError("ConnectError while calling x")
    uc = CreateDocumentUseCase(_StubLimiter(), _StubTransport(error=err), URL)

    result = uc.execute(DOC, "sig")

    assert result.status is SubmissionStatus.TRANSPORT_ERROR
    assert result.error is err
    with pytest.raises(TransportError):
        result.raise_for_error()


def test_cancelled_acquire_skips_the_request():
    transport = _StubTransport(TransportResponse(200, ""))
    cancel = threading.Event()
    limiter = _StubLimiter(cancel=True)
    uc = CreateDocumentUseCase(limiter, transport, URL)

    result = uc.execute(DOC, "sig", cancel=cancel)

    assert result.status is SubmissionStatus.CANCELLED
    assert isinstance(result.error, AcquireCancelledError)
    assert transport.sent == []
    assert limiter.calls == [(None, cancel)]
