from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.errors import TransportError
from ..core.ports.transport_port import TransportResponse

logger = logging.getLogger(__name__)


class HttpxTransport:
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 30.0,
        connect_timeout_seconds: float = 10.0,
    ) -> None:
        self._client = httpx.Client(
            timeout=httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds),
            headers=dict(base_headers or {}),
            follow_redirects=False,
        )

    def post(self, url: str, content: bytes, headers: Mapping[str, str]) -> TransportResponse:
        try:
            resp = self._client.post(url, content=content, headers=dict(headers))
        except httpx.RequestError as e:
            raise TransportError(f"{type(e).__name__} while calling {url}: {e}") from e
        logger.debug(f"POST {url} -> {resp.status_code}")
        return TransportResponse(status_code=resp.status_code, text=resp.text)

    def close(self) -> None:
        self._client.close()
