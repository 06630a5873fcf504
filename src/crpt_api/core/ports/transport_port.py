from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    text: str


class TransportPort(Protocol):
    def post(self, url: str, content: bytes, headers: Mapping[str, str]) -> TransportResponse:
        """Send a POST and return status and body.

        Raises TransportError when no response could be obtained. Non-2xx
        statuses are returned, not raised.
        """
        ...

    def close(self) -> None:
        """Release the underlying connection pool."""
