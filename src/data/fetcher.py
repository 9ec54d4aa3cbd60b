"""Bounded HTTP GET fetcher used by both polling pipelines."""

from __future__ import annotations

from dataclasses import dataclass
import logging

import requests

_logger = logging.getLogger(__name__)

USER_AGENT = "transit-display/1.0"
CHUNK_SIZE = 1024


class TransportError(Exception):
    """Raised when a request fails at the connection, TLS, or timeout level."""


@dataclass(frozen=True)
class FetchResult:
    """Body and status of a single bounded GET."""

    body: bytes
    status_code: int
    truncated: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class BoundedFetcher:
    """GET a URL into at most ``capacity`` bytes.

    A response larger than the capacity is cut short and flagged as
    truncated; it is not treated as an error here.
    """

    def __init__(
        self,
        capacity: int,
        timeout_seconds: float,
        headers: dict[str, str] | None = None,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._timeout_seconds = timeout_seconds
        self._headers = {"User-Agent": USER_AGENT}
        if headers:
            self._headers.update(headers)

    @property
    def capacity(self) -> int:
        return self._capacity

    def fetch(self, url: str) -> FetchResult:
        try:
            with requests.get(
                url,
                headers=self._headers,
                timeout=self._timeout_seconds,
                stream=True,
            ) as response:
                status_code = response.status_code
                body, truncated = self._read_bounded(response)
        except requests.RequestException as exc:
            raise TransportError(f"GET {url} failed: {exc}") from exc

        _logger.info("HTTP status=%d len=%d", status_code, len(body))
        if truncated:
            _logger.warning("HTTP body truncated (capacity=%d) for %s", self._capacity, url)
        return FetchResult(body=body, status_code=status_code, truncated=truncated)

    def _read_bounded(self, response: requests.Response) -> tuple[bytes, bool]:
        buffer = bytearray()
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if not chunk:
                continue
            # Any data arriving once the buffer is full means the body was cut.
            if len(buffer) >= self._capacity:
                return bytes(buffer), True
            kept = chunk[: self._capacity - len(buffer)]
            buffer.extend(kept)
            if len(kept) < len(chunk):
                return bytes(buffer), True
        return bytes(buffer), False


__all__ = ["BoundedFetcher", "FetchResult", "TransportError"]
