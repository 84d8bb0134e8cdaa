"""JSON transport for the content API.

Every content API response is JSON, so the client exposes a single
``fetch_json``. Requests go through the standard library in a worker thread,
paced by a shared token bucket, and transient failures (network errors, 429,
5xx) are retried with exponential backoff.
"""

from __future__ import annotations

import asyncio
import gzip
import json
import logging
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from ..config import CONNECT_TIMEOUT, MAX_RETRIES, RATE_LIMIT, READ_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

MAX_BACKOFF = 10.0
MAX_RETRY_AFTER = 60.0


@dataclass(frozen=True)
class HTTPError(Exception):
    """The content API answered with a non-2xx status."""

    url: str
    status_code: int
    headers: dict[str, str]
    content: bytes

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"HTTP {self.status_code} for {self.url}"


@dataclass(frozen=True)
class RawResponse:
    status: int
    headers: dict[str, str]
    body: bytes

    @property
    def retryable(self) -> bool:
        return self.status == 429 or self.status >= 500


class RateLimiter:
    """Token bucket shared by all requests of one client."""

    def __init__(self, rate: float = RATE_LIMIT):
        if rate <= 0:
            raise ValueError("rate must be > 0")
        self.rate = float(rate)
        self._tokens = float(rate)
        self._stamp = time.monotonic()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = time.monotonic()
        self._tokens = min(self.rate, self._tokens + (now - self._stamp) * self.rate)
        self._stamp = now

    async def acquire(self) -> None:
        while True:
            async with self._lock:
                self._refill()
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return
                delay = (1.0 - self._tokens) / self.rate
            await asyncio.sleep(delay)


class CMSClient:
    """Async JSON client for the content API."""

    def __init__(
        self,
        user_agent: str = USER_AGENT,
        rate_limit: float = RATE_LIMIT,
        max_retries: int = MAX_RETRIES,
        backoff: float = 1.0,
    ):
        self.user_agent = user_agent
        self._limiter = RateLimiter(rate_limit)
        self._attempts = max(1, int(max_retries))
        self._backoff = backoff

    async def fetch_json(self, url: str) -> tuple[Any, dict[str, str]]:
        """GET ``url`` and decode its JSON body.

        Returns:
            Decoded payload and response headers

        Raises:
            HTTPError: Non-2xx status (after retries for 429/5xx)
            urllib.error.URLError: Network failure on the last attempt
            ValueError: Body is not UTF-8 JSON
        """
        delay = self._backoff
        for attempt in range(1, self._attempts + 1):
            last = attempt == self._attempts
            await self._limiter.acquire()
            try:
                response = await asyncio.to_thread(self._get, url)
            except (urllib.error.URLError, OSError) as e:
                if last:
                    raise
                logger.debug("Network error on %s (attempt %d): %s", url, attempt, e)
                await asyncio.sleep(delay)
                delay = min(delay * 2.0, MAX_BACKOFF)
                continue

            if response.retryable and not last:
                wait = _retry_after(response.headers)
                logger.debug("HTTP %d on %s (attempt %d), retrying", response.status, url, attempt)
                await asyncio.sleep(delay if wait is None else wait)
                delay = min(delay * 2.0, MAX_BACKOFF)
                continue

            if response.status >= 400:
                raise HTTPError(
                    url=url,
                    status_code=response.status,
                    headers=response.headers,
                    content=response.body,
                )
            return json.loads(response.body.decode("utf-8")), response.headers

        raise RuntimeError("unreachable")

    def _get(self, url: str) -> RawResponse:
        # urllib only has a single timeout, so we pick the larger of connect/read.
        timeout = max(float(CONNECT_TIMEOUT), float(READ_TIMEOUT))
        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": self.user_agent,
                "Accept": "application/json",
                "Accept-Encoding": "gzip",
            },
            method="GET",
        )
        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                status = int(getattr(resp, "status", 200))
                headers = dict(resp.headers.items())
                body = resp.read() or b""
        except urllib.error.HTTPError as e:
            status = int(e.code or 0)
            headers = dict(e.headers.items()) if e.headers else {}
            body = e.read() or b""
        return RawResponse(status=status, headers=headers, body=_decompress(body, headers))


def _decompress(body: bytes, headers: dict[str, str]) -> bytes:
    if (headers.get("Content-Encoding") or "").lower() != "gzip":
        return body
    try:
        return gzip.decompress(body)
    except (OSError, EOFError):
        return body


def _retry_after(headers: dict[str, str]) -> float | None:
    value = headers.get("Retry-After")
    if not value:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    return max(0.0, min(seconds, MAX_RETRY_AFTER))


_global_client: CMSClient | None = None


def get_client() -> CMSClient:
    """Shared client, so every ContentAPI paces requests through one limiter."""
    global _global_client
    if _global_client is None:
        _global_client = CMSClient()
    return _global_client
