# a11y_scout/crawler/fetcher.py
"""
Fetcher module: the crawler's HTTP collaborator built on aiohttp.
"""
from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, Sequence, Type

from aiohttp import ClientError, ClientSession, ClientTimeout

from a11y_scout.crawler.models import FetchResponse

if TYPE_CHECKING:
    from a11y_scout.config import AuditConfig

__all__ = ("FetchFn", "HttpFetcher", "RETRY_STATUS")

#: async ``fetch(url) -> FetchResponse``; raises on network failure
FetchFn = Callable[[str], Awaitable[FetchResponse]]

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

logger = logging.getLogger("A11yScout")


class HttpFetcher:
    """Fetches pages over one ClientSession, with timeout and optional retry/backoff.

    Usage::

        async with HttpFetcher(user_agent="Bot/1.0") as fetcher:
            response = await fetcher.fetch("https://example.com/")
    """

    def __init__(
        self,
        *,
        user_agent: str = "A11yScoutBot/1.0",
        timeout: float = 10.0,
        retry_times: int = 0,
        retry_status: Sequence[int] = RETRY_STATUS,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self.retry_times = retry_times
        self._retry_status = retry_status
        self.session: Optional[ClientSession] = None

    @classmethod
    def from_config(cls, config: AuditConfig) -> HttpFetcher:
        return cls(
            user_agent=config.user_agent,
            timeout=config.request_timeout,
            retry_times=config.retry_times,
        )

    async def __aenter__(self) -> HttpFetcher:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def fetch(self, url: str) -> FetchResponse:
        """
        GET ``url``. The body is read only for 2xx responses.

        Retryable statuses are retried ``retry_times`` times with exponential
        backoff; the last response is returned as is. Network errors and
        timeouts propagate once retries are exhausted.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    reason = resp.reason or ""
                    if status in self._retry_status and attempts < self.retry_times:
                        raise ClientError(f"retryable status {status}")
                    if 200 <= status < 300:
                        text = await resp.text(errors="replace")
                        return FetchResponse(status, reason, text)
                    return FetchResponse(status, reason)
            except (ClientError, asyncio.TimeoutError) as exc:
                attempts += 1
                if attempts > self.retry_times:
                    raise
                backoff = min(60, 2 ** (attempts - 1) * 0.5)
                logger.debug(
                    "Retry %d/%d for %s after %.2f s (%s)", attempts, self.retry_times, url, backoff, exc
                )
                await asyncio.sleep(backoff)
