# keyword_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET over a shared session with a single HTTPS retry.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from keyword_scout.buffers import BufferPool
from keyword_scout.crawler.models import PageData
from keyword_scout.errors import UnresolvedOrTimedOutError
from keyword_scout.utils import to_https

__all__ = ("Fetcher", "build_session", "DEFAULT_TIMEOUT")

#: per-request timeout in seconds
DEFAULT_TIMEOUT: float = 10.0

_TRANSPORT_ERRORS = (ClientError, asyncio.TimeoutError)


def build_session(
    concurrency: int,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None,
) -> ClientSession:
    """Create a keep-alive session whose connection pool is sized to *concurrency*.

    Must be called from inside a running event loop.
    """
    connector = TCPConnector(limit=concurrency, limit_per_host=concurrency)
    headers = {"User-Agent": user_agent} if user_agent else None
    return ClientSession(
        connector=connector,
        timeout=ClientTimeout(total=timeout),
        headers=headers,
        raise_for_status=False,
    )


class Fetcher:
    """Reads whole response bodies into pooled buffers, retrying once over HTTPS."""

    CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        session: ClientSession,
        pool: Optional[BufferPool] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.session = session
        self.pool = pool if pool is not None else BufferPool()
        self.logger = logger

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and return its body.

        A failed plain-HTTP request is retried exactly once with the scheme
        switched to ``https``; the returned PageData carries the URL that
        succeeded. Non-2xx responses are not failures. Raises
        UnresolvedOrTimedOutError when no attempt succeeds.
        """
        try:
            return PageData(url, await self._get(url))
        except _TRANSPORT_ERRORS as exc:
            if urlparse(url).scheme == "https":
                raise UnresolvedOrTimedOutError(url, exc) from exc
            if self.logger:
                self.logger.debug("GET %s failed (%s), retrying over https", url, exc)

        retry_url = to_https(url)
        try:
            return PageData(retry_url, await self._get(retry_url))
        except _TRANSPORT_ERRORS as exc:
            raise UnresolvedOrTimedOutError(retry_url, exc) from exc

    async def _get(self, url: str) -> bytes:
        buf = self.pool.acquire()
        try:
            async with self.session.get(url) as resp:
                async for chunk in resp.content.iter_chunked(self.CHUNK_SIZE):
                    buf.extend(chunk)
            return bytes(buf)
        finally:
            self.pool.release(buf)
