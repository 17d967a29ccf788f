# === FILE: keyword_scout/scanner.py ===
"""
Scan session: bounded-concurrency keyword, pattern and email search over web pages.

One :class:`Scanner` is shared by every concurrent scan of a session::

    async with Scanner(concurrency=20, depth=0) as scanner:
        await asyncio.gather(*(scanner.search(u, "connect") for u in urls),
                             return_exceptions=True)
        results = sort_by_url(scanner.get_results())

Each scan call takes one gate slot, normalizes its URL, discovers the links
to visit (only the URL itself when ``depth == 0``) and then fetches, matches
and records them one after another. The first link whose fetch fails is
recorded as not found and its error is raised; remaining links are skipped.
"""
from __future__ import annotations

import io
import logging
import re
from typing import Iterable, List, Optional

from aiohttp import ClientSession

from keyword_scout.aggregator import ResultAggregator, ResultSet, results_to_json
from keyword_scout.buffers import BufferPool
from keyword_scout.config import ScannerConfig
from keyword_scout.crawler.fetcher import DEFAULT_TIMEOUT, Fetcher, build_session
from keyword_scout.crawler.link_extractor import discover_links
from keyword_scout.crawler.models import PageData
from keyword_scout.errors import UnresolvedOrTimedOutError, URLValidationError
from keyword_scout.gate import ConcurrencyGate
from keyword_scout.logger import get_logger
from keyword_scout.matcher import Compiled, Literal, Pattern, compile_pattern, find_emails, match
from keyword_scout.utils import normalize_url

__all__ = ["Scanner"]


class Scanner:
    """Shared state of a scan session: gate, HTTP session, buffer pool and results."""

    def __init__(
        self,
        concurrency: int = 20,
        depth: int = 0,
        enable_logging: bool = False,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        if depth < 0:
            raise ValueError("depth must be >= 0")
        self.gate = ConcurrencyGate(concurrency)
        self.depth = depth
        self.timeout = timeout
        self.user_agent = user_agent
        self.logging = enable_logging
        self.logger = logger if logger is not None else get_logger("scanner")
        self.pool = BufferPool()
        self._results = ResultAggregator()
        self._session = session
        self._owns_session = session is None
        self._fetcher: Optional[Fetcher] = None

    @classmethod
    def from_config(
        cls, config: ScannerConfig, logger: Optional[logging.Logger] = None
    ) -> Scanner:
        return cls(
            config.concurrency,
            config.depth,
            config.logging,
            timeout=config.timeout,
            user_agent=config.user_agent,
            logger=logger,
        )

    async def __aenter__(self) -> Scanner:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this scanner created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._fetcher = None
        if self._owns_session:
            self._session = None

    # ------------------------------------------------------------------ #
    # Scan operations
    # ------------------------------------------------------------------ #

    async def search(self, url: str, keyword: str) -> None:
        """Look for the literal *keyword* (case-insensitive) on *url* and its links."""
        await self._search(url, Literal(keyword))

    async def search_with_pattern(self, url: str, pattern: re.Pattern[str]) -> None:
        """Like :meth:`search` but with a caller-compiled regular expression."""
        await self._search(url, Compiled(pattern))

    async def search_for_email(
        self,
        url: str,
        pattern: Optional[re.Pattern[str]] = None,
        filters: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Collect email addresses from *url* and its links.

        Without *pattern* the default email regex is used; addresses containing
        any of *filters* are left out. Each result's context is the address list.
        """
        filters = list(filters or ())
        async with self.gate:
            base = self._normalize(url)
            for link in await self._links(base):
                if self.logging:
                    self.logger.info("looking for emails url=%s", link)
                page = await self._fetch(link, None)
                emails = find_emails(page.content, pattern, filters)
                self._save(page.url, None, bool(emails), emails)

    async def _search(self, url: str, pattern: Pattern) -> None:
        async with self.gate:
            base = self._normalize(url)
            compiled = compile_pattern(pattern)
            for link in await self._links(base):
                if self.logging:
                    self.logger.info("looking for keyword=%s url=%s", pattern, link)
                page = await self._fetch(link, pattern)
                found, context = match(page.content, compiled)
                self._save(page.url, pattern, found, context)

    # ------------------------------------------------------------------ #
    # Results
    # ------------------------------------------------------------------ #

    def get_results(self) -> ResultSet:
        """Copy of the results recorded so far, in completion order."""
        return self._results.snapshot()

    def results_to_json(self, *, pretty: bool = False) -> bytes:
        return results_to_json(self._results.snapshot(), pretty=pretty).encode("utf-8")

    def results_to_stream(self) -> io.BytesIO:
        """Serialized results as a byte stream the caller can read or copy anywhere."""
        return io.BytesIO(self.results_to_json())

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _get_fetcher(self) -> Fetcher:
        if self._fetcher is None:
            if self._session is None:
                self._session = build_session(self.gate.limit, self.timeout, self.user_agent)
            self._fetcher = Fetcher(
                self._session, self.pool, self.logger if self.logging else None
            )
        return self._fetcher

    def _normalize(self, url: str) -> str:
        try:
            return normalize_url(url)
        except URLValidationError as exc:
            if self.logging:
                self.logger.error("could not normalize url %r: %s", url, exc)
            raise

    async def _links(self, base_url: str) -> List[str]:
        return await discover_links(
            self._get_fetcher(),
            base_url,
            self.depth,
            self.logger if self.logging else None,
        )

    async def _fetch(self, url: str, keyword: Optional[Pattern]) -> PageData:
        try:
            return await self._get_fetcher().fetch(url)
        except UnresolvedOrTimedOutError as exc:
            if self.logging:
                self.logger.error("could not fetch %s: %s", url, exc)
            self._save(url, keyword, False, "")
            raise

    def _save(self, url: str, keyword: Optional[Pattern], found: bool, context) -> None:
        result = self._results.record(url, keyword, found, context)
        if self.logging:
            self.logger.debug(
                "result keyword=%s found=%s url=%s",
                result.keyword or "",
                "yes" if found else "no",
                url,
            )
