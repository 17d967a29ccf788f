# keyword_scout/crawler/models.py
"""
Data models for the KeywordScout fetcher and crawler.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class PageData:
    """Final URL of a fetch (after any HTTPS retry) and the raw body."""

    url: str
    content: bytes

    def text(self, encoding: str = "utf-8") -> str:
        """Decode the body, replacing undecodable bytes."""
        return self.content.decode(encoding, errors="replace")
