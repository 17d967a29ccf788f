# keyword_scout/crawler/link_extractor.py
"""
Same-site link discovery used to widen a scan beyond its base URL.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from keyword_scout.crawler.fetcher import Fetcher
from keyword_scout.crawler.models import PageData
from keyword_scout.errors import ScanError

__all__ = ("extract_links", "discover_links")


def extract_links(page: PageData, base_url: str, limit: int) -> List[str]:
    """
    Collect ``<body>`` anchor hrefs containing *base_url*.

    The result starts with *base_url*, keeps first-seen order, holds no
    duplicates and stops growing once it reaches *limit* entries.
    """
    links: List[str] = [base_url]
    if len(links) >= limit:
        return links
    soup = BeautifulSoup(page.text(), "html.parser")
    # html.parser adds no implicit <body> to fragments
    scope = soup.body or soup
    for tag in scope.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        href = href_val.strip()
        if base_url in href and href not in links:
            links.append(href)
            if len(links) >= limit:
                break
    return links


async def discover_links(
    fetcher: Fetcher,
    base_url: str,
    limit: int,
    logger: Optional[logging.Logger] = None,
) -> List[str]:
    """
    Return the links a scan of *base_url* should visit.

    ``limit == 0`` skips crawling entirely. A failed fetch degrades to
    ``[base_url]`` instead of aborting the scan.
    """
    if limit == 0:
        return [base_url]
    try:
        page = await fetcher.fetch(base_url)
    except ScanError as exc:
        if logger:
            logger.error("could not crawl %s: %s", base_url, exc)
        return [base_url]
    return extract_links(page, base_url, limit)
