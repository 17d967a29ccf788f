# File: keyword_scout/utils.py
"""keyword_scout.utils: нормализация URL и смена схемы на https."""

from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import urlparse, urlunparse

from keyword_scout.errors import DomainMissingError, EmptyURLError, MalformedURLError

__all__: Sequence[str] = (
    "normalize_url",
    "to_https",
)

_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def normalize_url(url: str) -> str:
    """Приводит URL пользователя к виду ``scheme://host[:port][path]``.

    Схема по умолчанию ``http``. Путь сохраняется, только если в нём больше
    одного ``/``, поэтому голый домен возвращается без завершающего слеша.
    Параметры запроса и фрагменты отбрасываются.

    Вызывает EmptyURLError, MalformedURLError или DomainMissingError.
    """
    if url == "":
        raise EmptyURLError()
    if _BAD_PERCENT_RE.search(url):
        raise MalformedURLError(url, "invalid percent-encoding")

    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
        port = parsed.port
    except ValueError as exc:
        raise MalformedURLError(url, str(exc)) from exc

    path = parsed.path
    if not host:
        # "facebook.com/about" разбирается как голый путь
        host, _, rest = path.strip("/").partition("/")
        host = host.lower()
        path = f"/{rest}" if rest else ""
        port = None

    if len(host.split(".")) < 2 or not all(host.split(".")):
        raise DomainMissingError(url)

    scheme = parsed.scheme.lower() if parsed.netloc else ""
    netloc = f"{host}:{port}" if port else host
    normalized = urlunparse((scheme or "http", netloc, "", "", "", ""))
    if path.count("/") > 1:
        normalized += path
    return normalized


def to_https(url: str) -> str:
    """Меняет схему *url* на ``https``."""
    return urlunparse(urlparse(url)._replace(scheme="https"))
