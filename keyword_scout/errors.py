# keyword_scout/errors.py
"""
Error kinds raised by scan operations.

Validation errors are raised before any network activity and are never
retried. :class:`UnresolvedOrTimedOutError` is raised once both the original
request and its HTTPS retry have failed.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "ScanError",
    "URLValidationError",
    "EmptyURLError",
    "MalformedURLError",
    "DomainMissingError",
    "UnresolvedOrTimedOutError",
)


class ScanError(Exception):
    """Base class for every error a scan operation raises."""


class URLValidationError(ScanError, ValueError):
    """The user supplied URL could not be normalized."""


class EmptyURLError(URLValidationError):
    def __init__(self) -> None:
        super().__init__("url string is empty")


class MalformedURLError(URLValidationError):
    def __init__(self, url: str, reason: str = "") -> None:
        self.url = url
        msg = f"url {url!r} is malformed"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class DomainMissingError(URLValidationError):
    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"url domain e.g .com, .net was missing: {url!r}")


class UnresolvedOrTimedOutError(ScanError):
    """Both the request and its HTTPS retry failed; ``cause`` is the last transport error."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        msg = f"url {url} could not be resolved or timed out"
        super().__init__(f"{msg}: {cause}" if cause else msg)
