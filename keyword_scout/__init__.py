# keyword_scout/__init__.py
"""
KeywordScout package initializer.
Defines the package version and exposes the scanning API.
"""
__version__ = "0.1.0"

from keyword_scout.aggregator import ResultSet, ScanResult, sort_by_url  # noqa: E402
from keyword_scout.errors import (  # noqa: E402
    DomainMissingError,
    EmptyURLError,
    MalformedURLError,
    ScanError,
    UnresolvedOrTimedOutError,
    URLValidationError,
)
from keyword_scout.matcher import Compiled, Literal  # noqa: E402
from keyword_scout.scanner import Scanner  # noqa: E402
from keyword_scout.utils import normalize_url  # noqa: E402

__all__ = [
    "__version__",
    "Scanner",
    "ScanResult",
    "ResultSet",
    "sort_by_url",
    "normalize_url",
    "Literal",
    "Compiled",
    "ScanError",
    "URLValidationError",
    "EmptyURLError",
    "MalformedURLError",
    "DomainMissingError",
    "UnresolvedOrTimedOutError",
]
