# File: keyword_scout/matcher.py
"""keyword_scout.matcher: keyword/pattern matching and context snippet extraction.

A search term is either a :class:`Literal` keyword or a :class:`Compiled`
regular expression. :func:`compile_pattern` turns either one into a
:class:`CompiledPattern` once per scan; :func:`match` then runs it against
raw page bodies.

Matching is case-insensitive unless the caller's regex already decides
otherwise (it was compiled with ``re.IGNORECASE`` or embeds a ``(?-i``
group). The context snippet is the markup fragment around the first hit:
from the nearest ``<`` before it to the first ``>`` after it, with line
breaks removed. The caller's regex is never rewritten for this.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Sequence, Union

__all__: Sequence[str] = (
    "Literal",
    "Compiled",
    "Pattern",
    "CompiledPattern",
    "MatchResult",
    "EMAIL_REGEX",
    "compile_pattern",
    "match",
    "find_emails",
)

#: default pattern for ``user@domain.tld`` and ``user at domain dot tld``
EMAIL_REGEX = re.compile(
    r"([a-z0-9!#$%&'*+/=?^_{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_{|}~-]+)*(@|\sat\s)"
    r"(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?(\.|\sdot\s))+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?)",
    re.IGNORECASE,
)

_CASE_DIRECTIVE_RE = re.compile(r"\(\?[aiLmsux]*-[msx]*i")
_NEWLINES_RE = re.compile(r"\r\n|\n|\r")


@dataclass(frozen=True, slots=True)
class Literal:
    """A plain keyword; regex metacharacters are matched literally."""

    text: str

    def search_regex(self) -> re.Pattern[str]:
        return re.compile(re.escape(self.text), re.IGNORECASE)

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class Compiled:
    """A caller-compiled ``str`` regular expression."""

    regex: re.Pattern[str]

    def __post_init__(self) -> None:
        if not isinstance(self.regex.pattern, str):
            raise TypeError("only str patterns can be matched against decoded pages")

    def search_regex(self) -> re.Pattern[str]:
        if self.regex.flags & re.IGNORECASE or _CASE_DIRECTIVE_RE.search(self.regex.pattern):
            return self.regex
        return re.compile(self.regex.pattern, self.regex.flags | re.IGNORECASE)

    def __str__(self) -> str:
        return self.regex.pattern


Pattern = Union[Literal, Compiled]


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Search regex derived once from one :data:`Pattern`."""

    source: Pattern
    search: re.Pattern[str]


class MatchResult(NamedTuple):
    found: bool
    context: str


def compile_pattern(pattern: Pattern) -> CompiledPattern:
    return CompiledPattern(source=pattern, search=pattern.search_regex())


def _decode(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def _enclosing_fragment(text: str, start: int, end: int) -> str:
    """``<…`` + text[start:end] + ``…>``, or ``""`` when the hit is not inside markup.

    At least one character must sit between the ``<`` and the hit, and
    between the hit and the ``>``.
    """
    left = text.rfind("<", 0, start)
    if left == -1 or left + 1 >= start:
        return ""
    right = text.find(">", end)
    if right <= end:
        return ""
    return text[left:right + 1]


def match(body: bytes, pattern: CompiledPattern) -> MatchResult:
    """Report whether *pattern* occurs in *body* and the markup around the first hit.

    The context is ``""`` when nothing matched, or when the match does not sit
    inside a recognizable tag fragment.
    """
    text = _decode(body)
    hit = pattern.search.search(text)
    if hit is None:
        return MatchResult(False, "")
    fragment = _enclosing_fragment(text, hit.start(), hit.end())
    return MatchResult(True, _NEWLINES_RE.sub("", fragment))


def find_emails(
    body: bytes,
    pattern: Optional[re.Pattern[str]] = None,
    filters: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Return every address *pattern* (default :data:`EMAIL_REGEX`) finds in *body*.

    Matches containing any of the *filters* substrings are dropped; the rest
    are deduplicated in first-seen order.
    """
    regex = pattern if pattern is not None else EMAIL_REGEX
    excluded = [f for f in (filters or ()) if f]
    clean: List[str] = []
    for hit in regex.finditer(_decode(body)):
        email = hit.group(0)
        if len(email) <= 1 or email in clean:
            continue
        if any(f in email for f in excluded):
            continue
        clean.append(email)
    return clean
