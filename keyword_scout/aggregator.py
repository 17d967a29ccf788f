# File: keyword_scout/aggregator.py
"""keyword_scout.aggregator: потокобезопасный сбор результатов сканирования."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from keyword_scout.matcher import Pattern

Context = Union[str, Tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Результат одной пары (ссылка, скан)."""

    url: str
    found: bool
    keyword: Optional[Pattern] = None
    context: Context = ""

    def to_dict(self) -> Dict[str, Any]:
        """Сериализуемая форма; пустые ``keyword`` и ``context`` опускаются."""
        data: Dict[str, Any] = {}
        keyword = str(self.keyword) if self.keyword is not None else ""
        if keyword:
            data["keyword"] = keyword
        data["url"] = self.url
        data["found"] = self.found
        if self.context:
            data["context"] = list(self.context) if isinstance(self.context, tuple) else self.context
        return data


ResultSet = List[ScanResult]


def sort_by_url(results: Iterable[ScanResult]) -> ResultSet:
    """Возвращает *results*, упорядоченные по URL; равные URL сохраняют взаимный порядок."""
    return sorted(results, key=lambda r: r.url)


def results_to_json(results: Iterable[ScanResult], *, pretty: bool = False) -> str:
    return json.dumps(
        [r.to_dict() for r in results], ensure_ascii=False, indent=2 if pretty else None
    )


class ResultAggregator:
    """Список результатов только на добавление, защищённый блокировкой.

    Запись только через :meth:`record`; читатели получают копию из
    :meth:`snapshot`, поэтому общий список снаружи не изменить.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: ResultSet = []

    def record(
        self,
        url: str,
        keyword: Optional[Pattern],
        found: bool,
        context: Union[str, Sequence[str]] = "",
    ) -> ScanResult:
        if not isinstance(context, str):
            context = tuple(context)
        result = ScanResult(url=url, found=found, keyword=keyword, context=context)
        with self._lock:
            self._results.append(result)
        return result

    def snapshot(self) -> ResultSet:
        with self._lock:
            return list(self._results)

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


__all__ = [
    "Context",
    "ScanResult",
    "ResultSet",
    "ResultAggregator",
    "sort_by_url",
    "results_to_json",
]
