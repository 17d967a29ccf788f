# keyword_scout/report/csv_report.py
"""CSV-отчёт: строка заголовка, шапка и по одной строке на результат."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Union

from keyword_scout.aggregator import ScanResult


def _context_cell(result: ScanResult) -> str:
    if isinstance(result.context, tuple):
        return " ".join(result.context)
    return result.context


def render_csv(
    results: Iterable[ScanResult],
    keyword: str,
    output_path: Union[Path, str],
) -> Path:
    """Пишет ``search for keyword <kw>``, затем строки ``url,found,context``."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as fh:
        fh.write(f"search for keyword {keyword}\n")
        writer = csv.writer(fh, lineterminator="\n")
        writer.writerow(["url", "found", "context"])
        for r in results:
            writer.writerow([r.url, str(r.found).lower(), _context_cell(r)])
    return output
