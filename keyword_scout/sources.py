# File: keyword_scout/sources.py
"""keyword_scout.sources: чтение списков URL из файла или каталога с файлами."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from keyword_scout.logger import get_logger

__all__ = ["read_urls", "parse_url_lines"]

logger = get_logger("sources")


def parse_url_lines(lines: Iterable[str]) -> Iterator[str]:
    """Возвращает колонку URL из CSV-подобных строк.

    Из строк с двумя и более колонками берётся вторая (``rank,"url"``);
    строка из одной колонки и есть URL. Кавычки и пробелы удаляются.
    """
    for row in csv.reader(lines):
        if not row:
            continue
        value = row[1] if len(row) > 1 else row[0]
        value = value.replace('"', "").strip()
        if value:
            yield value


def _read_file(path: Path) -> List[str]:
    with path.open(encoding="utf-8", newline="") as fh:
        urls = list(parse_url_lines(fh))
    logger.debug("Loaded %d urls from %s", len(urls), path)
    return urls


def read_urls(path: Union[str, Path]) -> List[str]:
    """Читает URL из файла *path* или из всех нескрытых файлов непосредственно в каталоге."""
    p = Path(path).expanduser()
    if not p.exists():
        logger.error("URL source not found: %s", p)
        raise FileNotFoundError(f"URL source not found: {p}")
    if p.is_file():
        return _read_file(p)

    urls: List[str] = []
    for child in sorted(p.iterdir()):
        # пропускаем .DS_Store и подобные
        if child.name.startswith(".") or not child.is_file():
            continue
        urls.extend(_read_file(child))
    return urls
