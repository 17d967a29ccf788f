# File: keyword_scout/report/html_report.py
"""keyword_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from keyword_scout.aggregator import ScanResult

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    results: Iterable[ScanResult],
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
    *,
    title: str = "KeywordScout results",
) -> Path:
    """Рендерит ``report.html.j2`` с результатами и сохраняет его по указанному пути.

    Args:
        results: результаты сканирования.
        output_path: путь к итоговому HTML-файлу.
        template_dir: папка с ``report.html.j2``; если не указана,
            используется встроенный шаблон.
        title: заголовок страницы.

    Returns:
        Path сохранённого HTML-файла.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir or DEFAULT_TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    rows = [r.to_dict() for r in results]
    context: dict[str, Any] = {
        "title": title,
        "results": rows,
        "found_count": sum(1 for r in rows if r["found"]),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
