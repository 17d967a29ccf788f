# keyword_scout/report/json_report.py

"""
JSON-отчёт KeywordScout.

Сериализует набор результатов в файл.
"""
from pathlib import Path
from typing import Iterable

from keyword_scout.aggregator import ScanResult, results_to_json


def render_json(results: Iterable[ScanResult], output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет *results* как JSON-массив по пути *output_path*.

    :param results: результаты сканирования, обычно уже отсортированные по URL
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from keyword_scout.report.json_report import render_json
    report_path = render_json(sort_by_url(scanner.get_results()), 'reports/results.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(results_to_json(results, pretty=pretty), encoding="utf-8")
    return output
