# File: keyword_scout/report/__init__.py
"""keyword_scout.report: запись результатов сканирования в CSV, JSON и HTML."""

from keyword_scout.report.csv_report import render_csv
from keyword_scout.report.html_report import render_html
from keyword_scout.report.json_report import render_json

__all__ = ["render_csv", "render_json", "render_html"]
