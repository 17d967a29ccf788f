# File: tests/test_cli.py
"""CLI tests (`keyword_scout.cli`) using click.testing.CliRunner.
Cover the `scan`, `emails` and `config` commands, `--version` and error handling.
"""
import json

import pytest
from click.testing import CliRunner

import keyword_scout.cli as cli_module
from keyword_scout.aggregator import ResultAggregator
from keyword_scout.cli import cli
from keyword_scout.matcher import Compiled, Literal
from keyword_scout.utils import normalize_url


class FakeScanner:
    """Records canned results instead of fetching; URLs containing "found" match."""

    instances = []

    def __init__(self, config):
        self.config = config
        self._results = ResultAggregator()

    @classmethod
    def from_config(cls, config, logger=None):
        inst = cls(config)
        cls.instances.append(inst)
        return inst

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    def _record(self, url, keyword):
        base = normalize_url(url)
        hit = "found" in base
        self._results.record(base, keyword, hit, "<b>hit</b>" if hit else "")

    async def search(self, url, keyword):
        self._record(url, Literal(keyword))

    async def search_with_pattern(self, url, pattern):
        self._record(url, Compiled(pattern))

    async def search_for_email(self, url, pattern=None, filters=None):
        base = normalize_url(url)
        self._results.record(base, None, True, ["sales@" + base.split("//")[1]])

    def get_results(self):
        return self._results.snapshot()


@pytest.fixture(autouse=True)
def patch_scanner(monkeypatch, tmp_path):
    """Swap the Scanner for FakeScanner and keep logging configuration out of tests."""
    FakeScanner.instances.clear()
    monkeypatch.setattr(cli_module, "Scanner", FakeScanner)
    monkeypatch.setattr(cli_module, "configure", lambda **kwargs: None)
    monkeypatch.chdir(tmp_path)


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "KeywordScout" in result.output


def test_show_config_defaults():
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["concurrency"] == 20
    assert data["depth"] == 0
    assert data["timeout"] == 10.0


def test_show_config_from_file(tmp_path):
    cfg_file = tmp_path / "scout.yaml"
    cfg_file.write_text("concurrency: 4\ndepth: 3\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["concurrency"] == 4
    assert data["depth"] == 3


def test_bad_config_reports_error(tmp_path):
    cfg_file = tmp_path / "scout.yaml"
    cfg_file.write_text("concurrency: 0\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


def test_scan_writes_sorted_csv(url_list, tmp_path):
    out = tmp_path / "out" / "results.csv"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["scan", "--in", str(url_list), "--out", str(out), "--keyword", "connect",
         "--concurrency", "5", "--depth", "2"],
    )
    assert result.exit_code == 0, result.output
    assert "search error for broken" in result.output
    assert "2 results" in result.output

    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "search for keyword connect",
        "url,found,context",
        "http://found.example.com,true,<b>hit</b>",
        "http://other.example.com,false,",
    ]
    cfg = FakeScanner.instances[-1].config
    assert (cfg.concurrency, cfg.depth, cfg.logging) == (5, 2, False)


def test_scan_json_with_regex(url_list, tmp_path):
    out = tmp_path / "results.json"
    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["scan", "-i", str(url_list), "-o", str(out), "-k", "conn.ct", "--regex", "--format", "json"],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [row["url"] for row in data] == ["http://found.example.com", "http://other.example.com"]
    assert data[0]["keyword"] == "conn.ct"


def test_scan_html_report(url_list, tmp_path):
    out = tmp_path / "results.html"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["scan", "-i", str(url_list), "-o", str(out), "-k", "connect", "-f", "html"]
    )
    assert result.exit_code == 0, result.output
    html = out.read_text(encoding="utf-8")
    assert "http://found.example.com" in html
    assert "&lt;b&gt;hit&lt;/b&gt;" in html


def test_scan_invalid_regex(url_list, tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        cli, ["scan", "-i", str(url_list), "-o", str(tmp_path / "x.csv"), "-k", "(", "--regex"]
    )
    assert result.exit_code == 2
    assert "некорректное регулярное выражение" in result.output


def test_scan_requires_keyword(url_list, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "-i", str(url_list), "-o", str(tmp_path / "x.csv")])
    assert result.exit_code == 2


def test_scan_directory_input(tmp_path):
    src = tmp_path / "lists"
    src.mkdir()
    (src / "a.csv").write_text('1,"found.example.com"\n', encoding="utf-8")
    (src / "b.csv").write_text('1,"other.example.org"\n', encoding="utf-8")
    (src / ".DS_Store").write_text("junk", encoding="utf-8")
    out = tmp_path / "results.csv"

    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "-i", str(src), "-o", str(out), "-k", "connect"])
    assert result.exit_code == 0, result.output
    assert "search error" not in result.output
    assert len(out.read_text(encoding="utf-8").splitlines()) == 4


def test_scan_empty_input(tmp_path):
    empty = tmp_path / "empty.csv"
    empty.write_text("\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "-i", str(empty), "-o", str(tmp_path / "x.csv"), "-k", "a"])
    assert result.exit_code == 1
    assert "не найдено ни одного URL" in result.output


def test_emails_command(url_list, tmp_path):
    out = tmp_path / "emails.json"
    runner = CliRunner()
    result = runner.invoke(
        cli, ["emails", "-i", str(url_list), "-o", str(out), "--filter", "noreply", "--logging"]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data[0] == {
        "url": "http://found.example.com",
        "found": True,
        "context": ["sales@found.example.com"],
    }
    assert FakeScanner.instances[-1].config.logging is True


def test_scan_help_lists_options():
    runner = CliRunner()
    result = runner.invoke(cli, ["scan", "--help"])
    assert result.exit_code == 0
    assert "--keyword" in result.output
    assert "Искомое ключевое слово" in result.output
