# File: tests/test_sources.py
import pytest

from keyword_scout.sources import parse_url_lines, read_urls


def test_parse_url_lines_layouts():
    lines = ['1,"google.com"\n', "facebook.com\n", "\n", '2,"  youtube.com "\n', '3,""\n']
    assert list(parse_url_lines(lines)) == ["google.com", "facebook.com", "youtube.com"]


def test_read_urls_file(url_list):
    assert read_urls(url_list) == ["found.example.com", "other.example.com", "broken"]


def test_read_urls_directory_skips_hidden(tmp_path):
    (tmp_path / "b.csv").write_text('1,"b.com"\n', encoding="utf-8")
    (tmp_path / "a.csv").write_text('1,"a.com"\n2,"a2.com"\n', encoding="utf-8")
    (tmp_path / ".hidden").write_text('1,"hidden.com"\n', encoding="utf-8")
    (tmp_path / "nested").mkdir()
    assert read_urls(tmp_path) == ["a.com", "a2.com", "b.com"]


def test_read_urls_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_urls(tmp_path / "missing.csv")
