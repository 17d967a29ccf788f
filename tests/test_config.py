# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from keyword_scout.config import ScannerConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("concurrency: 5\ndepth: 2", None),
        (json.dumps({"concurrency": 5, "depth": 2}), None),
        ("concurrency: 0", ValidationError),
        (json.dumps({"concurrency": 5, "unknown": 1}), ValidationError),
        ("not: a: mapping", ValueError),
        ("::invalid yaml", TypeError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    # Write YAML or JSON based on content
    suffix = ".yaml" if not content.strip().startswith("{") else ".json"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, ScannerConfig)
        assert (cfg.concurrency, cfg.depth) == (5, 2)
        assert cfg.timeout == 10.0
        assert cfg.logging is False


def test_load_config_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(None) == ScannerConfig()


def test_load_config_default_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("depth: 7\n", encoding="utf-8")
    assert load_config(None).depth == 7


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "concurrency = 3", ".toml"))


def test_config_is_frozen():
    cfg = ScannerConfig()
    with pytest.raises(ValidationError):
        cfg.depth = 3
