"""
Загрузка и валидация конфигурации сканера KeywordScout.
Схема описывается и проверяется с помощью Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from keyword_scout import __version__

__all__ = ("ScannerConfig", "load_config", "DEFAULT_CONFIG_PATH")


class ScannerConfig(BaseModel):
    """Настройки, общие для всех операций сканирования одной сессии."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    concurrency: int = Field(20, ge=1, description="Макс. число одновременных сканирований.")
    depth: int = Field(0, ge=0, description="Лимит ссылок на один скан, 0 отключает обход.")
    timeout: float = Field(10.0, gt=0, description="Таймаут одного запроса (секунд).")
    logging: bool = Field(False, description="Писать ход сканирования в логгер.")
    user_agent: str = Field(
        f"KeywordScout/{__version__}", min_length=1, description="Заголовок User-Agent."
    )

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScannerConfig:
    """
    Читает YAML или JSON и возвращает валидированный ScannerConfig.

    При ``path=None`` используется файл по умолчанию, если он есть, иначе
    встроенные значения. Явно указанный несуществующий путь вызывает
    FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.is_file():
            return ScannerConfig()
        path_obj = DEFAULT_CONFIG_PATH
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScannerConfig(**data)
