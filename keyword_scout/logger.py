"""Process-wide logging configuration for **KeywordScout** front-ends.

Only outer collaborators (the CLI) call :func:`configure`. The scanning core
never touches handlers; a :class:`~keyword_scout.scanner.Scanner` logs through
``KeywordScout.scanner`` (or an injected logger) and only when its logging
flag is on::

    from keyword_scout.logger import configure
    log = configure(level="DEBUG", log_file="scan.log")
    scanner = Scanner(logger=log.getChild("scanner"), enable_logging=True)

Per-URL progress is logged at INFO, per-result lines at DEBUG, so ``INFO``
gives a readable trace of a batch and ``DEBUG`` a full audit of every result.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
LOGGER_NAME: Final[str] = "KeywordScout"

#: a scan with depth > 0 logs several lines per URL; keep a few batches around
LOG_FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 5

_LevelT = Union[int, str]


def _handlers(log_file: Path | str | None, fmt: str) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the project logger (or a child of it) without configuring anything."""
    base = logging.getLogger(LOGGER_NAME)
    return base.getChild(name) if name else base


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """(Re)configure the project logger.

    Previous handlers are closed and replaced, so calling this once per CLI
    invocation never duplicates output.

    Parameters
    ----------
    level
        Numeric or textual logging level (e.g. ``"DEBUG"``).
    log_file
        Rotating log file in addition to stdout. *None* → console-only output.
    log_format
        Format string for :class:`logging.Formatter`.
    """
    lg = get_logger()
    lg.setLevel(level)
    for old in list(lg.handlers):
        lg.removeHandler(old)
        old.close()
    for handler in _handlers(log_file, log_format):
        lg.addHandler(handler)
    lg.propagate = False
    return lg


__all__ = ["configure", "get_logger", "DEFAULT_FORMAT", "LOGGER_NAME"]
