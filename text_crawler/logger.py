# === FILE: text_crawler/logger.py ===
"""Логирование TextCrawler.

Все модули пишут в один именованный логгер ``TextCrawler``. Импорт модуля
ничего не настраивает: обработчики добавляет :func:`configure` (CLI вызывает
её через :func:`init_logging`). Библиотечный код пишет либо в
:data:`logger`, либо в ``logging.getLogger(LOGGER_NAME)``, это один и тот же
объект.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Iterator, Optional, Union

LOGGER_NAME: Final[str] = "TextCrawler"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

#: rotation of the optional log file: 5 MiB per file, three backups
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

_LevelT = Union[int, str]
_PathT = Union[str, Path]


def _handlers(log_file: Optional[_PathT]) -> Iterator[logging.Handler]:
    """Console handler always, rotating file handler only when a path is given."""
    yield logging.StreamHandler(sys.stdout)
    if log_file is not None:
        yield RotatingFileHandler(
            filename=str(log_file),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )


def configure(
    *,
    level: _LevelT = "INFO",
    log_file: Optional[_PathT] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Attach handlers to the crawler logger and return it.

    With ``replace_handlers`` the previous handlers are closed and removed,
    so repeated CLI runs in one process do not duplicate every line.
    Propagation to the root logger is switched off.
    """
    lg = logging.getLogger(LOGGER_NAME)
    lg.setLevel(level)
    if replace_handlers:
        for old in list(lg.handlers):
            lg.removeHandler(old)
            old.close()

    formatter = logging.Formatter(log_format)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


def init_logging(
    level: _LevelT = "INFO",
    log_file: Optional[_PathT] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Entry point for the CLI: fresh handlers on every call."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


logger: logging.Logger = logging.getLogger(LOGGER_NAME)

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]
