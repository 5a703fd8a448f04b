"""site_robots.logger: Логгер пакета SiteRobots.

Library modules log through :data:`logger`, at DEBUG level only::

    from site_robots.logger import logger
    logger.debug("Line %d has no ':' separator, skipped", lineno)

Nothing is printed until an application (the CLI, for instance) calls
:func:`configure`; before that the logger only carries a ``NullHandler``.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, TextIO, Union

LOGGER_NAME: Final[str] = "SiteRobots"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

logger: logging.Logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())


def build_handlers(
    log_format: str,
    log_file: Union[str, Path, None] = None,
    stream: Optional[TextIO] = None,
) -> List[logging.Handler]:
    """Консольный обработчик и, если указан файл, файловый с ротацией."""
    handlers: List[logging.Handler] = [logging.StreamHandler(stream or sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                filename=str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(log_format)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    level: Union[int, str] = "WARNING",
    log_file: Union[str, Path, None] = None,
    log_format: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Заменяет обработчики логгера пакета и выставляет уровень.

    Handlers installed by an earlier call are closed, so a log file is
    released before the next one is opened. Records do not propagate to the
    root logger afterwards.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in build_handlers(log_format, log_file, stream):
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


__all__ = ["DEFAULT_FORMAT", "LOGGER_NAME", "build_handlers", "configure", "logger"]
