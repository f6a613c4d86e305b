# File: a11y_scout/logger.py
"""Logging setup for A11yScout.

Every module writes to the ``A11yScout`` logger, either through the
:data:`logger` instance exported here or ``logging.getLogger("A11yScout")``.
Console output goes to stderr: stdout belongs to the JSON reports of the CLI.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

__all__ = ["logger", "configure", "init_logging", "LOGGER_NAME", "DEFAULT_FORMAT"]

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "A11yScout"

LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

PathLike = Union[str, Path]


def _build_handlers(log_file: Optional[PathLike]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    return handlers


def _drop_handlers(target: logging.Logger) -> None:
    for handler in target.handlers[:]:
        target.removeHandler(handler)
        handler.close()


def configure(
    *,
    level: Union[int, str] = "INFO",
    log_file: Optional[PathLike] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Set level and handlers of the project logger and return it.

    With ``replace_handlers=False`` the new handlers are added next to the
    existing ones. Records never propagate to the root logger.
    """
    target = logging.getLogger(LOGGER_NAME)
    target.setLevel(level)
    if replace_handlers:
        _drop_handlers(target)

    formatter = logging.Formatter(log_format)
    for handler in _build_handlers(log_file):
        handler.setFormatter(formatter)
        target.addHandler(handler)

    target.propagate = False
    return target


def init_logging(
    level: Union[int, str] = "WARNING",
    log_file: Optional[PathLike] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the current setup; called on import and by the CLI group."""
    return configure(level=level, log_file=log_file, log_format=log_format)


logger: logging.Logger = init_logging()
