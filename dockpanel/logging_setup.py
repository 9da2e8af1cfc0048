"""Logging bootstrap for the dashboard.

The terminal belongs to the TUI, so records only go to a rotating log file.
Every module logger lives under the ``dockpanel`` hierarchy and propagates to
the single handler installed here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "dockpanel"
LOG_FILENAME = "dockpanel.log"
LOG_FILE_ENV = "DOCKPANEL_LOG_FILE"
LOG_LEVEL_ENV = "DOCKPANEL_LOG_LEVEL"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration."""

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str | None) -> tuple[str, int]:
    normalized = str(raw or "INFO").strip().upper()
    level = getattr(logging, normalized, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    return str(logging.getLevelName(level)), level


def _default_log_path() -> str:
    return str(Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME)


def _make_file_handler(level: int, file_path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        file_path,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(threadName)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure(level: str | None = None, file_path: str | None = None) -> LoggingRuntime:
    """Attach the rotating file handler to the ``dockpanel`` logger.

    Explicit arguments win over ``DOCKPANEL_LOG_LEVEL`` / ``DOCKPANEL_LOG_FILE``.
    Idempotent: repeated calls return the originally configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level_value = _parse_level(level or os.environ.get(LOG_LEVEL_ENV))
    path = file_path or os.environ.get(LOG_FILE_ENV) or _default_log_path()
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(level_value)
    logger.propagate = False
    logger.handlers.clear()
    logger.addHandler(_make_file_handler(level_value, path))

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level_value, file_path=path)
    logger.info("logging to %s at %s", path, level_name)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME


def reset() -> None:
    """Detach handlers installed by ``configure`` (used by tests)."""
    global _RUNTIME
    logger = logging.getLogger(APP_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    _RUNTIME = None
