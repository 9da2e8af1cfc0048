"""Persistent JSON config helpers.

Stores the UI theme, docker binary, status timeout and refresh interval.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "dockpanel"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_DOCKER_BINARY = "docker"
DEFAULT_STATUS_TIMEOUT_SECONDS = 30.0
DEFAULT_REFRESH_INTERVAL_SECONDS = 0.0


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem and serialization errors are logged and otherwise ignored.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not save config to %s: %s", CONFIG_PATH, exc)


def _load_str(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_seconds(key: str, default: float, *, allow_zero: bool) -> float:
    """Read a duration; booleans, negatives and non-numbers fall back to ``default``."""
    value = load_config().get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if value < 0 or (value == 0 and not allow_zero):
        return default
    return float(value)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_str("theme")


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_docker_binary() -> str:
    return _load_str("docker_binary") or DEFAULT_DOCKER_BINARY


def load_status_timeout() -> float:
    """Seconds a background task may run before its status overlay gives up."""
    return _load_seconds("status_timeout_seconds", DEFAULT_STATUS_TIMEOUT_SECONDS, allow_zero=False)


def load_refresh_interval() -> float:
    """Seconds between periodic list refreshes; ``0`` disables them."""
    return _load_seconds("refresh_interval_seconds", DEFAULT_REFRESH_INTERVAL_SECONDS, allow_zero=True)


__all__ = [
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_theme_name",
    "save_theme_name",
    "load_docker_binary",
    "load_status_timeout",
    "load_refresh_interval",
]
