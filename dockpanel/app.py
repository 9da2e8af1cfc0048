"""Runtime composition for an interactive dashboard session.

Builds the screen, backend and ``Gui``, loads the first frame and runs the
main loop inside a raw-mode terminal.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys

from .backend import DockerCli
from .gui import Gui
from .loop import RuntimeLoopTiming, run_main_loop
from .surface import Screen
from .terminal import TerminalController
from .ui_theme import resolve_theme

logger = logging.getLogger(__name__)

KEY_TIMEOUT_MS = 100


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns), max(1, term.lines)


def run_dashboard(
    *,
    theme_name: str | None,
    no_color: bool,
    docker_binary: str,
    status_timeout: float,
    refresh_interval: float,
) -> None:
    """Run the dashboard against the local docker daemon until the user quits."""
    if not os.isatty(sys.stdin.fileno()) or not os.isatty(sys.stdout.fileno()):
        raise SystemExit("dockpanel needs an interactive terminal.")

    theme = resolve_theme(theme_name, no_color=no_color)
    screen = Screen(_terminal_size)
    backend = DockerCli(docker_binary, timeout=status_timeout)
    gui = Gui(screen, backend, no_color=no_color, status_timeout=status_timeout)
    gui.start()
    logger.info("dashboard started (%dx%d, theme %s)", *screen.size(), theme.name)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    timing = RuntimeLoopTiming(
        key_timeout_ms=KEY_TIMEOUT_MS,
        refresh_interval_seconds=refresh_interval,
    )
    run_main_loop(gui, terminal, stdin_fd, timing, theme)
    logger.info("dashboard stopped")


__all__ = ["run_dashboard"]
