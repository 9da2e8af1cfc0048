"""Main interactive event loop for the dashboard.

Coordinates task polling, periodic refreshes, resize handling, rendering and
key dispatch. Feature logic lives in ``Gui`` and the panels.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .errors import QuitRequested
from .gui import Gui
from .input import read_key as default_read_key
from .render import compose_frame, write_frame
from .surface import Screen
from .terminal import TerminalController
from .ui_theme import UITheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 100
    refresh_interval_seconds: float = 0.0


def run_main_loop(
    gui: Gui,
    terminal: TerminalController,
    stdin_fd: int,
    timing: RuntimeLoopTiming,
    theme: UITheme,
    *,
    read_key: Callable[[int, int | None], str] = default_read_key,
    write: Callable[[str], None] | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run the dashboard until a quit key raises ``QuitRequested``.

    Each iteration applies finished background tasks, starts the periodic
    background refresh when no overlay is open, re-lays views out after a resize,
    renders when anything changed and dispatches at most one key.
    """
    screen: Screen = gui.screen  # type: ignore[assignment]
    if write is None:
        stdout_fd = terminal.stdout_fd

        def write(frame: str) -> None:
            write_frame(stdout_fd, frame)

    last_refresh = clock()
    with terminal.raw_mode():
        while True:
            now = clock()
            changed = gui.poll_tasks(now)

            interval = timing.refresh_interval_seconds
            if interval > 0 and now - last_refresh >= interval:
                last_refresh = now
                if not gui.overlays.any_open():
                    gui.refresh_in_background()

            if gui.relayout():
                changed = True

            if changed or screen.dirty:
                write(compose_frame(screen, theme))
                screen.dirty = False

            key = read_key(stdin_fd, timing.key_timeout_ms)
            if not key:
                continue
            try:
                gui.dispatch(key)
            except QuitRequested:
                logger.info("quit requested")
                return
            screen.dirty = True


__all__ = ["RuntimeLoopTiming", "run_main_loop"]
