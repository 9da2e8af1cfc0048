from __future__ import annotations

from contextlib import contextmanager
import unittest

from fakes import make_gui

from dockpanel.geometry import Rect
from dockpanel.gui import Gui
from dockpanel.loop import RuntimeLoopTiming, run_main_loop
from dockpanel.panels.base import CONTAINER_LIST_PANEL, ERROR_MESSAGE_PANEL, IMAGE_LIST_PANEL
from dockpanel.surface import Screen
from dockpanel.ui_theme import PLAIN_THEME
from dockpanel.worker import BackgroundTasks


class _FakeTerminal:
    def __init__(self) -> None:
        self.stdout_fd = -1
        self.raw_mode_entries = 0

    @contextmanager
    def raw_mode(self):
        self.raw_mode_entries += 1
        yield


class _ScriptedKeys:
    def __init__(self, keys: list[str], on_read=None) -> None:
        self.keys = list(keys)
        self.reads = 0
        self.on_read = on_read

    def __call__(self, _fd: int, _timeout_ms: int | None) -> str:
        self.reads += 1
        if self.on_read is not None:
            self.on_read(self.reads)
        return self.keys.pop(0) if self.keys else "CTRL_Q"


class _SteppingClock:
    def __init__(self, step: float) -> None:
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


class RuntimeLoopTests(unittest.TestCase):
    def _run(self, gui: Gui, keys: _ScriptedKeys, *, refresh: float = 0.0, clock=None) -> list[str]:
        writes: list[str] = []
        terminal = _FakeTerminal()
        run_main_loop(
            gui,
            terminal,
            0,
            RuntimeLoopTiming(key_timeout_ms=10, refresh_interval_seconds=refresh),
            PLAIN_THEME,
            read_key=keys,
            write=writes.append,
            clock=clock or _SteppingClock(0.0),
        )
        self.assertEqual(terminal.raw_mode_entries, 1)
        return writes

    def test_renders_only_when_something_changed(self) -> None:
        gui = make_gui(no_color=True)
        writes = self._run(gui, _ScriptedKeys(["", "", "l", "q"]))

        self.assertEqual(len(writes), 2)
        self.assertEqual(gui.screen.current_view().name, CONTAINER_LIST_PANEL)
        self.assertIn("image list", writes[0])

    def test_periodic_refresh_reloads_panels_without_moving_focus(self) -> None:
        gui = make_gui(no_color=True)
        gui.dispatch("j")
        self._run(gui, _ScriptedKeys(["", "", "q"]), refresh=5.0, clock=_SteppingClock(3.0))

        image_loads = [call for call in gui.backend.calls if call[0] == "images"]
        self.assertEqual(len(image_loads), 2)
        self.assertEqual(gui.screen.current_view().name, IMAGE_LIST_PANEL)
        self.assertEqual(gui.image_list.selected().repository, "redis")

    def test_periodic_refresh_waits_while_overlay_is_open(self) -> None:
        gui = make_gui(no_color=True)
        gui.report_error("daemon unreachable", IMAGE_LIST_PANEL)
        self._run(gui, _ScriptedKeys(["", "", "", "CTRL_Q"]), refresh=1.0, clock=_SteppingClock(5.0))

        image_loads = [call for call in gui.backend.calls if call[0] == "images"]
        self.assertEqual(len(image_loads), 1)
        self.assertEqual(gui.screen.current_view().name, ERROR_MESSAGE_PANEL)

    def test_resize_relayouts_and_redraws(self) -> None:
        size = [(80, 24)]
        screen = Screen(lambda: size[0])
        gui = Gui(screen, make_gui().backend, tasks=BackgroundTasks(run_inline=True))
        gui.start()

        def grow(reads: int) -> None:
            if reads == 1:
                size[0] = (100, 24)

        writes = self._run(gui, _ScriptedKeys(["", "q"], on_read=grow))

        self.assertEqual(len(writes), 2)
        self.assertEqual(gui.image_list.rect, Rect(0, 0, 50, 8))
        self.assertEqual(screen.view(IMAGE_LIST_PANEL).rect, Rect(0, 0, 50, 8))


if __name__ == "__main__":
    unittest.main()
