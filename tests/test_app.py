from __future__ import annotations

import unittest
from unittest import mock

from dockpanel import app


class RunDashboardTests(unittest.TestCase):
    def setUp(self) -> None:
        for target, fd in (("dockpanel.app.sys.stdin", 0), ("dockpanel.app.sys.stdout", 1)):
            patcher = mock.patch(target)
            stream = patcher.start()
            stream.fileno.return_value = fd
            self.addCleanup(patcher.stop)

    def _run(self) -> None:
        app.run_dashboard(
            theme_name="plain",
            no_color=False,
            docker_binary="docker",
            status_timeout=10.0,
            refresh_interval=0.0,
        )

    def test_requires_interactive_terminal(self) -> None:
        with mock.patch("dockpanel.app.os.isatty", return_value=False), mock.patch(
            "dockpanel.app.run_main_loop"
        ) as loop_mock:
            with self.assertRaises(SystemExit):
                self._run()
        loop_mock.assert_not_called()

    def test_wires_gui_and_loop(self) -> None:
        with mock.patch("dockpanel.app.os.isatty", return_value=True), mock.patch(
            "dockpanel.app.Gui"
        ) as gui_cls, mock.patch("dockpanel.app.TerminalController") as terminal_cls, mock.patch(
            "dockpanel.app.run_main_loop"
        ) as loop_mock:
            self._run()

        gui = gui_cls.return_value
        gui.start.assert_called_once()
        self.assertEqual(gui_cls.call_args.kwargs, {"no_color": False, "status_timeout": 10.0})
        terminal_cls.assert_called_once_with(0, 1)
        loop_mock.assert_called_once()
        args = loop_mock.call_args.args
        self.assertIs(args[0], gui)
        self.assertEqual(args[3].refresh_interval_seconds, 0.0)
        self.assertEqual(args[4].name, "plain")


if __name__ == "__main__":
    unittest.main()
