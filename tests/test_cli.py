"""CLI argument and config-merging behavior tests.

Verifies how ``dockpanel.cli.main`` combines flags with persisted settings
before launching the dashboard.
"""

from __future__ import annotations

import contextlib
import io
import unittest
from unittest import mock

from dockpanel import cli


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        patches = {
            "configure": mock.patch("dockpanel.cli.logging_setup.configure"),
            "run_dashboard": mock.patch("dockpanel.cli.run_dashboard"),
            "load_theme_name": mock.patch("dockpanel.config.load_theme_name", return_value="ocean"),
            "save_theme_name": mock.patch("dockpanel.config.save_theme_name"),
            "load_docker_binary": mock.patch("dockpanel.config.load_docker_binary", return_value="docker"),
            "load_status_timeout": mock.patch("dockpanel.config.load_status_timeout", return_value=30.0),
            "load_refresh_interval": mock.patch("dockpanel.config.load_refresh_interval", return_value=4.0),
        }
        self.mocks = {}
        for name, patcher in patches.items():
            self.mocks[name] = patcher.start()
            self.addCleanup(patcher.stop)

    def _dashboard_kwargs(self) -> dict[str, object]:
        self.mocks["run_dashboard"].assert_called_once()
        return self.mocks["run_dashboard"].call_args.kwargs

    def test_defaults_come_from_config(self) -> None:
        cli.main([])

        self.mocks["configure"].assert_called_once_with(None, None)
        self.assertEqual(
            self._dashboard_kwargs(),
            {
                "theme_name": "ocean",
                "no_color": False,
                "docker_binary": "docker",
                "status_timeout": 30.0,
                "refresh_interval": 4.0,
            },
        )
        self.mocks["save_theme_name"].assert_not_called()

    def test_flags_override_config_and_theme_is_saved(self) -> None:
        cli.main(
            [
                "--theme",
                "PLAIN",
                "--no-color",
                "--docker",
                "/usr/local/bin/podman",
                "--status-timeout",
                "5",
                "--refresh-interval",
                "0",
                "--log-level",
                "debug",
                "--log-file",
                "/tmp/dp.log",
            ]
        )

        self.mocks["configure"].assert_called_once_with("debug", "/tmp/dp.log")
        self.mocks["save_theme_name"].assert_called_once_with("plain")
        kwargs = self._dashboard_kwargs()
        self.assertEqual(kwargs["theme_name"], "plain")
        self.assertTrue(kwargs["no_color"])
        self.assertEqual(kwargs["docker_binary"], "/usr/local/bin/podman")
        self.assertEqual(kwargs["status_timeout"], 5.0)
        self.assertEqual(kwargs["refresh_interval"], 0.0)

    def test_invalid_durations_are_rejected(self) -> None:
        for argv in (["--status-timeout", "0"], ["--refresh-interval", "-1"], ["--status-timeout", "soon"]):
            with self.subTest(argv=argv):
                with contextlib.redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
                    cli.main(argv)
        self.mocks["run_dashboard"].assert_not_called()

    def test_keyboard_interrupt_exits_quietly(self) -> None:
        self.mocks["run_dashboard"].side_effect = KeyboardInterrupt
        cli.main([])


if __name__ == "__main__":
    unittest.main()
