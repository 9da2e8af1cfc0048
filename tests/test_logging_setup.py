from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dockpanel import logging_setup


class LoggingSetupTests(unittest.TestCase):
    def setUp(self) -> None:
        logging_setup.reset()
        self.addCleanup(logging_setup.reset)
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        env = mock.patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop(logging_setup.LOG_FILE_ENV, None)
        os.environ.pop(logging_setup.LOG_LEVEL_ENV, None)

    def test_explicit_arguments_configure_file_handler(self) -> None:
        path = str(Path(self._tmp.name) / "logs" / "dp.log")
        runtime = logging_setup.configure("debug", path)

        self.assertEqual(runtime.level_name, "DEBUG")
        self.assertEqual(runtime.file_path, path)
        logger = logging.getLogger("dockpanel")
        self.assertFalse(logger.propagate)
        self.assertEqual(len(logger.handlers), 1)

        logging.getLogger("dockpanel.gui").debug("hello from gui")
        logger.handlers[0].flush()
        self.assertIn("hello from gui", Path(path).read_text(encoding="utf-8"))

    def test_environment_is_used_when_arguments_missing(self) -> None:
        path = str(Path(self._tmp.name) / "env.log")
        os.environ[logging_setup.LOG_FILE_ENV] = path
        os.environ[logging_setup.LOG_LEVEL_ENV] = "warning"
        runtime = logging_setup.configure()
        self.assertEqual((runtime.level, runtime.file_path), (logging.WARNING, path))

    def test_unknown_level_falls_back_to_info(self) -> None:
        runtime = logging_setup.configure("chatty", str(Path(self._tmp.name) / "x.log"))
        self.assertEqual(runtime.level, logging.INFO)

    def test_configure_is_idempotent(self) -> None:
        first = logging_setup.configure("info", str(Path(self._tmp.name) / "a.log"))
        second = logging_setup.configure("debug", str(Path(self._tmp.name) / "b.log"))
        self.assertIs(first, second)
        self.assertIs(logging_setup.get_runtime(), first)
        self.assertEqual(len(logging.getLogger("dockpanel").handlers), 1)


if __name__ == "__main__":
    unittest.main()
