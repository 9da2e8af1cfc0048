from __future__ import annotations

import unittest

from dockpanel.ui_theme import (
    DEFAULT_THEME,
    PLAIN_THEME,
    available_theme_names,
    normalize_theme_name,
    resolve_theme,
)


class ThemeTests(unittest.TestCase):
    def test_names_are_sorted_and_include_plain(self) -> None:
        self.assertEqual(available_theme_names(), ("default", "ocean", "plain"))

    def test_unknown_names_fall_back_to_default(self) -> None:
        self.assertEqual(normalize_theme_name(" Ocean "), "ocean")
        self.assertEqual(normalize_theme_name("solarized"), "default")
        self.assertEqual(normalize_theme_name(None), "default")

    def test_no_color_forces_plain_theme(self) -> None:
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertIs(resolve_theme(None), DEFAULT_THEME)

    def test_plain_theme_still_marks_selection(self) -> None:
        self.assertEqual(PLAIN_THEME.selected, PLAIN_THEME.reverse)
        self.assertEqual(PLAIN_THEME.frame, "")


if __name__ == "__main__":
    unittest.main()
