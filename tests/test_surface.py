"""In-memory screen: view lifecycle, viewport bounds and key dispatch."""

from __future__ import annotations

import unittest

from dockpanel.errors import UnknownViewError, ViewBoundsError
from dockpanel.geometry import Rect
from dockpanel.keys import GLOBAL_VIEW, KEY_BACKSPACE, KEY_LEFT, KeyBinding, KeyBindingTable
from dockpanel.surface import Screen, View


class ViewTests(unittest.TestCase):
    def test_write_splits_on_newlines_and_appends(self) -> None:
        view = View("v", Rect(0, 0, 10, 5))
        view.write("a\nb\n")
        self.assertEqual(view.lines, ["a", "b", ""])
        view.write("c")
        self.assertEqual(view.lines, ["a", "b", "c"])
        view.clear()
        self.assertEqual(view.lines, [])

    def test_line_is_relative_to_origin(self) -> None:
        view = View("v", Rect(0, 0, 10, 5))
        view.set_lines(["l0", "l1", "l2"])
        view.set_origin(0, 1)
        self.assertEqual(view.line(0), "l1")
        self.assertEqual(view.line(1), "l2")
        with self.assertRaises(ViewBoundsError):
            view.line(2)
        with self.assertRaises(ViewBoundsError):
            view.line(-1)

    def test_cursor_must_stay_inside_inner_area(self) -> None:
        view = View("v", Rect(0, 0, 10, 5))
        view.set_cursor(7, 2)
        self.assertEqual(view.cursor, (7, 2))
        for x, y in ((8, 0), (0, 3), (-1, 0)):
            with self.assertRaises(ViewBoundsError):
                view.set_cursor(x, y)
        self.assertEqual(view.cursor, (7, 2))

    def test_origin_rejects_negative_values(self) -> None:
        view = View("v", Rect(0, 0, 10, 5))
        view.set_origin(3, 40)
        self.assertEqual(view.origin, (3, 40))
        with self.assertRaises(ViewBoundsError):
            view.set_origin(0, -1)

    def test_edit_inserts_and_deletes_at_cursor(self) -> None:
        view = View("input", Rect(0, 0, 20, 1), frame=False)
        for ch in "nginx":
            self.assertTrue(view.edit(ch))
        self.assertEqual(view.text, "nginx")
        self.assertEqual(view.cursor, (5, 0))
        view.edit(KEY_LEFT)
        view.edit(KEY_BACKSPACE)
        self.assertEqual(view.text, "ngix")
        self.assertFalse(view.edit("CTRL_R"))


class ScreenTests(unittest.TestCase):
    def setUp(self) -> None:
        self.screen = Screen((80, 24))

    def test_set_view_creates_once_then_reuses(self) -> None:
        view, created = self.screen.set_view("a", Rect(0, 0, 10, 5))
        view.write("kept")
        again, created_again = self.screen.set_view("a", Rect(1, 1, 12, 6))
        self.assertTrue(created)
        self.assertFalse(created_again)
        self.assertIs(again, view)
        self.assertEqual(again.rect, Rect(1, 1, 12, 6))
        self.assertEqual(again.lines, ["kept"])

    def test_unknown_views_raise(self) -> None:
        with self.assertRaises(UnknownViewError):
            self.screen.view("missing")
        with self.assertRaises(UnknownViewError):
            self.screen.delete_view("missing")
        with self.assertRaises(UnknownViewError):
            self.screen.set_current_view("missing")

    def test_z_order_and_current_view(self) -> None:
        for name in ("a", "b", "c"):
            self.screen.set_view(name, Rect(0, 0, 10, 5))
        self.screen.set_view_on_top("a")
        self.assertEqual([v.name for v in self.screen.views()], ["b", "c", "a"])
        self.screen.set_current_view("b")
        self.assertEqual(self.screen.current_view().name, "b")
        self.screen.delete_view("b")
        self.assertIsNone(self.screen.current_view())
        self.assertFalse(self.screen.has_view("b"))

    def test_dispatch_prefers_current_view_then_global(self) -> None:
        seen: list[str] = []
        self.screen.set_view("a", Rect(0, 0, 10, 5))
        self.screen.set_current_view("a")
        self.screen.set_keybinding("a", "x", lambda view: seen.append(f"a:{view.name}"))
        self.screen.set_keybinding(GLOBAL_VIEW, "x", lambda view: seen.append("global"))
        self.screen.set_keybinding(GLOBAL_VIEW, "y", lambda view: seen.append("global-y"))

        self.assertTrue(self.screen.dispatch("x"))
        self.assertTrue(self.screen.dispatch("y"))
        self.assertFalse(self.screen.dispatch("z"))
        self.assertEqual(seen, ["a:a", "global-y"])

    def test_unbound_keys_edit_editable_current_view(self) -> None:
        view, _ = self.screen.set_view("input", Rect(0, 0, 10, 1), frame=False)
        view.editable = True
        self.screen.set_current_view("input")
        self.assertTrue(self.screen.dispatch("v"))
        self.assertEqual(view.text, "v")

    def test_delete_keybindings_removes_only_that_view(self) -> None:
        self.screen.set_keybinding("a", "x", lambda view: None)
        self.screen.set_keybinding("b", "x", lambda view: None)
        self.screen.delete_keybindings("a")
        self.assertFalse(self.screen.has_keybindings("a"))
        self.assertEqual(self.screen.keybindings("b"), ("x",))


class KeyBindingTableTests(unittest.TestCase):
    def test_bind_all_registers_every_key_and_rebinding_replaces(self) -> None:
        def first(view) -> None:
            return None

        def second(view) -> None:
            return None

        table = KeyBindingTable().bind_all("v", KeyBinding(("j", "DOWN"), first))
        self.assertEqual(table.keys_for("v"), ("j", "DOWN"))
        table.bind("v", "j", second)
        self.assertIs(table.lookup("v", "j"), second)
        self.assertIsNone(table.lookup("other", "j"))


if __name__ == "__main__":
    unittest.main()
