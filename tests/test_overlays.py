"""Error, confirm, state and form overlays: teardown and focus return."""

from __future__ import annotations

import unittest

from fakes import Core

from dockpanel.errors import BackendError
from dockpanel.geometry import Rect
from dockpanel.panels.base import (
    CONFIRM_MESSAGE_PANEL,
    ERROR_MESSAGE_PANEL,
    PULL_IMAGE_PANEL,
    STATE_MESSAGE_PANEL,
    PanelKind,
)


class ErrorOverlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.core = Core()

    def test_acknowledge_returns_to_recorded_panel_and_removes_overlay(self) -> None:
        self.core.focus.switch_to("Volumes")
        view = self.core.overlays.error("delete failed", "Containers")
        self.assertEqual(self.core.current(), ERROR_MESSAGE_PANEL)
        self.assertEqual(view.title, ERROR_MESSAGE_PANEL)
        self.assertEqual(view.lines, ["delete failed"])

        self.core.screen.dispatch("ENTER")

        self.assertEqual(self.core.current(), "Containers")
        self.assertFalse(self.core.screen.has_view(ERROR_MESSAGE_PANEL))
        self.assertFalse(self.core.screen.has_keybindings(ERROR_MESSAGE_PANEL))
        self.assertTrue(all(panel.refreshed == 1 for panel in self.core.panels.values()))

    def test_reopening_reuses_the_single_instance(self) -> None:
        self.core.overlays.error("first", "Images")
        self.core.overlays.error("second", "Detail")
        names = [view.name for view in self.core.screen.views()]
        self.assertEqual(names.count(ERROR_MESSAGE_PANEL), 1)
        self.assertEqual(self.core.screen.view(ERROR_MESSAGE_PANEL).lines, ["second"])
        self.assertEqual(self.core.overlays.live(PanelKind.ERROR).message, "second")

        self.core.screen.dispatch("ENTER")
        self.assertEqual(self.core.current(), "Detail")

    def test_overlay_is_placed_over_the_grid(self) -> None:
        view = self.core.overlays.error("boom", "Images")
        self.assertEqual(view.rect, Rect(16, 8, 49, 5))
        self.assertTrue(view.wrap)
        self.assertEqual(self.core.screen.views()[-1].name, ERROR_MESSAGE_PANEL)


class ConfirmOverlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.core = Core()
        self.accepted: list[str] = []

    def test_negative_key_restores_next_panel_without_accepting(self) -> None:
        self.core.overlays.confirm("delete?", lambda: self.accepted.append("yes"), next_panel="Volumes")
        self.core.screen.dispatch("n")
        self.assertEqual(self.accepted, [])
        self.assertEqual(self.core.current(), "Volumes")
        self.assertFalse(self.core.screen.has_view(CONFIRM_MESSAGE_PANEL))
        self.assertFalse(self.core.screen.has_keybindings(CONFIRM_MESSAGE_PANEL))

    def test_escape_also_cancels(self) -> None:
        self.core.overlays.confirm("delete?", lambda: self.accepted.append("yes"), next_panel="Images")
        self.core.screen.dispatch("ESC")
        self.assertEqual(self.accepted, [])
        self.assertEqual(self.core.current(), "Images")

    def test_both_affirmative_keys_accept_and_always_tear_down(self) -> None:
        for key in ("y", "ENTER"):
            self.core.overlays.confirm("delete?", lambda: self.accepted.append(key), next_panel="Containers")
            self.core.screen.dispatch(key)
            self.assertFalse(self.core.screen.has_view(CONFIRM_MESSAGE_PANEL))
            self.assertFalse(self.core.screen.has_keybindings(CONFIRM_MESSAGE_PANEL))
            self.assertEqual(self.core.current(), "Containers")
        self.assertEqual(self.accepted, ["y", "ENTER"])

    def test_accept_handler_that_moves_focus_keeps_its_target(self) -> None:
        self.core.overlays.confirm("go?", lambda: self.core.focus.switch_to("Detail"), next_panel="Images")
        self.core.screen.dispatch("y")
        self.assertEqual(self.core.current(), "Detail")

    def test_backend_failure_in_accept_opens_error_overlay(self) -> None:
        def fail() -> None:
            raise BackendError(["docker", "rm", "c1"], 1, "container is running")

        self.core.overlays.confirm("delete?", fail, next_panel="Containers")
        self.core.screen.dispatch("y")
        self.assertFalse(self.core.screen.has_view(CONFIRM_MESSAGE_PANEL))
        self.assertEqual(self.core.current(), ERROR_MESSAGE_PANEL)
        self.assertEqual(self.core.screen.view(ERROR_MESSAGE_PANEL).lines, ["container is running"])
        self.core.screen.dispatch("ENTER")
        self.assertEqual(self.core.current(), "Containers")


class StateOverlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.core = Core()

    def test_state_has_no_bindings_and_closes_programmatically(self) -> None:
        self.core.focus.next_panel = "Volumes"
        view = self.core.overlays.state("deleting volume data...")
        self.assertEqual(view.rect.height, 3)
        self.assertFalse(self.core.screen.has_keybindings(STATE_MESSAGE_PANEL))
        self.assertFalse(self.core.screen.dispatch("ENTER"))
        self.assertTrue(self.core.overlays.is_open(PanelKind.STATE))

        self.core.overlays.close_state()
        self.assertFalse(self.core.overlays.is_open(PanelKind.STATE))
        self.assertEqual(self.core.current(), "Volumes")


class FormOverlayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.core = Core()
        self.submitted: list[dict[str, str]] = []

    def _type(self, text: str) -> None:
        for ch in text:
            self.core.screen.dispatch(ch)

    def test_submit_collects_values_with_tag_default(self) -> None:
        form = self.core.overlays.form(PULL_IMAGE_PANEL, ("Name", "Tag"), self.submitted.append, next_panel="Images")
        self.assertEqual(self.core.current(), "pull image Name")
        self.assertEqual(self.core.screen.view(PULL_IMAGE_PANEL).lines, ["Name:", "", "Tag:"])
        self._type(" nginx ")
        self.core.screen.dispatch("ENTER")

        self.assertEqual(self.submitted, [{"Name": "nginx", "Tag": "latest"}])
        for name in form.view_names:
            self.assertFalse(self.core.screen.has_view(name))
            self.assertFalse(self.core.screen.has_keybindings(name))
        self.assertIsNone(self.core.overlays.form_in_progress)
        self.assertEqual(self.core.current(), "Images")

    def test_tab_and_up_move_between_inputs(self) -> None:
        self.core.overlays.form(PULL_IMAGE_PANEL, ("Name", "Tag"), self.submitted.append, next_panel="Images")
        self._type("redis")
        self.core.screen.dispatch("TAB")
        self.assertEqual(self.core.current(), "pull image Tag")
        self._type("7")
        self.core.screen.dispatch("UP")
        self.assertEqual(self.core.current(), "pull image Name")
        self.core.screen.dispatch("ENTER")
        self.assertEqual(self.submitted, [{"Name": "redis", "Tag": "7"}])

    def test_quit_letters_are_typed_not_handled(self) -> None:
        self.core.overlays.form(PULL_IMAGE_PANEL, ("Name", "Tag"), self.submitted.append, next_panel="Images")
        self._type("quay.io/hello")
        self.assertEqual(self.core.screen.view("pull image Name").text, "quay.io/hello")

    def test_escape_cancels_without_submitting(self) -> None:
        self.core.focus.switch_to("Volumes")
        self.core.overlays.form("create volume", ("Name", "Driver"), self.submitted.append)
        self.core.screen.dispatch("ESC")
        self.assertEqual(self.submitted, [])
        self.assertEqual(self.core.current(), "Volumes")
        self.assertFalse(self.core.screen.has_view("create volume"))


if __name__ == "__main__":
    unittest.main()
