"""Global input router: quit and focus-cycling keys."""

from __future__ import annotations

from .errors import QuitRequested
from .focus import FocusController
from .keys import GLOBAL_VIEW, KEY_CTRL_Q, KEY_TAB, KeyBinding
from .surface import Surface, View


class InputRouter:
    """Bind the keys every primary panel shares plus the global quit key.

    Handlers only move focus or end the loop; they never talk to the backend.
    """

    QUIT_KEYS = ("q",)
    NEXT_KEYS = ("l", KEY_TAB)
    PREVIOUS_KEYS = ("h",)
    GLOBAL_QUIT_KEYS = (KEY_CTRL_Q,)

    def __init__(self, screen: Surface, focus: FocusController) -> None:
        self._screen = screen
        self._focus = focus

    @staticmethod
    def quit(_view: View | None = None) -> None:
        raise QuitRequested()

    def _next(self, _view: View | None) -> None:
        self._focus.next()

    def _previous(self, _view: View | None) -> None:
        self._focus.previous()

    def panel_bindings(self) -> tuple[KeyBinding, ...]:
        return (
            KeyBinding(self.QUIT_KEYS, self.quit),
            KeyBinding(self.PREVIOUS_KEYS, self._previous),
            KeyBinding(self.NEXT_KEYS, self._next),
        )

    def bind_panel(self, name: str) -> None:
        for binding in self.panel_bindings():
            for key in binding.keys:
                self._screen.set_keybinding(name, key, binding.handler)

    def bind_global(self) -> None:
        for key in self.GLOBAL_QUIT_KEYS:
            self._screen.set_keybinding(GLOBAL_VIEW, key, self.quit)

    def install(self, panel_names: tuple[str, ...]) -> None:
        for name in panel_names:
            self.bind_panel(name)
        self.bind_global()


__all__ = ["InputRouter"]
