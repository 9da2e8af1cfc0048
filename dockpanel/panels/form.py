"""Input form overlay: a framed list of labelled single-line inputs."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from ..geometry import form_layout
from ..keys import KEY_DOWN, KEY_ENTER, KEY_ESC, KEY_TAB, KEY_UP
from .base import PanelKind

if TYPE_CHECKING:
    from ..surface import Surface, View

EMPTY_VALUE_DEFAULTS: dict[str, str] = {"Tag": "latest"}


class Form:
    """Views and key bindings of one open input form.

    The frame view is named after the form; each input view is named
    ``"<form> <label>"`` and is editable. Input views share the
    next/previous/submit/cancel bindings.
    """

    kind = PanelKind.FORM

    def __init__(
        self,
        screen: Surface,
        name: str,
        labels: tuple[str, ...],
        *,
        defaults: Mapping[str, str] | None = None,
    ) -> None:
        self.screen = screen
        self.name = name
        self.labels = labels
        self.defaults = {**EMPTY_VALUE_DEFAULTS, **(defaults or {})}
        self._field = 0

    def input_name(self, label: str) -> str:
        return f"{self.name} {label}"

    @property
    def view_names(self) -> tuple[str, ...]:
        return (self.name, *(self.input_name(label) for label in self.labels))

    @property
    def current_input(self) -> str:
        return self.input_name(self.labels[self._field])

    def open(
        self,
        *,
        on_submit: Callable[[View | None], None],
        on_cancel: Callable[[View | None], None],
        focus: Callable[[str], object],
    ) -> None:
        max_x, max_y = self.screen.size()
        frame_rect, input_rects = form_layout(max_x, max_y, list(self.labels))
        frame, _created = self.screen.set_view(self.name, frame_rect)
        frame.kind = self.kind
        frame.title = self.name
        frame.clear()
        frame.write("\n\n".join(f"{label}:" for label in self.labels))
        self.screen.set_view_on_top(self.name)

        for label, rect in zip(self.labels, input_rects):
            view_name = self.input_name(label)
            field, _created = self.screen.set_view(view_name, rect, frame=False)
            field.editable = True
            field.kind = self.kind
            self.screen.set_view_on_top(view_name)
            for key in (KEY_TAB, KEY_DOWN):
                self.screen.set_keybinding(view_name, key, lambda _view: self._move(1, focus))
            self.screen.set_keybinding(view_name, KEY_UP, lambda _view: self._move(-1, focus))
            self.screen.set_keybinding(view_name, KEY_ENTER, on_submit)
            self.screen.set_keybinding(view_name, KEY_ESC, on_cancel)

        self._field = 0
        focus(self.current_input)

    def _move(self, delta: int, focus: Callable[[str], object]) -> None:
        self._field = (self._field + delta) % len(self.labels)
        focus(self.current_input)

    def read_items(self) -> dict[str, str]:
        """Return ``{label: value}``; empty values fall back to form defaults."""
        items: dict[str, str] = {}
        for label in self.labels:
            value = self.screen.view(self.input_name(label)).text.strip()
            if not value:
                value = self.defaults.get(label, "")
            items[label] = value
        return items

    def relayout(self) -> None:
        """Move the frame and inputs to fit the current screen size."""
        max_x, max_y = self.screen.size()
        frame_rect, input_rects = form_layout(max_x, max_y, list(self.labels))
        self.screen.set_view(self.name, frame_rect)
        for label, rect in zip(self.labels, input_rects):
            self.screen.set_view(self.input_name(label), rect, frame=False)

    def teardown(self) -> None:
        for view_name in self.view_names:
            self.screen.delete_view(view_name)
            self.screen.delete_keybindings(view_name)


__all__ = ["Form", "EMPTY_VALUE_DEFAULTS"]
