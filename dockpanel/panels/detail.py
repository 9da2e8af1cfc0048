"""Detail panel showing the inspected object as highlighted JSON."""

from __future__ import annotations

from .. import scroll
from ..jsonfmt import highlight_json, struct_to_json
from ..keys import KEY_DOWN, KEY_UP, KeyBinding
from ..surface import View
from .base import Panel, PanelKind
from .lists import PAGE_DOWN_KEYS, PAGE_UP_KEYS


class DetailPanel(Panel):
    kind = PanelKind.DETAIL

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.subject = ""
        self._obj: object = None

    def configure_view(self, view: View) -> None:
        view.highlight = True

    def bindings(self) -> tuple[KeyBinding, ...]:
        return (
            KeyBinding(("j", KEY_DOWN), scroll.cursor_down),
            KeyBinding(("k", KEY_UP), scroll.cursor_up),
            KeyBinding(PAGE_DOWN_KEYS, scroll.page_down),
            KeyBinding(PAGE_UP_KEYS, scroll.page_up),
        )

    def show(self, obj: object, *, title: str = "") -> None:
        """Replace the panel content with ``obj`` and scroll to the top."""
        self._obj = obj
        self.subject = title
        view = self.view()
        view.title = f"{self.name}: {title}" if title else self.name
        self._render(view)
        view.set_origin(0, 0)
        view.set_cursor(0, 0)

    def _render(self, view: View) -> None:
        if self._obj is None:
            view.clear()
            return
        text = highlight_json(struct_to_json(self._obj), no_color=self.host.no_color)
        view.set_lines(text.split("\n"))

    def refresh(self) -> None:
        self._render(self.view())


__all__ = ["DetailPanel"]
