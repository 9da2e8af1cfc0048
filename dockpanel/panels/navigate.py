"""Navigation bar: the focused panel's name and its key hints."""

from __future__ import annotations

from ..surface import View
from .base import (
    CONFIRM_MESSAGE_PANEL,
    CONTAINER_LIST_PANEL,
    CREATE_VOLUME_PANEL,
    DETAIL_PANEL,
    ERROR_MESSAGE_PANEL,
    IMAGE_LIST_PANEL,
    PULL_IMAGE_PANEL,
    STATE_MESSAGE_PANEL,
    VOLUME_LIST_PANEL,
    Panel,
    PanelKind,
)

PANEL_SWITCH_HINT = "h/l/tab: switch panel  q: quit"
LIST_HINT = "j/k: move  ^f/^b: page  enter: inspect  d: delete  ^r: refresh"
FORM_HINT = "tab/up/down: field  enter: submit  esc: cancel"

NAVIGATION_HINTS: dict[str, str] = {
    IMAGE_LIST_PANEL: f"{LIST_HINT}  p: pull  {PANEL_SWITCH_HINT}",
    CONTAINER_LIST_PANEL: f"{LIST_HINT}  {PANEL_SWITCH_HINT}",
    VOLUME_LIST_PANEL: f"{LIST_HINT}  c: create  {PANEL_SWITCH_HINT}",
    DETAIL_PANEL: f"j/k: scroll  ^f/^b: page  {PANEL_SWITCH_HINT}",
    ERROR_MESSAGE_PANEL: "enter: close",
    CONFIRM_MESSAGE_PANEL: "y/enter: yes  n/esc: no",
    STATE_MESSAGE_PANEL: "working...",
    PULL_IMAGE_PANEL: FORM_HINT,
    CREATE_VOLUME_PANEL: FORM_HINT,
}


def hint_for(name: str) -> str:
    hint = NAVIGATION_HINTS.get(name)
    if hint is not None:
        return hint
    # Form inputs are named "<form> <label>".
    for form_name in (PULL_IMAGE_PANEL, CREATE_VOLUME_PANEL):
        if name.startswith(f"{form_name} "):
            return NAVIGATION_HINTS[form_name]
    return ""


class NavigatePanel(Panel):
    kind = PanelKind.NAVIGATE

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.focused = ""

    def set_navi(self, name: str) -> View:
        self.focused = name
        view = self.view()
        view.clear()
        hint = hint_for(name)
        view.write(f"{name} | {hint}" if hint else name)
        return view

    def refresh(self) -> None:
        self.set_navi(self.focused)


__all__ = ["NavigatePanel", "NAVIGATION_HINTS", "hint_for"]
