"""Modal overlays layered above the dashboard grid.

Error overlays are acknowledged with Enter and refresh every panel on close.
Confirm overlays run a caller action on accept and are always torn down by
the manager afterwards. State overlays carry no bindings and are closed by
the code that opened them. Forms collect a few text inputs.

Each kind has at most one live instance; opening a kind that is already open
reuses its view and replaces its message and bindings.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from .errors import BackendError
from .focus import FocusController
from .geometry import Rect, confirm_rect, error_rect, state_rect
from .keys import KEY_ENTER, KEY_ESC
from .panels.base import PanelKind
from .panels.form import Form
from .surface import Surface, View

logger = logging.getLogger(__name__)

CONFIRM_ACCEPT_KEYS = ("y", KEY_ENTER)
CONFIRM_CANCEL_KEYS = ("n", KEY_ESC)
ERROR_ACK_KEYS = (KEY_ENTER,)

OVERLAY_RECTS: dict[PanelKind, Callable[[int, int], Rect]] = {
    PanelKind.ERROR: error_rect,
    PanelKind.CONFIRM: confirm_rect,
    PanelKind.STATE: state_rect,
}


@dataclass
class Overlay:
    """Bookkeeping for one live message overlay."""

    kind: PanelKind
    message: str
    rect: Rect

    @property
    def name(self) -> str:
        return self.kind.value


class OverlayManager:
    """Open, close and route keys for error/confirm/state/form overlays."""

    def __init__(
        self,
        screen: Surface,
        focus: FocusController,
        *,
        reload: Callable[[], None],
    ) -> None:
        self._screen = screen
        self._focus = focus
        self._reload = reload
        self._live: dict[PanelKind, Overlay] = {}
        self._on_accept: Callable[[], object] | None = None
        self._form: Form | None = None
        self._on_submit: Callable[[dict[str, str]], object] | None = None

    def is_open(self, kind: PanelKind) -> bool:
        if kind is PanelKind.FORM:
            return self._form is not None
        return self._screen.has_view(kind.value)

    def any_open(self) -> bool:
        return any(self.is_open(kind) for kind in (PanelKind.ERROR, PanelKind.CONFIRM, PanelKind.STATE, PanelKind.FORM))

    def live(self, kind: PanelKind) -> Overlay | None:
        return self._live.get(kind)

    @property
    def form_in_progress(self) -> Form | None:
        return self._form

    def _open(self, kind: PanelKind, message: str, rect: Rect) -> View:
        view, created = self._screen.set_view(kind.value, rect)
        view.kind = kind
        view.wrap = True
        view.title = view.name
        view.clear()
        view.write(message)
        view.set_origin(0, 0)
        view.set_cursor(0, 0)
        self._live[kind] = Overlay(kind, message, rect)
        self._focus.switch_to(view.name)
        logger.debug("%s overlay %r: %s", "opened" if created else "reused", view.name, message)
        return view

    def _teardown(self, kind: PanelKind) -> None:
        name = kind.value
        self._screen.delete_view(name)
        self._screen.delete_keybindings(name)
        self._live.pop(kind, None)
        logger.debug("closed overlay %r", name)

    def relayout(self) -> None:
        """Re-place every live overlay after a screen resize."""
        max_x, max_y = self._screen.size()
        for kind, overlay in self._live.items():
            overlay.rect = OVERLAY_RECTS[kind](max_x, max_y)
            self._screen.set_view(kind.value, overlay.rect)
        if self._form is not None:
            self._form.relayout()

    def _restore_if_unfocused(self) -> None:
        if self._screen.current_view() is None:
            self._focus.restore()

    # Error

    def error(self, message: str, next_panel: str) -> View:
        """Show ``message`` and return focus to ``next_panel`` once acknowledged."""
        self._focus.next_panel = next_panel
        max_x, max_y = self._screen.size()
        view = self._open(PanelKind.ERROR, message, error_rect(max_x, max_y))
        for key in ERROR_ACK_KEYS:
            self._screen.set_keybinding(view.name, key, lambda _view: self.close_error())
        logger.info("error shown (returning to %r): %s", next_panel, message)
        return view

    def close_error(self) -> None:
        self._teardown(PanelKind.ERROR)
        self._reload()

    # Confirm

    def confirm(
        self,
        message: str,
        on_accept: Callable[[], object],
        *,
        next_panel: str | None = None,
    ) -> View:
        """Ask a yes/no question; ``on_accept`` runs only on a yes key.

        The overlay is removed after ``on_accept`` returns or raises, so the
        handler never closes it itself.
        """
        self._focus.next_panel = next_panel or self._focus.active_name
        self._on_accept = on_accept
        max_x, max_y = self._screen.size()
        view = self._open(PanelKind.CONFIRM, message, confirm_rect(max_x, max_y))
        for key in CONFIRM_ACCEPT_KEYS:
            self._screen.set_keybinding(view.name, key, lambda _view: self.accept_confirm())
        for key in CONFIRM_CANCEL_KEYS:
            self._screen.set_keybinding(view.name, key, lambda _view: self.cancel_confirm())
        return view

    def accept_confirm(self) -> None:
        on_accept, self._on_accept = self._on_accept, None
        failure: BackendError | None = None
        try:
            if on_accept is not None:
                on_accept()
        except BackendError as exc:
            failure = exc
        finally:
            self._teardown(PanelKind.CONFIRM)
        if failure is not None:
            self.error(str(failure), self._focus.next_panel)
            return
        self._restore_if_unfocused()

    def cancel_confirm(self) -> None:
        self._on_accept = None
        self._teardown(PanelKind.CONFIRM)
        self._focus.restore()

    # State

    def state(self, message: str) -> View:
        """Show a key-less status message until ``close_state`` is called."""
        max_x, max_y = self._screen.size()
        return self._open(PanelKind.STATE, message, state_rect(max_x, max_y))

    def close_state(self) -> None:
        current = self._screen.current_view()
        was_focused = current is not None and current.name == PanelKind.STATE.value
        self._teardown(PanelKind.STATE)
        if was_focused:
            self._focus.restore()

    # Form

    def form(
        self,
        name: str,
        labels: tuple[str, ...],
        on_submit: Callable[[dict[str, str]], object],
        *,
        next_panel: str | None = None,
        defaults: Mapping[str, str] | None = None,
    ) -> Form:
        """Open an input form; ``on_submit`` receives the collected values."""
        if self._form is not None:
            self._form.teardown()
        self._focus.next_panel = next_panel or self._focus.active_name
        form = Form(self._screen, name, labels, defaults=defaults)
        self._form = form
        self._on_submit = on_submit
        form.open(
            on_submit=lambda _view: self.submit_form(),
            on_cancel=lambda _view: self.cancel_form(),
            focus=self._focus.switch_to,
        )
        return form

    def submit_form(self) -> None:
        form, on_submit = self._form, self._on_submit
        if form is None:
            return
        items = form.read_items()
        self.close_form()
        try:
            if on_submit is not None:
                on_submit(items)
        except BackendError as exc:
            self.error(str(exc), self._focus.next_panel)
            return
        self._restore_if_unfocused()

    def cancel_form(self) -> None:
        self.close_form()
        self._focus.restore()

    def close_form(self) -> None:
        if self._form is not None:
            self._form.teardown()
        self._form = None
        self._on_submit = None


__all__ = ["Overlay", "OverlayManager", "CONFIRM_ACCEPT_KEYS", "CONFIRM_CANCEL_KEYS", "ERROR_ACK_KEYS"]
