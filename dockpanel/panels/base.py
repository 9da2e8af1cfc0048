"""Panel kinds and the shared panel base class.

The kind set is closed: focus cycling and overlay handling switch on
``PanelKind`` rather than on ad-hoc name checks.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from typing import TYPE_CHECKING, ClassVar, Protocol

from .. import scroll
from ..geometry import Rect
from ..keys import KeyBinding

if TYPE_CHECKING:
    from ..backend import Backend
    from ..focus import FocusController
    from ..overlays import OverlayManager
    from ..surface import Surface, View


class PanelKind(enum.Enum):
    IMAGE_LIST = "image list"
    CONTAINER_LIST = "container list"
    VOLUME_LIST = "volume list"
    DETAIL = "detail"
    NAVIGATE = "navigate"
    ERROR = "error message"
    CONFIRM = "confirm"
    STATE = "state"
    FORM = "form"


IMAGE_LIST_PANEL = PanelKind.IMAGE_LIST.value
CONTAINER_LIST_PANEL = PanelKind.CONTAINER_LIST.value
VOLUME_LIST_PANEL = PanelKind.VOLUME_LIST.value
DETAIL_PANEL = PanelKind.DETAIL.value
NAVIGATE_PANEL = PanelKind.NAVIGATE.value
ERROR_MESSAGE_PANEL = PanelKind.ERROR.value
CONFIRM_MESSAGE_PANEL = PanelKind.CONFIRM.value
STATE_MESSAGE_PANEL = PanelKind.STATE.value
PULL_IMAGE_PANEL = "pull image"
CREATE_VOLUME_PANEL = "create volume"

CYCLABLE_KINDS: frozenset[PanelKind] = frozenset(
    {
        PanelKind.IMAGE_LIST,
        PanelKind.CONTAINER_LIST,
        PanelKind.VOLUME_LIST,
        PanelKind.DETAIL,
    }
)
LIST_KINDS: frozenset[PanelKind] = frozenset(
    {
        PanelKind.IMAGE_LIST,
        PanelKind.CONTAINER_LIST,
        PanelKind.VOLUME_LIST,
    }
)
OVERLAY_KINDS: frozenset[PanelKind] = frozenset(
    {
        PanelKind.ERROR,
        PanelKind.CONFIRM,
        PanelKind.STATE,
        PanelKind.FORM,
    }
)


class PanelHost(Protocol):
    """Application services panels call into."""

    screen: Surface
    backend: Backend
    focus: FocusController
    overlays: OverlayManager
    no_color: bool

    def reload(self, next_panel: str | None = None) -> None: ...

    def report_error(self, message: str, next_panel: str) -> None: ...

    def run_task(
        self,
        message: str,
        job: Callable[[], object],
        *,
        next_panel: str,
        on_done: Callable[[object], None] | None = None,
        reload: bool = True,
        error_panel: str | None = None,
    ) -> None: ...

    def show_detail(self, obj: object, *, title: str = "") -> None: ...


class Panel:
    """Named rectangular unit of the dashboard with its own refresh logic."""

    kind: ClassVar[PanelKind]

    def __init__(self, host: PanelHost, name: str, rect: Rect) -> None:
        self.host = host
        self._name = name
        self.rect = rect

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def cyclable(self) -> bool:
        return self.kind in CYCLABLE_KINDS

    def view(self) -> View:
        return self.host.screen.view(self._name)

    def set_view(self, screen: Surface) -> View:
        """Create or fetch this panel's view and install its key bindings."""
        view, created = screen.set_view(self._name, self.rect)
        view.kind = self.kind
        if created:
            view.title = self._name
            self.configure_view(view)
        for binding in self.bindings():
            for key in binding.keys:
                screen.set_keybinding(self._name, key, binding.handler)
        return view

    def fit_viewport(self) -> None:
        """Pull the cursor back inside the window after the view was resized."""
        view = self.view()
        scroll.place_cursor(view, view.origin[1] + view.cursor[1])

    def configure_view(self, view: View) -> None:
        """Hook for one-time view setup after creation."""

    def bindings(self) -> tuple[KeyBinding, ...]:
        return ()

    def refresh(self) -> None:
        raise NotImplementedError


__all__ = [
    "PanelKind",
    "PanelHost",
    "Panel",
    "CYCLABLE_KINDS",
    "LIST_KINDS",
    "OVERLAY_KINDS",
    "IMAGE_LIST_PANEL",
    "CONTAINER_LIST_PANEL",
    "VOLUME_LIST_PANEL",
    "DETAIL_PANEL",
    "NAVIGATE_PANEL",
    "ERROR_MESSAGE_PANEL",
    "CONFIRM_MESSAGE_PANEL",
    "STATE_MESSAGE_PANEL",
    "PULL_IMAGE_PANEL",
    "CREATE_VOLUME_PANEL",
]
