"""Rendering/input surface the dashboard core is written against.

``Surface`` is the capability set the core needs: views placed at
rectangles, a z-order with one current view, key bindings scoped by view
name, and per-view cursor/origin coordinates. ``Screen`` is the in-memory
implementation; ``render.compose_frame`` turns it into terminal output, and
tests drive it directly without a terminal.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from .errors import UnknownViewError, ViewBoundsError
from .geometry import Rect
from .keys import (
    GLOBAL_VIEW,
    KEY_BACKSPACE,
    KEY_LEFT,
    KEY_RIGHT,
    KeyBindingTable,
    KeyHandler,
    is_text_key,
)

if TYPE_CHECKING:
    from .panels.base import PanelKind

logger = logging.getLogger(__name__)


class View:
    """Named rectangular text buffer with a cursor and a scroll origin.

    Cursor coordinates are relative to the origin and must stay inside the
    inner (frame-excluded) area. ``line(y)`` reads the content line shown at
    visible row ``y``.

    ``kind`` records the panel kind that owns the view; rendering styles by it.
    """

    def __init__(self, name: str, rect: Rect, *, frame: bool = True) -> None:
        self.name = name
        self.rect = rect
        self.frame = frame
        self.title = ""
        self.wrap = False
        self.highlight = False
        self.editable = False
        self.kind: PanelKind | None = None
        self._lines: list[str] = []
        self._cursor = (0, 0)
        self._origin = (0, 0)

    def __repr__(self) -> str:
        return f"View({self.name!r}, {self.rect!r})"

    def size(self) -> tuple[int, int]:
        """Return the inner ``(width, height)`` available to content."""
        return self.rect.inner_width(self.frame), self.rect.inner_height(self.frame)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def cursor(self) -> tuple[int, int]:
        return self._cursor

    @property
    def origin(self) -> tuple[int, int]:
        return self._origin

    def clear(self) -> None:
        self._lines = []

    def write(self, text: str) -> None:
        """Append ``text``; newlines start new content lines."""
        if not self._lines:
            self._lines = [""]
        parts = text.split("\n")
        self._lines[-1] += parts[0]
        self._lines.extend(parts[1:])

    def set_lines(self, lines: list[str]) -> None:
        self._lines = list(lines)

    def line(self, y: int) -> str:
        """Return the content line at visible row ``y``."""
        absolute = self._origin[1] + y
        if y < 0 or absolute < 0 or absolute >= len(self._lines):
            raise ViewBoundsError(f"{self.name}: no line at row {y}")
        return self._lines[absolute]

    def set_cursor(self, x: int, y: int) -> None:
        width, height = self.size()
        if x < 0 or y < 0 or x >= max(1, width) or y >= max(1, height):
            raise ViewBoundsError(f"{self.name}: cursor ({x}, {y}) outside {width}x{height}")
        self._cursor = (x, y)

    def set_origin(self, x: int, y: int) -> None:
        if x < 0 or y < 0:
            raise ViewBoundsError(f"{self.name}: origin ({x}, {y}) is negative")
        self._origin = (x, y)

    def edit(self, key: str) -> bool:
        """Apply one editing key to the line under the cursor."""
        cx, cy = self._cursor
        ox, oy = self._origin
        row = oy + cy
        while len(self._lines) <= row:
            self._lines.append("")
        text = self._lines[row]
        pos = min(len(text), ox + cx)
        if is_text_key(key):
            self._lines[row] = text[:pos] + key + text[pos:]
            self._move_edit_cursor(pos + 1)
            return True
        if key == KEY_BACKSPACE:
            if pos == 0:
                return False
            self._lines[row] = text[: pos - 1] + text[pos:]
            self._move_edit_cursor(pos - 1)
            return True
        if key == KEY_LEFT:
            self._move_edit_cursor(max(0, pos - 1))
            return True
        if key == KEY_RIGHT:
            self._move_edit_cursor(min(len(text), pos + 1))
            return True
        return False

    def _move_edit_cursor(self, column: int) -> None:
        width, _height = self.size()
        width = max(1, width)
        ox = self._origin[0]
        if column < ox:
            ox = column
        elif column >= ox + width:
            ox = column - width + 1
        self._origin = (ox, self._origin[1])
        self._cursor = (column - ox, self._cursor[1])


class Surface(Protocol):
    """Screen capabilities the dashboard core depends on."""

    def size(self) -> tuple[int, int]: ...

    def set_view(self, name: str, rect: Rect, *, frame: bool = True) -> tuple[View, bool]: ...

    def view(self, name: str) -> View: ...

    def has_view(self, name: str) -> bool: ...

    def current_view(self) -> View | None: ...

    def set_current_view(self, name: str) -> View: ...

    def set_view_on_top(self, name: str) -> View: ...

    def delete_view(self, name: str) -> None: ...

    def set_keybinding(self, view_name: str, key: str, handler: KeyHandler) -> None: ...

    def delete_keybindings(self, view_name: str) -> None: ...

    def has_keybindings(self, view_name: str) -> bool: ...

    def dispatch(self, key: str) -> bool: ...


class Screen:
    """In-memory ``Surface`` holding views in bottom-to-top z-order."""

    def __init__(self, size: Callable[[], tuple[int, int]] | tuple[int, int]) -> None:
        if callable(size):
            self._size = size
        else:
            fixed = (int(size[0]), int(size[1]))
            self._size = lambda: fixed
        self._views: dict[str, View] = {}
        self._order: list[str] = []
        self._current: str | None = None
        self._bindings = KeyBindingTable()
        self.dirty = True

    def size(self) -> tuple[int, int]:
        return self._size()

    def set_view(self, name: str, rect: Rect, *, frame: bool = True) -> tuple[View, bool]:
        """Return the view called ``name``, creating it at ``rect`` when missing.

        The second element reports whether the view was created by this call.
        Existing views are moved to ``rect`` but keep their content.
        """
        existing = self._views.get(name)
        self.dirty = True
        if existing is not None:
            existing.rect = rect
            existing.frame = frame
            return existing, False
        view = View(name, rect, frame=frame)
        self._views[name] = view
        self._order.append(name)
        logger.debug("created view %r at %s", name, rect)
        return view, True

    def view(self, name: str) -> View:
        try:
            return self._views[name]
        except KeyError:
            raise UnknownViewError(name) from None

    def has_view(self, name: str) -> bool:
        return name in self._views

    def views(self) -> list[View]:
        """Return all views bottom-to-top."""
        return [self._views[name] for name in self._order]

    def current_view(self) -> View | None:
        if self._current is None:
            return None
        return self._views.get(self._current)

    def set_current_view(self, name: str) -> View:
        view = self.view(name)
        self._current = name
        self.dirty = True
        return view

    def set_view_on_top(self, name: str) -> View:
        view = self.view(name)
        self._order.remove(name)
        self._order.append(name)
        self.dirty = True
        return view

    def delete_view(self, name: str) -> None:
        if name not in self._views:
            raise UnknownViewError(name)
        del self._views[name]
        self._order.remove(name)
        if self._current == name:
            self._current = None
        self.dirty = True
        logger.debug("deleted view %r", name)

    def set_keybinding(self, view_name: str, key: str, handler: KeyHandler) -> None:
        self._bindings.bind(view_name, key, handler)

    def delete_keybindings(self, view_name: str) -> None:
        self._bindings.unbind_view(view_name)

    def has_keybindings(self, view_name: str) -> bool:
        return self._bindings.has_bindings(view_name)

    def keybindings(self, view_name: str) -> tuple[str, ...]:
        return self._bindings.keys_for(view_name)

    def dispatch(self, key: str) -> bool:
        """Route one key token and return whether anything handled it.

        Bindings of the current view win over global bindings. Unbound keys
        edit the current view when it is editable.
        """
        current = self.current_view()
        handler = None
        if current is not None:
            handler = self._bindings.lookup(current.name, key)
        if handler is None:
            handler = self._bindings.lookup(GLOBAL_VIEW, key)
        if handler is not None:
            self.dirty = True
            handler(current)
            return True
        if current is not None and current.editable and current.edit(key):
            self.dirty = True
            return True
        return False


__all__ = ["View", "Surface", "Screen"]
