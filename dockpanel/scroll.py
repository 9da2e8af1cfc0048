"""Cursor and scroll primitives shared by every scrollable panel.

Each move first tries the cursor; when the cursor would leave the visible
window the scroll origin shifts instead, keeping the cursor pinned. A move
that would address a line outside the content is dropped.

List panels reserve ``header_rows`` at the top of their content that the
cursor never selects. The detail panel has no header and scrolls to line 0.
"""

from __future__ import annotations

from .ansi import strip_ansi
from .errors import ViewBoundsError
from .surface import View

LIST_HEADER_ROWS = 1


def read_line(view: View, row: int | None = None) -> str:
    """Return the trimmed text at visible ``row`` (cursor row by default).

    Rows outside the content read as ``""``.
    """
    if row is None:
        _, row = view.cursor
    try:
        text = view.line(row)
    except ViewBoundsError:
        return ""
    return strip_ansi(text).strip(" ")


def _last_content_index(view: View) -> int:
    lines = view.lines
    for idx in range(len(lines) - 1, -1, -1):
        if strip_ansi(lines[idx]).strip(" "):
            return idx
    return -1


def _page_stride(view: View) -> int:
    _width, height = view.size()
    return max(1, height // 2)


def _reveal_header(view: View, header_rows: int) -> None:
    """Keep the cursor off header rows once the origin is back at the top."""
    ox, oy = view.origin
    cx, cy = view.cursor
    if header_rows and oy == 0 and cy < header_rows:
        try:
            view.set_cursor(cx, header_rows)
        except ViewBoundsError:
            view.set_origin(ox, header_rows)


def place_cursor(view: View, row: int) -> None:
    """Put the cursor on content ``row``, scrolling only when it is not visible.

    The cursor column is clamped to the window width.
    """
    width, height = view.size()
    height = max(1, height)
    ox, oy = view.origin
    if not oy <= row < oy + height:
        oy = 0 if row < height else row - height + 1
    cx = min(view.cursor[0], max(0, width - 1))
    view.set_origin(ox, oy)
    view.set_cursor(cx, row - oy)


def cursor_down(view: View | None) -> None:
    if view is None:
        return
    cx, cy = view.cursor
    if read_line(view, cy + 1) == "":
        return
    try:
        view.set_cursor(cx, cy + 1)
    except ViewBoundsError:
        ox, oy = view.origin
        view.set_origin(ox, oy + 1)


def cursor_up(view: View | None, *, header_rows: int = 0) -> None:
    if view is None:
        return
    ox, oy = view.origin
    cx, cy = view.cursor
    if header_rows and cy - 1 < header_rows and oy == 0:
        return
    try:
        view.set_cursor(cx, cy - 1)
    except ViewBoundsError:
        if oy > 0:
            view.set_origin(ox, oy - 1)
    _reveal_header(view, header_rows)


def page_down(view: View | None) -> None:
    if view is None:
        return
    ox, oy = view.origin
    cx, cy = view.cursor
    stride = min(_page_stride(view), _last_content_index(view) - (oy + cy))
    if stride <= 0:
        return
    try:
        view.set_cursor(cx, cy + stride)
    except ViewBoundsError:
        view.set_origin(ox, oy + stride)


def page_up(view: View | None, *, header_rows: int = 0) -> None:
    if view is None:
        return
    ox, oy = view.origin
    cx, cy = view.cursor
    stride = min(_page_stride(view), oy + cy - header_rows)
    if stride <= 0:
        return
    try:
        view.set_cursor(cx, cy - stride)
    except ViewBoundsError:
        if oy >= stride:
            view.set_origin(ox, oy - stride)
        else:
            view.set_origin(ox, 0)
            view.set_cursor(cx, oy + cy - stride)
    _reveal_header(view, header_rows)


__all__ = [
    "LIST_HEADER_ROWS",
    "read_line",
    "place_cursor",
    "cursor_down",
    "cursor_up",
    "page_down",
    "page_up",
]
