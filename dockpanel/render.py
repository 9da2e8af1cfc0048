"""Frame composer for the in-memory screen.

Views are painted bottom-to-top with absolute cursor positioning, so views
higher in the z-order simply overwrite what lies beneath them. Everything is
clipped to the screen size.
"""

from __future__ import annotations

import os

from .ansi import pad_ansi_line, slice_ansi_line, strip_ansi, wrap_ansi_line
from .panels.base import LIST_KINDS, OVERLAY_KINDS, PanelKind
from .surface import Screen, View
from .ui_theme import UITheme

BOX_TOP_LEFT = "┌"
BOX_TOP_RIGHT = "┐"
BOX_BOTTOM_LEFT = "└"
BOX_BOTTOM_RIGHT = "┘"
BOX_HORIZONTAL = "─"
BOX_VERTICAL = "│"


def _goto(row: int, col: int) -> str:
    return f"\033[{row + 1};{col + 1}H"


def _frame_style(view: View, theme: UITheme, focused: bool) -> str:
    if view.kind is PanelKind.ERROR:
        return theme.error_frame
    if view.kind in OVERLAY_KINDS:
        return theme.overlay_frame
    if focused:
        return theme.frame_active
    return theme.frame


def _top_border(view: View, theme: UITheme, style: str, focused: bool) -> str:
    inner = max(0, view.rect.width - 2)
    title = view.title[: max(0, inner - 2)]
    if not title:
        return f"{style}{BOX_TOP_LEFT}{BOX_HORIZONTAL * inner}{BOX_TOP_RIGHT}{theme.reset}"
    title_style = theme.title_active if focused else theme.title
    rest = max(0, inner - len(title) - 1)
    return (
        f"{style}{BOX_TOP_LEFT}{BOX_HORIZONTAL}{theme.reset}"
        f"{title_style}{title}{theme.reset}"
        f"{style}{BOX_HORIZONTAL * rest}{BOX_TOP_RIGHT}{theme.reset}"
    )


def _visible_rows(view: View) -> list[str]:
    """Return the content rows shown in the view, padded to its inner width."""
    width, height = view.size()
    ox, oy = view.origin
    if view.wrap:
        visual = [chunk for line in view.lines for chunk in wrap_ansi_line(line, width)]
        return [pad_ansi_line(row, 0, width) for row in visual[oy : oy + height]]
    return [pad_ansi_line(line, ox, width) for line in view.lines[oy : oy + height]]


def _style_row(view: View, theme: UITheme, row: int, text: str, focused: bool) -> str:
    _cx, cy = view.cursor
    oy = view.origin[1]
    if view.editable and focused and row == cy:
        plain = strip_ansi(text)
        cx = min(view.cursor[0], max(0, len(plain) - 1))
        return f"{plain[:cx]}{theme.reverse}{plain[cx : cx + 1]}{theme.reset}{plain[cx + 1 :]}"
    if view.highlight and row == cy:
        return f"{theme.selected}{strip_ansi(text)}{theme.reset}"
    if view.kind in LIST_KINDS and oy + row == 0:
        return f"{theme.header}{text}{theme.reset}"
    if view.kind is PanelKind.NAVIGATE:
        return f"{theme.navigate}{text}{theme.reset}"
    return text


def _render_view(view: View, theme: UITheme, max_x: int, max_y: int, *, focused: bool) -> list[str]:
    rect = view.rect
    if rect.x >= max_x or rect.y >= max_y:
        return []
    out: list[str] = []
    clip_cols = max_x - rect.x

    if view.frame:
        style = _frame_style(view, theme, focused)
        out.append(_goto(rect.y, rect.x))
        out.append(slice_ansi_line(_top_border(view, theme, style, focused), 0, clip_cols))
        out.append(theme.reset)
        for y in range(rect.y + 1, min(rect.y1, max_y)):
            out.append(f"{_goto(y, rect.x)}{style}{BOX_VERTICAL}{theme.reset}")
            if rect.x1 < max_x:
                out.append(f"{_goto(y, rect.x1)}{style}{BOX_VERTICAL}{theme.reset}")
        if rect.y1 < max_y and rect.height > 1:
            bottom = f"{BOX_BOTTOM_LEFT}{BOX_HORIZONTAL * max(0, rect.width - 2)}{BOX_BOTTOM_RIGHT}"
            out.append(f"{_goto(rect.y1, rect.x)}{style}{bottom[:clip_cols]}{theme.reset}")
        inner_x, inner_y = rect.x + 1, rect.y + 1
    else:
        inner_x, inner_y = rect.x, rect.y

    width, height = view.size()
    content_cols = min(width, max_x - inner_x)
    if content_cols <= 0:
        return out
    rows = _visible_rows(view)
    for row in range(height):
        y = inner_y + row
        if y >= max_y:
            break
        text = rows[row] if row < len(rows) else " " * width
        text = _style_row(view, theme, row, text, focused)
        if content_cols < width:
            text = slice_ansi_line(text, 0, content_cols)
        out.append(f"{_goto(y, inner_x)}{text}{theme.reset}")
    return out


def compose_frame(screen: Screen, theme: UITheme) -> str:
    """Return the escape-sequence payload that draws ``screen``."""
    max_x, max_y = screen.size()
    current = screen.current_view()
    out: list[str] = ["\033[H\033[2J"]
    for view in screen.views():
        out.extend(_render_view(view, theme, max_x, max_y, focused=view is current))
    out.append(theme.reset)
    return "".join(out)


def write_frame(fd: int, frame: str) -> None:
    os.write(fd, frame.encode("utf-8", errors="replace"))


__all__ = ["compose_frame", "write_frame"]
