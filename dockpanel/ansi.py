"""ANSI-aware measurement and slicing for view content.

View lines may carry SGR color sequences (highlighted JSON in the detail
panel). These helpers cut and pad such lines by display column so frames stay
aligned.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def slice_ansi_line(text: str, start_cols: int, max_cols: int) -> str:
    """Return ``max_cols`` display columns of ``text`` starting at ``start_cols``.

    Escape sequences are kept verbatim. When the slice starts after a style
    sequence, that sequence is re-emitted so visible text keeps its color.
    """
    if max_cols <= 0 or not text:
        return ""
    start_cols = max(0, start_cols)

    out: list[str] = []
    col = 0
    shown = 0
    i = 0
    n = len(text)
    pending_sgr = ""
    injected = False
    while i < n and shown < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                if seq.endswith("m"):
                    pending_sgr = seq
                    if col >= start_cols:
                        out.append(seq)
                        injected = True
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w <= start_cols:
            col += w
            i += 1
            continue
        if not injected and pending_sgr:
            out.append(pending_sgr)
            injected = True
        if ch == "\t":
            fill = min(w, max_cols - shown)
            out.append(" " * fill)
            shown += fill
        elif shown + w > max_cols:
            break
        else:
            out.append(ch)
            shown += w
        col += w
        i += 1
    return "".join(out)


def pad_ansi_line(text: str, start_cols: int, width: int) -> str:
    """Slice ``text`` to exactly ``width`` columns, padding with spaces."""
    visible = slice_ansi_line(text, start_cols, width)
    gap = width - display_width(visible)
    if "\x1b" in visible:
        visible += "\033[0m"
    return visible + " " * max(0, gap)


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Split a styled line into chunks of at most ``width`` display columns."""
    if width <= 0 or not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                chunk.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > width and chunk:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
            w = char_display_width(ch, col)
        chunk.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1
    wrapped.append("".join(chunk))
    return wrapped


__all__ = [
    "ANSI_ESCAPE_RE",
    "strip_ansi",
    "char_display_width",
    "display_width",
    "slice_ansi_line",
    "pad_ansi_line",
    "wrap_ansi_line",
]
