"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into the key tokens used by
the binding tables: printable characters, ``ENTER``, ``ESC``, ``TAB``,
``BACKSPACE``, arrows, page keys and the handful of ``CTRL_*`` chords the
dashboard binds.
"""

from __future__ import annotations

import os
import select

from .keys import (
    KEY_BACKSPACE,
    KEY_CTRL_B,
    KEY_CTRL_F,
    KEY_CTRL_Q,
    KEY_CTRL_R,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_LEFT,
    KEY_PGDN,
    KEY_PGUP,
    KEY_RIGHT,
    KEY_TAB,
    KEY_UP,
)

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_BYTES: dict[bytes, str] = {
    b"\x11": KEY_CTRL_Q,
    b"\x06": KEY_CTRL_F,
    b"\x02": KEY_CTRL_B,
    b"\x12": KEY_CTRL_R,
    b"\t": KEY_TAB,
    b"\x08": KEY_BACKSPACE,
    b"\x7f": KEY_BACKSPACE,
    b"\r": KEY_ENTER,
    b"\n": KEY_ENTER,
}

_ARROWS: dict[bytes, str] = {
    b"A": KEY_UP,
    b"B": KEY_DOWN,
    b"C": KEY_RIGHT,
    b"D": KEY_LEFT,
}

_TILDE_KEYS: dict[bytes, str] = {
    b"5": KEY_PGUP,
    b"6": KEY_PGDN,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_text(fd: int, ch: bytes) -> str:
    """Collect the continuation bytes of a multi-byte UTF-8 character."""
    data = ch
    for _ in range(_utf8_length(ch[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _decode_escape(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KEY_ESC
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return KEY_ESC
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return KEY_ESC
    if seq in _ARROWS:
        return _ARROWS[seq]
    if seq in _TILDE_KEYS:
        tail = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if tail == b"~":
            return _TILDE_KEYS[seq]
    return KEY_ESC


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when nothing arrived in time."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in _CONTROL_BYTES:
        return _CONTROL_BYTES[ch]
    if ch == b"\x1b":
        return _decode_escape(fd)
    return _decode_text(fd, ch)


__all__ = ["read_key", "ESC_SEQUENCE_TIMEOUT_MS"]
