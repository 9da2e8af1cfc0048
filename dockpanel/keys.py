"""Key tokens and the per-view key binding table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .surface import View

KeyHandler = Callable[["View | None"], None]

GLOBAL_VIEW = ""

KEY_ENTER = "ENTER"
KEY_ESC = "ESC"
KEY_TAB = "TAB"
KEY_BACKSPACE = "BACKSPACE"
KEY_UP = "UP"
KEY_DOWN = "DOWN"
KEY_LEFT = "LEFT"
KEY_RIGHT = "RIGHT"
KEY_PGUP = "PGUP"
KEY_PGDN = "PGDN"
KEY_CTRL_B = "CTRL_B"
KEY_CTRL_F = "CTRL_F"
KEY_CTRL_Q = "CTRL_Q"
KEY_CTRL_R = "CTRL_R"


def is_text_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single handler."""

    keys: tuple[str, ...]
    handler: KeyHandler


class KeyBindingTable:
    """Key dispatch table scoped by view name.

    The empty view name holds global bindings. Binding the same key twice for
    one view replaces the earlier handler.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, dict[str, KeyHandler]] = {}

    def bind(self, view_name: str, key: str, handler: KeyHandler) -> None:
        self._handlers.setdefault(view_name, {})[key] = handler

    def bind_all(self, view_name: str, *bindings: KeyBinding) -> KeyBindingTable:
        """Register several bindings for one view and return ``self``."""
        for binding in bindings:
            for key in binding.keys:
                self.bind(view_name, key, binding.handler)
        return self

    def unbind_view(self, view_name: str) -> None:
        self._handlers.pop(view_name, None)

    def lookup(self, view_name: str, key: str) -> KeyHandler | None:
        return self._handlers.get(view_name, {}).get(key)

    def has_bindings(self, view_name: str) -> bool:
        return bool(self._handlers.get(view_name))

    def keys_for(self, view_name: str) -> tuple[str, ...]:
        return tuple(self._handlers.get(view_name, {}))


__all__ = [
    "KeyHandler",
    "KeyBinding",
    "KeyBindingTable",
    "GLOBAL_VIEW",
    "is_text_key",
    "KEY_ENTER",
    "KEY_ESC",
    "KEY_TAB",
    "KEY_BACKSPACE",
    "KEY_UP",
    "KEY_DOWN",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_PGUP",
    "KEY_PGDN",
    "KEY_CTRL_B",
    "KEY_CTRL_F",
    "KEY_CTRL_Q",
    "KEY_CTRL_R",
]
