"""JSON rendering of backend objects for the detail panel."""

from __future__ import annotations

import dataclasses
import json

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import JsonLexer

_LEXER = JsonLexer()
_FORMATTER = TerminalFormatter()


def _jsonable(obj: object) -> object:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    return obj


def struct_to_json(obj: object) -> str:
    """Pretty-print ``obj`` with four-space indentation.

    Returns ``""`` when the object cannot be serialized.
    """
    try:
        return json.dumps(_jsonable(obj), indent=4, ensure_ascii=False)
    except (TypeError, ValueError):
        return ""


def highlight_json(text: str, *, no_color: bool = False) -> str:
    """Colorize JSON text for the terminal using Pygments."""
    if no_color or not text:
        return text
    return highlight(text, _LEXER, _FORMATTER).rstrip("\n")


__all__ = ["struct_to_json", "highlight_json"]
