"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the dashboard chrome: view frames, titles, the
selected row of the focused list and the navigation bar. JSON highlighting in
the detail panel is handled separately by Pygments.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the frame composer."""

    name: str
    reset: str
    reverse: str
    frame: str
    frame_active: str
    title: str
    title_active: str
    selected: str
    header: str
    navigate: str
    overlay_frame: str
    error_frame: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    frame="\033[2m",
    frame_active="\033[38;5;42m",
    title="\033[38;5;250m",
    title_active="\033[1;38;5;42m",
    selected="\033[30;42m",
    header="\033[1;38;5;252m",
    navigate="\033[38;5;229m",
    overlay_frame="\033[38;5;45m",
    error_frame="\033[1;38;5;203m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    frame="\033[2;38;5;31m",
    frame_active="\033[38;5;45m",
    title="\033[38;5;110m",
    title_active="\033[1;38;5;45m",
    selected="\033[30;48;5;45m",
    header="\033[1;38;5;153m",
    navigate="\033[38;5;117m",
    overlay_frame="\033[38;5;39m",
    error_frame="\033[1;38;5;209m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    reverse="\033[7m",
    frame="",
    frame_active="",
    title="",
    title_active="",
    selected="\033[7m",
    header="",
    navigate="",
    overlay_frame="",
    error_frame="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
    PLAIN_THEME.name: PLAIN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
