"""Focus controller: which panel receives input, and where focus returns.

The active index walks the registry's cyclable names. Overlays and forms can
take focus without moving the index; ``next_panel`` records where focus goes
once they close.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .registry import PanelRegistry
from .surface import Surface, View

logger = logging.getLogger(__name__)


class FocusController:
    """Cycle focus over primary panels and keep the status bar in sync."""

    def __init__(
        self,
        screen: Surface,
        registry: PanelRegistry,
        *,
        on_focus: Callable[[str], object] | None = None,
    ) -> None:
        self._screen = screen
        self._registry = registry
        self._on_focus = on_focus
        self._active = 0
        self.next_panel = ""

    @property
    def active_index(self) -> int:
        return self._active

    @property
    def active_name(self) -> str:
        return self._registry.cyclable_names[self._active]

    def set_on_focus(self, on_focus: Callable[[str], object] | None) -> None:
        self._on_focus = on_focus

    def next(self) -> View:
        names = self._registry.cyclable_names
        return self.switch_to(names[(self._active + 1) % len(names)])

    def previous(self) -> View:
        names = self._registry.cyclable_names
        return self.switch_to(names[(self._active - 1 + len(names)) % len(names)])

    def switch_to(self, name: str) -> View:
        """Focus ``name`` and raise it above every other view.

        Cyclable targets also move the active index; anything else (overlays,
        form inputs) leaves the index untouched.
        """
        self._screen.set_current_view(name)
        view = self._screen.set_view_on_top(name)
        names = self._registry.cyclable_names
        if name in names:
            self._active = names.index(name)
        if self._on_focus is not None:
            self._on_focus(name)
        logger.debug("focus -> %r (active index %d)", name, self._active)
        return view

    def restore(self) -> View:
        """Return focus to ``next_panel``, defaulting to the active panel."""
        return self.switch_to(self.next_panel or self.active_name)


__all__ = ["FocusController"]
