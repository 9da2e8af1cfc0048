"""Panel registry: name lookup plus the ordered focus cycle."""

from __future__ import annotations

import logging
from collections.abc import Iterator, KeysView, ValuesView
from typing import TYPE_CHECKING

from .errors import BackendError, PanelNotFoundError
from .panels.base import Panel

if TYPE_CHECKING:
    from .focus import FocusController

logger = logging.getLogger(__name__)


class PanelRegistry:
    """Owns every panel of the dashboard keyed by its unique name.

    Cyclable panels (the three lists and the detail panel) are also kept in
    registration order; that order is the focus cycle. Registering a name
    again replaces the panel but keeps its single cycle slot.
    """

    def __init__(self) -> None:
        self._panels: dict[str, Panel] = {}
        self._cyclable: list[str] = []

    def __contains__(self, name: object) -> bool:
        return name in self._panels

    def __len__(self) -> int:
        return len(self._panels)

    def __iter__(self) -> Iterator[str]:
        return iter(self._panels)

    @property
    def cyclable_names(self) -> tuple[str, ...]:
        return tuple(self._cyclable)

    def names(self) -> KeysView[str]:
        """Registered names; iteration order carries no meaning."""
        return self._panels.keys()

    def panels(self) -> ValuesView[Panel]:
        """Registered panels; iteration order carries no meaning."""
        return self._panels.values()

    def register(self, panel: Panel) -> None:
        name = panel.name
        replaced = name in self._panels
        self._panels[name] = panel
        if panel.cyclable and name not in self._cyclable:
            self._cyclable.append(name)
        logger.debug("%s panel %r", "replaced" if replaced else "registered", name)

    def lookup(self, name: str) -> Panel:
        try:
            return self._panels[name]
        except KeyError:
            raise PanelNotFoundError(name) from None

    def refresh_panels(self) -> list[tuple[str, BackendError]]:
        """Refresh every panel and collect backend failures by panel name."""
        failures: list[tuple[str, BackendError]] = []
        for panel in list(self._panels.values()):
            try:
                panel.refresh()
            except BackendError as exc:
                logger.warning("refreshing %r failed: %s", panel.name, exc)
                failures.append((panel.name, exc))
        return failures

    def refresh_all(self, focus: FocusController) -> list[tuple[str, BackendError]]:
        """Refresh every panel, then hand focus back to ``focus.next_panel``."""
        failures = self.refresh_panels()
        focus.restore()
        return failures


__all__ = ["PanelRegistry"]
