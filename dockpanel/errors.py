"""Exception types shared by the dashboard core and its collaborators.

Lookup failures for views and bindings the core manages are lifecycle bugs and
propagate. Backend failures are user-visible and go through the error overlay.
"""

from __future__ import annotations


class DockpanelError(Exception):
    """Base class for dockpanel errors."""


class PanelNotFoundError(DockpanelError, KeyError):
    """Raised when a panel name is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown panel: {self.name!r}"


class UnknownViewError(DockpanelError, LookupError):
    """Raised when a surface operation names a view that does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"unknown view: {self.name!r}"


class ViewBoundsError(DockpanelError, ValueError):
    """A cursor or origin move would leave the view's valid range."""


class BackendError(DockpanelError):
    """A container-engine command failed."""

    def __init__(self, command: list[str] | str, returncode: int | None = None, stderr: str = "") -> None:
        self.command = command if isinstance(command, str) else " ".join(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.stderr:
            return self.stderr
        if self.returncode is None:
            return f"{self.command} failed"
        return f"{self.command} exited with status {self.returncode}"


class QuitRequested(Exception):
    """Raised by a key handler to end the main loop."""


__all__ = [
    "DockpanelError",
    "PanelNotFoundError",
    "UnknownViewError",
    "ViewBoundsError",
    "BackendError",
    "QuitRequested",
]
