"""Screen geometry for the fixed dashboard grid and its overlays.

Rectangles are outer boxes in terminal cells, border included. The grid
splits the screen into three stacked list panels on the left, the detail
panel on the right and the navigation bar along the bottom.
"""

from __future__ import annotations

from dataclasses import dataclass

NAVIGATE_ROWS = 3
ERROR_OVERLAY_ROWS = 5
CONFIRM_OVERLAY_ROWS = 5
STATE_OVERLAY_ROWS = 3


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box placed at ``(x, y)`` spanning ``width`` x ``height`` cells."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, x0: int, y0: int, x1: int, y1: int) -> Rect:
        """Build a rect from inclusive corner coordinates."""
        return cls(x0, y0, max(1, x1 - x0 + 1), max(1, y1 - y0 + 1))

    @property
    def x1(self) -> int:
        return self.x + self.width - 1

    @property
    def y1(self) -> int:
        return self.y + self.height - 1

    def inner_width(self, framed: bool = True) -> int:
        return max(0, self.width - 2) if framed else self.width

    def inner_height(self, framed: bool = True) -> int:
        return max(0, self.height - 2) if framed else self.height


@dataclass(frozen=True)
class GridLayout:
    """Initial placement of the five primary views."""

    image_list: Rect
    container_list: Rect
    volume_list: Rect
    detail: Rect
    navigate: Rect


def grid_layout(max_x: int, max_y: int) -> GridLayout:
    """Split a ``max_x`` by ``max_y`` screen into the fixed dashboard grid."""
    half = max_x // 2
    third = max_y // 3
    content_bottom = max_y - NAVIGATE_ROWS - 1
    return GridLayout(
        image_list=Rect.from_corners(0, 0, half - 1, third - 1),
        container_list=Rect.from_corners(0, third, half - 1, third * 2 - 1),
        volume_list=Rect.from_corners(0, third * 2, half - 1, content_bottom),
        detail=Rect.from_corners(half + 1, 0, max_x - 1, content_bottom),
        navigate=Rect.from_corners(0, max_y - NAVIGATE_ROWS, max_x - 1, max_y - 1),
    )


def _centered_overlay(max_x: int, max_y: int, margin_divisor: int, rows: int) -> Rect:
    x = max_x // margin_divisor
    y = max_y // 3
    return Rect.from_corners(x, y, min(max_x - 1, max_x - x), y + rows - 1)


def error_rect(max_x: int, max_y: int) -> Rect:
    return _centered_overlay(max_x, max_y, 5, ERROR_OVERLAY_ROWS)


def confirm_rect(max_x: int, max_y: int) -> Rect:
    return _centered_overlay(max_x, max_y, 5, CONFIRM_OVERLAY_ROWS)


def state_rect(max_x: int, max_y: int) -> Rect:
    return _centered_overlay(max_x, max_y, 3, STATE_OVERLAY_ROWS)


def form_layout(max_x: int, max_y: int, labels: list[str]) -> tuple[Rect, list[Rect]]:
    """Place a form frame and one frameless single-row input per label.

    Labels sit on every other inner row of the frame; each input starts one
    column right of the widest label.
    """
    count = max(1, len(labels))
    frame = _centered_overlay(max_x, max_y, 5, 2 * count + 1)
    label_width = max((len(label) for label in labels), default=0) + 1
    input_x = frame.x + 1 + label_width + 1
    input_width = max(1, frame.x1 - input_x)
    inputs = [Rect(input_x, frame.y + 1 + 2 * idx, input_width, 1) for idx in range(len(labels))]
    return frame, inputs


__all__ = [
    "Rect",
    "GridLayout",
    "grid_layout",
    "error_rect",
    "confirm_rect",
    "state_rect",
    "form_layout",
]
