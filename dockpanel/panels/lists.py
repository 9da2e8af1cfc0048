"""Image, container and volume list panels.

Each list renders a header on content row 0 followed by one row per
resource. The cursor never selects the header; the selected resource is the
row under the cursor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import ClassVar, Generic, TypeVar

from .. import scroll
from ..backend import ContainerRecord, ImageRecord, VolumeRecord
from ..keys import (
    KEY_CTRL_B,
    KEY_CTRL_F,
    KEY_CTRL_R,
    KEY_DOWN,
    KEY_ENTER,
    KEY_PGDN,
    KEY_PGUP,
    KEY_UP,
    KeyBinding,
)
from ..surface import View
from .base import CREATE_VOLUME_PANEL, PULL_IMAGE_PANEL, Panel, PanelKind

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")

SHORT_ID_LENGTH = 12
COLUMN_GAP = "  "
PAGE_DOWN_KEYS = (KEY_CTRL_F, KEY_PGDN)
PAGE_UP_KEYS = (KEY_CTRL_B, KEY_PGUP)


@dataclass(frozen=True)
class Column(Generic[ItemT]):
    title: str
    value: Callable[[ItemT], str]
    max_width: int | None = None


def format_table(columns: Sequence[Column[ItemT]], items: Sequence[ItemT]) -> list[str]:
    """Lay items out as aligned text rows under a header row."""
    cells = [[column.value(item) for column in columns] for item in items]
    widths: list[int] = []
    for idx, column in enumerate(columns):
        width = max([len(column.title), *(len(row[idx]) for row in cells)])
        if column.max_width is not None:
            width = min(width, column.max_width)
        widths.append(width)

    def render(row: Sequence[str]) -> str:
        return COLUMN_GAP.join(cell[:width].ljust(width) for cell, width in zip(row, widths)).rstrip()

    return [render([column.title for column in columns]), *(render(row) for row in cells)]


def short_id(ident: str) -> str:
    if ident.startswith("sha256:"):
        ident = ident[len("sha256:"):]
    return ident[:SHORT_ID_LENGTH]


class ListPanel(Panel, Generic[ItemT]):
    """Shared behaviour of the three resource lists."""

    resource: ClassVar[str]
    columns: ClassVar[tuple[Column, ...]]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.items: list[ItemT] = []

    def configure_view(self, view: View) -> None:
        view.highlight = True
        view.set_lines(format_table(self.columns, []))
        scroll.place_cursor(view, scroll.LIST_HEADER_ROWS)

    def fetch(self) -> list[ItemT]:
        raise NotImplementedError

    def identity(self, item: ItemT) -> str:
        raise NotImplementedError

    def describe(self, item: ItemT) -> str:
        return self.identity(item)

    def remove(self, ident: str) -> None:
        raise NotImplementedError

    def refresh(self) -> None:
        self.show_items(self.fetch())

    def show_items(self, items: list[ItemT]) -> None:
        """Render ``items`` under the header, keeping the cursor row when it still exists."""
        self.items = items
        view = self.view()
        view.set_lines(format_table(self.columns, items))
        _ox, oy = view.origin
        _cx, cy = view.cursor
        row = min(max(oy + cy, scroll.LIST_HEADER_ROWS), max(len(items), scroll.LIST_HEADER_ROWS))
        scroll.place_cursor(view, row)

    def selected(self) -> ItemT | None:
        if not self.host.screen.has_view(self.name):
            return None
        view = self.view()
        idx = view.origin[1] + view.cursor[1] - scroll.LIST_HEADER_ROWS
        if 0 <= idx < len(self.items):
            return self.items[idx]
        return None

    def bindings(self) -> tuple[KeyBinding, ...]:
        return (
            KeyBinding(("j", KEY_DOWN), scroll.cursor_down),
            KeyBinding(("k", KEY_UP), lambda view: scroll.cursor_up(view, header_rows=scroll.LIST_HEADER_ROWS)),
            KeyBinding(PAGE_DOWN_KEYS, scroll.page_down),
            KeyBinding(PAGE_UP_KEYS, lambda view: scroll.page_up(view, header_rows=scroll.LIST_HEADER_ROWS)),
            KeyBinding((KEY_ENTER,), lambda _view: self.inspect()),
            KeyBinding(("d",), lambda _view: self.confirm_delete()),
            KeyBinding((KEY_CTRL_R,), lambda _view: self.reload()),
        )

    def reload(self) -> None:
        logger.debug("reload requested from %s", self.name)
        self.host.reload(self.name)

    def inspect(self) -> None:
        item = self.selected()
        if item is None:
            return
        ident = self.identity(item)
        title = self.describe(item)
        self.host.run_task(
            f"inspecting {self.resource} {title}...",
            lambda: self.host.backend.inspect(self.resource, ident),
            next_panel=self.name,
            on_done=lambda data: self.host.show_detail(data, title=title),
            reload=False,
        )

    def confirm_delete(self) -> None:
        item = self.selected()
        if item is None:
            return
        ident = self.identity(item)
        self.host.overlays.confirm(
            f"Do you want to delete this {self.resource}? {self.describe(item)} (y/n)",
            lambda: self.host.run_task(
                f"deleting {self.resource} {self.describe(item)}...",
                lambda: self.remove(ident),
                next_panel=self.name,
            ),
            next_panel=self.name,
        )


class ImageListPanel(ListPanel[ImageRecord]):
    kind = PanelKind.IMAGE_LIST
    resource = "image"
    columns = (
        Column("ID", lambda image: short_id(image.id), SHORT_ID_LENGTH),
        Column("REPOSITORY", lambda image: image.repository, 40),
        Column("TAG", lambda image: image.tag, 20),
        Column("CREATED", lambda image: image.created, 20),
        Column("SIZE", lambda image: image.size),
    )

    def fetch(self) -> list[ImageRecord]:
        return sorted(self.host.backend.images(), key=lambda image: (image.repository, image.tag))

    def identity(self, item: ImageRecord) -> str:
        return item.id

    def describe(self, item: ImageRecord) -> str:
        return item.reference

    def remove(self, ident: str) -> None:
        self.host.backend.remove_image(ident)

    def bindings(self) -> tuple[KeyBinding, ...]:
        return (*super().bindings(), KeyBinding(("p",), lambda _view: self.open_pull_form()))

    def open_pull_form(self) -> None:
        self.host.overlays.form(PULL_IMAGE_PANEL, ("Name", "Tag"), self.pull, next_panel=self.name)

    def pull(self, items: dict[str, str]) -> None:
        name, tag = items.get("Name", ""), items.get("Tag", "")
        if not name:
            self.host.report_error("image name is required", self.name)
            return
        self.host.run_task(
            f"pulling {name}:{tag}...",
            lambda: self.host.backend.pull_image(name, tag),
            next_panel=self.name,
        )


class ContainerListPanel(ListPanel[ContainerRecord]):
    kind = PanelKind.CONTAINER_LIST
    resource = "container"
    columns = (
        Column("ID", lambda container: short_id(container.id), SHORT_ID_LENGTH),
        Column("NAME", lambda container: container.name, 30),
        Column("IMAGE", lambda container: container.image, 30),
        Column("STATUS", lambda container: container.status, 30),
        Column("PORTS", lambda container: container.ports),
    )

    def fetch(self) -> list[ContainerRecord]:
        return sorted(self.host.backend.containers(), key=lambda container: container.name)

    def identity(self, item: ContainerRecord) -> str:
        return item.id

    def describe(self, item: ContainerRecord) -> str:
        return item.name or short_id(item.id)

    def remove(self, ident: str) -> None:
        self.host.backend.remove_container(ident)


class VolumeListPanel(ListPanel[VolumeRecord]):
    kind = PanelKind.VOLUME_LIST
    resource = "volume"
    columns = (
        Column("NAME", lambda volume: volume.name, 40),
        Column("DRIVER", lambda volume: volume.driver, 12),
        Column("MOUNTPOINT", lambda volume: volume.mountpoint),
    )

    def fetch(self) -> list[VolumeRecord]:
        return sorted(self.host.backend.volumes(), key=lambda volume: volume.name)

    def identity(self, item: VolumeRecord) -> str:
        return item.name

    def remove(self, ident: str) -> None:
        self.host.backend.remove_volume(ident)

    def bindings(self) -> tuple[KeyBinding, ...]:
        return (*super().bindings(), KeyBinding(("c",), lambda _view: self.open_create_form()))

    def open_create_form(self) -> None:
        self.host.overlays.form(
            CREATE_VOLUME_PANEL,
            ("Name", "Driver"),
            self.create,
            next_panel=self.name,
            defaults={"Driver": "local"},
        )

    def create(self, items: dict[str, str]) -> None:
        name, driver = items.get("Name", ""), items.get("Driver", "")
        self.host.run_task(
            f"creating volume {name or '(anonymous)'}...",
            lambda: self.host.backend.create_volume(name, driver),
            next_panel=self.name,
        )


__all__ = [
    "Column",
    "format_table",
    "short_id",
    "ListPanel",
    "ImageListPanel",
    "ContainerListPanel",
    "VolumeListPanel",
]
