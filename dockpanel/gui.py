"""Dashboard composition root.

``Gui`` builds the panel grid on a ``Surface``, wires focus, overlays and the
input router together, and runs every backend call after startup through
the background worker so the input thread never waits on docker. Panels reach
application services only through the ``PanelHost`` surface it implements.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from .backend import Backend
from .errors import BackendError
from .focus import FocusController
from .geometry import GridLayout, grid_layout
from .overlays import OverlayManager
from .panels.base import (
    CONTAINER_LIST_PANEL,
    DETAIL_PANEL,
    IMAGE_LIST_PANEL,
    NAVIGATE_PANEL,
    VOLUME_LIST_PANEL,
    LIST_KINDS,
    PanelKind,
)
from .panels.detail import DetailPanel
from .panels.lists import ContainerListPanel, ImageListPanel, ListPanel, VolumeListPanel
from .panels.navigate import NavigatePanel
from .registry import PanelRegistry
from .router import InputRouter
from .surface import Surface
from .worker import BackgroundTasks, TaskResult

logger = logging.getLogger(__name__)

DEFAULT_STATUS_TIMEOUT_SECONDS = 30.0


@dataclass
class PendingTask:
    """A submitted background job still waiting for its result."""

    task_id: int
    message: str
    next_panel: str
    deadline: float
    on_done: Callable[[object], None] | None = None
    error_panel: str | None = None
    quiet: bool = False


def _no_job() -> None:
    return None


class Gui:
    """Own every panel and overlay of one dashboard session."""

    def __init__(
        self,
        screen: Surface,
        backend: Backend,
        *,
        no_color: bool = False,
        tasks: BackgroundTasks | None = None,
        status_timeout: float = DEFAULT_STATUS_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.screen = screen
        self.backend = backend
        self.no_color = no_color
        self.tasks = tasks if tasks is not None else BackgroundTasks()
        self.status_timeout = status_timeout
        self._clock = clock
        self._pending: dict[int, PendingTask] = {}

        self.registry = PanelRegistry()
        self.focus = FocusController(screen, self.registry)
        self.overlays = OverlayManager(screen, self.focus, reload=self.reload)
        self.router = InputRouter(screen, self.focus)
        self._init_panels()

    def _init_panels(self) -> None:
        max_x, max_y = self.screen.size()
        self._size = (max_x, max_y)
        grid = grid_layout(max_x, max_y)
        self.image_list = ImageListPanel(self, IMAGE_LIST_PANEL, grid.image_list)
        self.container_list = ContainerListPanel(self, CONTAINER_LIST_PANEL, grid.container_list)
        self.volume_list = VolumeListPanel(self, VOLUME_LIST_PANEL, grid.volume_list)
        self.detail = DetailPanel(self, DETAIL_PANEL, grid.detail)
        self.navigate = NavigatePanel(self, NAVIGATE_PANEL, grid.navigate)

        # Registration order is the focus cycle.
        for panel in (self.image_list, self.container_list, self.volume_list, self.detail, self.navigate):
            self.registry.register(panel)
            panel.set_view(self.screen)

        self.router.install(self.registry.cyclable_names)
        self.focus.set_on_focus(self.navigate.set_navi)
        self.focus.next_panel = IMAGE_LIST_PANEL
        self.focus.switch_to(IMAGE_LIST_PANEL)

    def start(self) -> None:
        """Load every panel from the backend for the first frame.

        This is the only synchronous load; every later reload goes through
        the worker. Failures open the error overlay at the failing panel.
        """
        failures = self.registry.refresh_all(self.focus)
        self._report_failures(failures)

    # PanelHost

    def _report_failures(self, failures: list[tuple[str, BackendError]], next_panel: str | None = None) -> None:
        if not failures:
            return
        name, exc = failures[0]
        self.overlays.error(str(exc), next_panel or name)

    def report_error(self, message: str, next_panel: str) -> None:
        self.overlays.error(message, next_panel)

    def show_detail(self, obj: object, *, title: str = "") -> None:
        self.detail.show(obj, title=title)

    def reload(self, next_panel: str | None = None) -> None:
        """Reload every list on the worker, then return focus to ``next_panel``.

        A failure reported by this reload points back at ``next_panel`` too,
        so acknowledging it keeps focus where the user left it.
        """
        target = next_panel or self.focus.next_panel
        self.run_task("refreshing...", _no_job, next_panel=target, error_panel=target)

    def refresh_in_background(self) -> bool:
        """Periodic refresh: fetch lists on the worker without any overlay.

        Focus is left alone. Returns ``False`` while another task is running.
        """
        if self.busy:
            return False
        self._submit("refreshing lists", _no_job, next_panel=self.focus.next_panel, quiet=True)
        return True

    def run_task(
        self,
        message: str,
        job: Callable[[], object],
        *,
        next_panel: str,
        on_done: Callable[[object], None] | None = None,
        reload: bool = True,
        error_panel: str | None = None,
    ) -> None:
        """Run ``job`` off the input thread behind a state overlay.

        With ``reload`` the worker also fetches every list once ``job``
        succeeds. On completion the state overlay closes; success applies the
        fetched lists and returns focus to ``next_panel``, failure opens the
        error overlay pointing there instead.
        """
        self.focus.next_panel = next_panel
        self.overlays.state(message)
        self._submit(message, job, next_panel=next_panel, on_done=on_done, reload=reload, error_panel=error_panel)

    def _submit(
        self,
        message: str,
        job: Callable[[], object],
        *,
        next_panel: str,
        on_done: Callable[[object], None] | None = None,
        reload: bool = True,
        error_panel: str | None = None,
        quiet: bool = False,
    ) -> None:
        fetch = self._fetch_lists if reload else None

        def work() -> tuple[object, dict[str, object] | None]:
            value = job()
            return value, fetch() if fetch is not None else None

        task_id = self.tasks.submit(work)
        self._pending[task_id] = PendingTask(
            task_id=task_id,
            message=message,
            next_panel=next_panel,
            deadline=self._clock() + self.status_timeout,
            on_done=on_done,
            error_panel=error_panel,
            quiet=quiet,
        )
        logger.info("task %d started: %s", task_id, message)

    def _list_panels(self) -> list[ListPanel]:
        return [panel for panel in self.registry.panels() if panel.kind in LIST_KINDS]

    def _fetch_lists(self) -> dict[str, object]:
        """Fetch every list on the worker thread; failures are kept per panel."""
        fetched: dict[str, object] = {}
        for panel in self._list_panels():
            try:
                fetched[panel.name] = panel.fetch()
            except BackendError as exc:
                logger.warning("fetching %r failed: %s", panel.name, exc)
                fetched[panel.name] = exc
        return fetched

    def _apply_lists(self, fetched: dict[str, object], *, restore_focus: bool, error_panel: str | None) -> None:
        failures: list[tuple[str, BackendError]] = []
        for name, result in fetched.items():
            if isinstance(result, BackendError):
                failures.append((name, result))
                continue
            panel = self.registry.lookup(name)
            panel.show_items(result)
        self.detail.refresh()
        self.navigate.refresh()
        if restore_focus:
            self.focus.restore()
        self._report_failures(failures, error_panel)

    @property
    def busy(self) -> bool:
        return bool(self._pending)

    def poll_tasks(self, now: float | None = None) -> bool:
        """Apply finished task results and expire overdue tasks.

        Results posted while applying others (an inline runner finishing a
        follow-up task) are applied in the same call. Returns whether anything
        changed on screen.
        """
        if now is None:
            now = self._clock()
        changed = False
        results = self.tasks.drain_results()
        while results:
            for result in results:
                task = self._pending.pop(result.task_id, None)
                if task is None:
                    logger.info("discarding late result of task %d", result.task_id)
                    continue
                self._finish(task, result)
                changed = True
            results = self.tasks.drain_results()
        for task_id, task in list(self._pending.items()):
            if now < task.deadline:
                continue
            del self._pending[task_id]
            logger.warning("task %d timed out: %s", task_id, task.message)
            self._close_state_if_idle()
            self.overlays.error(f"timed out: {task.message}", self._error_target(task))
            changed = True
        return changed

    def _error_target(self, task: PendingTask) -> str:
        # Quiet tasks never moved focus, so errors return to where the user is.
        if task.quiet:
            return self.focus.active_name
        return task.next_panel

    def _close_state_if_idle(self) -> None:
        if not self._pending and self.overlays.is_open(PanelKind.STATE):
            self.overlays.close_state()

    def _finish(self, task: PendingTask, result: TaskResult) -> None:
        self._close_state_if_idle()
        if result.error is not None:
            if not isinstance(result.error, BackendError):
                logger.error("task %d raised", task.task_id, exc_info=result.error)
            self.overlays.error(str(result.error) or type(result.error).__name__, self._error_target(task))
            return
        logger.info("task %d done: %s", task.task_id, task.message)
        value, fetched = result.value
        if task.on_done is not None:
            task.on_done(value)
        if not task.quiet:
            self.focus.next_panel = task.next_panel
        if fetched is not None:
            self._apply_lists(
                fetched,
                restore_focus=not task.quiet and not self.overlays.any_open(),
                error_panel=task.error_panel,
            )

    # Input and layout

    def dispatch(self, key: str) -> bool:
        """Route one key token; ``QuitRequested`` propagates to the caller."""
        return self.screen.dispatch(key)

    def relayout(self) -> bool:
        """Re-place every view when the screen size changed.

        Each panel then pulls its cursor back inside the resized window.
        """
        size = self.screen.size()
        if size == self._size:
            return False
        self._size = size
        grid: GridLayout = grid_layout(*size)
        placements = {
            IMAGE_LIST_PANEL: grid.image_list,
            CONTAINER_LIST_PANEL: grid.container_list,
            VOLUME_LIST_PANEL: grid.volume_list,
            DETAIL_PANEL: grid.detail,
            NAVIGATE_PANEL: grid.navigate,
        }
        for name, rect in placements.items():
            panel = self.registry.lookup(name)
            panel.rect = rect
            self.screen.set_view(name, rect)
            panel.fit_viewport()
        self.overlays.relayout()
        logger.debug("relayout to %dx%d", *size)
        return True


__all__ = ["Gui", "PendingTask", "DEFAULT_STATUS_TIMEOUT_SECONDS"]
