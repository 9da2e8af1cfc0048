"""Background execution of slow backend calls.

Jobs run on daemon threads and post ``TaskResult``s to a queue; the main loop
drains the queue between key events so results are applied on the input
thread.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskResult:
    """Outcome of one background job."""

    task_id: int
    value: object = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BackgroundTasks:
    """Run jobs off the input thread and collect their results.

    With ``run_inline`` jobs execute synchronously inside ``submit``; results
    still go through the queue so callers see the same ordering.
    """

    def __init__(self, *, run_inline: bool = False) -> None:
        self._run_inline = run_inline
        self._lock = threading.Lock()
        self._next_task_id = 1
        self._results: Queue[TaskResult] = Queue()

    def _run(self, task_id: int, job: Callable[[], object]) -> None:
        try:
            value = job()
        except Exception as exc:
            logger.warning("background task %d failed: %s", task_id, exc)
            self._results.put(TaskResult(task_id, error=exc))
            return
        self._results.put(TaskResult(task_id, value=value))

    def submit(self, job: Callable[[], object]) -> int:
        """Start ``job`` and return its task id."""
        with self._lock:
            task_id = self._next_task_id
            self._next_task_id += 1
        if self._run_inline:
            self._run(task_id, job)
            return task_id
        worker = threading.Thread(
            target=self._run,
            args=(task_id, job),
            name=f"dockpanel-task-{task_id}",
            daemon=True,
        )
        worker.start()
        return task_id

    def drain_results(self) -> list[TaskResult]:
        """Return every result completed since the last drain."""
        out: list[TaskResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = ["TaskResult", "BackgroundTasks"]
