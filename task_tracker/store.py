"""
In-memory task storage.

Tasks are kept in a plain dict keyed by task id and returned in key order.
The store does no validation and raises no domain errors: a missing task is
reported as None.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from .models import Task

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Ordered map from task id to Task.

    Every access takes a re-entrant lock. Callers that read, modify and write
    back a record should hold ``locked()`` for the whole sequence.
    """

    def __init__(self):
        self._tasks: dict[str, Task] = {}
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator["TaskStore"]:
        """Hold the store lock across several operations."""
        with self._lock:
            yield self

    def get(self, task_id: str) -> Task | None:
        with self._lock:
            return self._tasks.get(task_id)

    def list(self) -> list[Task]:
        """
        Return all tasks ordered by id.

        Returns:
            A new list; empty when nothing is stored.
        """
        with self._lock:
            return [self._tasks[key] for key in sorted(self._tasks)]

    def put(self, task_id: str, task: Task) -> None:
        """Insert or overwrite the task stored at ``task_id``."""
        with self._lock:
            self._tasks[task_id] = task
        logger.debug("Stored task id=%s", task_id)

    def remove(self, task_id: str) -> Task | None:
        """
        Delete a task.

        Returns:
            The removed task, or None if nothing was stored at ``task_id``.
        """
        with self._lock:
            task = self._tasks.pop(task_id, None)
        if task is not None:
            logger.debug("Removed task id=%s", task_id)
        return task

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks
