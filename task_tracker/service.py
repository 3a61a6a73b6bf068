"""
Business rules for the Task Tracker.

TaskService is the only component the HTTP layer talks to. It validates
input, fills in service-owned fields, merges partial updates and drives the
pending -> completed transition on top of a TaskStore.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from .errors import NotFound, ValidationError
from .models import Priority, Task, TaskInput, TaskStatus
from .store import TaskStore

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("title", "description", "category")


def new_task_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a deadline value.

    Args:
        value: A datetime, or an ISO-8601 string (a trailing 'Z' is accepted).

    Returns:
        Parsed datetime or None if the value is not a valid timestamp.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_fields(
    fields: dict[str, Any],
    current_status: TaskStatus | None = None,
) -> tuple[dict[str, Any], list[str]]:
    """
    Check a full set of task fields against the validation rules.

    All rules are evaluated; nothing stops at the first failure.

    Args:
        fields: Candidate values for title, description, category, priority,
            deadline and optionally status.
        current_status: Status of the stored task when validating an update.

    Returns:
        Tuple of (normalized values, list of violations in rule order).
    """
    errors: list[str] = []
    values: dict[str, Any] = {}

    for name in REQUIRED_TEXT_FIELDS:
        value = fields.get(name)
        if _is_text(value):
            values[name] = value
        else:
            errors.append(f"{name} must be a non-empty string")

    priority = fields.get("priority")
    try:
        values["priority"] = Priority(priority)
    except ValueError:
        allowed = ", ".join(p.value for p in Priority)
        errors.append(f"priority must be one of: {allowed}")

    deadline = parse_timestamp(fields.get("deadline"))
    if deadline is None:
        errors.append("deadline must be a valid ISO-8601 timestamp")
    else:
        values["deadline"] = deadline

    if "status" in fields:
        try:
            status = TaskStatus(fields["status"])
        except ValueError:
            allowed = ", ".join(s.value for s in TaskStatus)
            errors.append(f"status must be one of: {allowed}")
        else:
            if current_status == TaskStatus.COMPLETED and status == TaskStatus.PENDING:
                errors.append("status cannot change from completed back to pending")
            else:
                values["status"] = status

    return values, errors


class TaskService:
    """
    Task lifecycle operations over an injected store.

    Args:
        store: Where tasks are kept.
        id_factory: Returns a fresh globally-unique id string.
        clock: Returns the current timestamp.
    """

    def __init__(
        self,
        store: TaskStore,
        id_factory: Callable[[], str] = new_task_id,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.id_factory = id_factory
        self.clock = clock

    def create(self, data: TaskInput) -> Task:
        """
        Validate input and store a new pending task.

        Args:
            data: Client fields. Any status is ignored.

        Returns:
            The stored task.

        Raises:
            ValidationError: If any field rule is violated.
        """
        supplied = data.supplied()
        supplied.pop("status", None)
        values, errors = validate_fields(supplied)
        if errors:
            logger.info("Rejected task create: %s", errors)
            raise ValidationError(errors)

        task = Task(
            id=self.id_factory(),
            created_at=self.clock(),
            status=TaskStatus.PENDING,
            updated_at=None,
            **values,
        )
        self.store.put(task.id, task)
        logger.info("Created task id=%s title=%r", task.id, task.title)
        return task

    def get(self, task_id: str) -> Task:
        task = self.store.get(task_id)
        if task is None:
            logger.debug("Task id=%s not found", task_id)
            raise NotFound(task_id)
        return task

    def update(self, task_id: str, data: TaskInput) -> Task:
        """
        Merge supplied fields over a stored task.

        Fields present in ``data`` replace the stored values, absent fields are
        kept. The merged record is validated as a whole before it is written.

        Raises:
            NotFound: If no task is stored under ``task_id``.
            ValidationError: If the merged record breaks any rule.
        """
        with self.store.locked():
            current = self.get(task_id)
            merged = {
                "title": current.title,
                "description": current.description,
                "category": current.category,
                "priority": current.priority,
                "deadline": current.deadline,
                **data.supplied(),
            }
            values, errors = validate_fields(merged, current_status=current.status)
            if errors:
                logger.info("Rejected update of task id=%s: %s", task_id, errors)
                raise ValidationError(errors)

            values["updated_at"] = self.clock()
            task = current.model_copy(update=values)
            self.store.put(task_id, task)

        logger.info("Updated task id=%s fields=%s", task_id, sorted(data.supplied()))
        return task

    def complete(self, task_id: str) -> Task:
        """
        Mark a task as completed.

        Completing an already-completed task succeeds and refreshes
        ``updated_at``.

        Raises:
            NotFound: If no task is stored under ``task_id``.
        """
        with self.store.locked():
            current = self.get(task_id)
            task = current.model_copy(
                update={"status": TaskStatus.COMPLETED, "updated_at": self.clock()}
            )
            self.store.put(task_id, task)

        logger.info("Completed task id=%s", task_id)
        return task

    def delete(self, task_id: str) -> Task:
        """Remove a task and return it, or raise NotFound."""
        with self.store.locked():
            task = self.store.remove(task_id)
        if task is None:
            logger.debug("Task id=%s not found for delete", task_id)
            raise NotFound(task_id)

        logger.info("Deleted task id=%s", task_id)
        return task

    def list(self, status: str | None = None, priority: str | None = None) -> "list[Task]":
        """
        List stored tasks in store order, optionally filtered.

        Args:
            status: Only tasks with this status (pending, completed).
            priority: Only tasks with this priority (low, medium, high).

        Returns:
            List of tasks; empty when nothing matches.

        Raises:
            ValidationError: If a filter value is not a known status or priority.
        """
        errors = []
        status_filter = priority_filter = None
        if status:
            try:
                status_filter = TaskStatus(status)
            except ValueError:
                errors.append(f"unknown status filter: {status}")
        if priority:
            try:
                priority_filter = Priority(priority)
            except ValueError:
                errors.append(f"unknown priority filter: {priority}")
        if errors:
            raise ValidationError(errors)

        tasks = self.store.list()
        if status_filter is not None:
            tasks = [t for t in tasks if t.status == status_filter]
        if priority_filter is not None:
            tasks = [t for t in tasks if t.priority == priority_filter]
        return tasks
