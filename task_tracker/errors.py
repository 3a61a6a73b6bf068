"""
Error types raised by the task service.
"""


class TaskServiceError(Exception):
    """Base class for failures a caller can recover from."""


class ValidationError(TaskServiceError):
    """One or more field rules were violated. Carries every violation."""

    def __init__(self, errors: list[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


class NotFound(TaskServiceError):
    """No task is stored under the requested id."""

    def __init__(self, task_id: str):
        super().__init__(f"The task with id={task_id} not found")
        self.task_id = task_id
