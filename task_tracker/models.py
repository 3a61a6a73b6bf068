"""
Data models for the Task Tracker.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from sqlmodel import Field, SQLModel


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class Task(SQLModel):
    """
    A tracked unit of work.

    Attributes:
        id: Opaque unique identifier, assigned by the service.
        title: Short name of the task.
        description: What needs to be done.
        category: Free-form label.
        priority: Task priority (low, medium, high).
        deadline: When the task is due.
        status: Current status (pending, completed).
        created_at: When the task was created. Never changes.
        updated_at: When the task was last modified, None until then.
    """

    id: str
    title: str
    description: str
    category: str
    priority: Priority
    deadline: datetime
    status: TaskStatus = Field(default=TaskStatus.PENDING)
    created_at: datetime
    updated_at: datetime | None = Field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Render the task as its JSON shape."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "priority": self.priority.value,
            "deadline": self.deadline.isoformat(),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class TaskInput(SQLModel):
    """
    Client-supplied task fields for create and update.

    Values are left untyped so that every bad field reaches the service's
    validation and gets reported together. Only the fields a client actually
    sent end up in ``supplied()``; ``id`` and ``createdAt`` are not accepted.
    """

    title: Any = None
    description: Any = None
    category: Any = None
    priority: Any = None
    deadline: Any = None
    status: Any = None

    def supplied(self) -> dict[str, Any]:
        """Return only the fields that were explicitly set."""
        return {name: getattr(self, name) for name in self.model_fields_set}
