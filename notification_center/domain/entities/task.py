"""Domain entity representing a task assigned to a dashboard user."""

from dataclasses import dataclass
from typing import Any

TASK_STATUS_PENDING = "pending"
TASK_STATUS_IN_PROGRESS = "in-progress"
TASK_STATUS_OVERDUE = "overdue"
TASK_STATUS_COMPLETED = "completed"
TASK_STATUS_CANCELLED = "cancelled"

TASK_CLOSED_STATUSES = frozenset({TASK_STATUS_COMPLETED, TASK_STATUS_CANCELLED})


@dataclass(frozen=True)
class Task:
    """Read-only view of a task supplied by the task data hook."""

    id: str
    title: str | None = None
    assignee_id: str | None = None
    due_date: Any = None
    status: str | None = None

    def is_closed(self) -> bool:
        """Return ``True`` when the task no longer needs attention."""

        return (self.status or "").lower() in TASK_CLOSED_STATUSES


__all__ = [
    "Task",
    "TASK_STATUS_PENDING",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_OVERDUE",
    "TASK_STATUS_COMPLETED",
    "TASK_STATUS_CANCELLED",
    "TASK_CLOSED_STATUSES",
]
