"""Task data model."""

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional

from ..utils.datetime_utils import parse_day


class Priority(Enum):
    """Task priority. Only two levels exist."""

    LOW = "low"
    HIGH = "high"


# Priorities from older data that no longer exist, mapped to their replacement.
LEGACY_PRIORITIES = {
    "medium": Priority.LOW,
}


def normalize_priority(value: Any) -> Priority:
    """Convert a raw priority value into a Priority, folding legacy levels."""
    if isinstance(value, Priority):
        return value
    if value is None:
        return Priority.LOW

    key = str(value).strip().lower()
    if key in LEGACY_PRIORITIES:
        return LEGACY_PRIORITIES[key]

    try:
        return Priority(key)
    except ValueError:
        raise ValueError(f"Unknown priority: {value!r}")


def require_bool(value: Any, name: str) -> bool:
    """Return value if it is a real boolean, else raise ValueError."""
    if not isinstance(value, bool):
        raise ValueError(f"{name} must be true or false, got {value!r}")
    return value


@dataclass(frozen=True)
class Task:
    """A todo item as supplied by the task store."""

    task_id: str
    title: str = ""
    completed: bool = False
    priority: Priority = Priority.LOW
    due_date: Optional[date] = None
    scheduled_date: Optional[date] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Build a task from a stored record, accepting snake or camel case keys."""
        task_id = data.get('task_id', data.get('id'))
        if task_id is None:
            raise ValueError("Task record has no id")

        created_at = data.get('created_at', data.get('createdAt'))
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)

        return cls(
            task_id=str(task_id),
            title=data.get('title', data.get('text', '')) or '',
            completed=require_bool(data.get('completed', False), 'completed'),
            priority=normalize_priority(data.get('priority')),
            due_date=parse_day(data.get('due_date', data.get('dueDate'))),
            scheduled_date=parse_day(data.get('scheduled_date', data.get('scheduledDate'))),
            created_at=created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to a JSON-friendly dictionary."""
        return {
            'task_id': self.task_id,
            'title': self.title,
            'completed': self.completed,
            'priority': self.priority.value,
            'due_date': self.due_date.isoformat() if self.due_date else None,
            'scheduled_date': self.scheduled_date.isoformat() if self.scheduled_date else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def without_schedule(self) -> "Task":
        """Return a copy with the scheduled date cleared."""
        return replace(self, scheduled_date=None)
