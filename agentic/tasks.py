"""Task model: priorities, statuses and task records."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Priority(Enum):
    """Task priority; the value is its display form."""

    LOW = "LOW"
    MEDIUM = "MED"
    HIGH = "HIGH"

    @classmethod
    def parse(cls, text: str) -> Priority:
        try:
            return _PRIORITY_NAMES[text.lower()]
        except KeyError:
            raise ValueError(f"Invalid priority: {text}") from None

    def __str__(self) -> str:
        return self.value


class TaskStatus(Enum):
    """Task progress state; the value is its display form."""

    TODO = "TODO"
    IN_PROGRESS = "IN PROGRESS"
    COMPLETE = "COMPLETE"

    @classmethod
    def parse(cls, text: str) -> TaskStatus:
        try:
            return _STATUS_NAMES[text.lower()]
        except KeyError:
            raise ValueError(f"Invalid task status: {text}") from None

    def __str__(self) -> str:
        return self.value


_PRIORITY_NAMES = {
    "low": Priority.LOW,
    "l": Priority.LOW,
    "medium": Priority.MEDIUM,
    "med": Priority.MEDIUM,
    "m": Priority.MEDIUM,
    "high": Priority.HIGH,
    "h": Priority.HIGH,
}

_STATUS_NAMES = {
    "todo": TaskStatus.TODO,
    "t": TaskStatus.TODO,
    "inprogress": TaskStatus.IN_PROGRESS,
    "in_progress": TaskStatus.IN_PROGRESS,
    "in progress": TaskStatus.IN_PROGRESS,
    "ip": TaskStatus.IN_PROGRESS,
    "complete": TaskStatus.COMPLETE,
    "c": TaskStatus.COMPLETE,
    "done": TaskStatus.COMPLETE,
}

_PRIORITY_COLORS = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}

_STATUS_ICONS = {
    TaskStatus.TODO: "○",
    TaskStatus.IN_PROGRESS: "◐",
    TaskStatus.COMPLETE: "●",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """A to-do item."""

    id: str
    title: str
    description: str | None
    priority: Priority
    status: TaskStatus
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def create(
        cls,
        title: str,
        description: str | None = None,
        priority: Priority = Priority.MEDIUM,
    ) -> Task:
        """Make a new, not yet started task with a fresh identifier."""
        now = _now()
        return cls(
            id=str(uuid.uuid4()),
            title=title,
            description=description,
            priority=priority,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )

    def priority_color(self) -> str:
        return _PRIORITY_COLORS[self.priority]

    def status_icon(self) -> str:
        return _STATUS_ICONS[self.status]