from __future__ import annotations

from enum import StrEnum


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


STATUS_VALUES = frozenset(status.value for status in TaskStatus)
PRIORITY_VALUES = frozenset(priority.value for priority in TaskPriority)
