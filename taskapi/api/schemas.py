from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from taskapi.domain.entities import NewTask, TaskUpdate
from taskapi.domain.enums import TaskPriority, TaskStatus


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = ""
    status: str = TaskStatus.PENDING.value
    priority: str = TaskPriority.MEDIUM.value

    def to_new_task(self) -> NewTask:
        return NewTask(
            title=self.title,
            description=self.description or "",
            status=self.status,
            priority=self.priority,
        )


class TaskPatch(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None

    def to_update(self) -> TaskUpdate:
        return TaskUpdate(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
        )


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime


class TaskListOut(BaseModel):
    tasks: list[TaskOut]
    count: int


class TaskStatsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total: int
    by_status: dict[str, int]
    by_priority: dict[str, int]
    completed_today: int


class DeletedOut(BaseModel):
    message: str
    id: int


class HealthOut(BaseModel):
    status: str
    service: str
