from __future__ import annotations

import logging
from typing import Optional, Protocol

from taskapi.domain.entities import NewTask, TaskEntity, TaskStats, TaskUpdate
from taskapi.domain.errors import NotFound
from taskapi.domain.filters import TaskFilters
from taskapi.domain.validation import validate, validate_update

logger = logging.getLogger(__name__)


class TaskRepo(Protocol):
    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]: ...

    def get_task(self, task_id: int) -> Optional[TaskEntity]: ...

    def create_task(self, data: NewTask) -> TaskEntity: ...

    def update_task(self, task_id: int, changes: TaskUpdate) -> Optional[TaskEntity]: ...

    def delete_task(self, task_id: int) -> bool: ...

    def get_stats(self) -> TaskStats: ...


class TaskService:
    def __init__(self, repo: TaskRepo) -> None:
        self._repo = repo

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        return self._repo.list_tasks(filters)

    def get_task(self, task_id: int) -> TaskEntity:
        task = self._repo.get_task(task_id)
        if task is None:
            raise NotFound()
        return task

    def create_task(self, data: NewTask) -> TaskEntity:
        validate(data)
        task = self._repo.create_task(data)
        logger.info("Created task %s", task.id)
        return task

    def update_task(self, task_id: int, changes: TaskUpdate) -> TaskEntity:
        validate_update(changes)
        task = self._repo.update_task(task_id, changes)
        if task is None:
            raise NotFound()
        return task

    def delete_task(self, task_id: int) -> None:
        if not self._repo.delete_task(task_id):
            raise NotFound()
        logger.info("Deleted task %s", task_id)

    def get_stats(self) -> TaskStats:
        return self._repo.get_stats()
