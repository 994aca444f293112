from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from taskapi.domain.entities import NewTask, TaskEntity, TaskStats, TaskUpdate
from taskapi.domain.enums import TaskPriority, TaskStatus
from taskapi.domain.errors import StorageError
from taskapi.domain.filters import TaskFilters

from .db import Database
from .models import TaskModel, now

logger = logging.getLogger(__name__)

tasks_table = TaskModel.__table__

# Column order of every SET clause after updated_at.
UPDATABLE_FIELDS = ("title", "description", "status", "priority")


def _to_entity(model) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        title=model.title,
        description=model.description or "",
        status=TaskStatus(model.status),
        priority=TaskPriority(model.priority),
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def _apply_filters(stmt, filters: TaskFilters):
    if filters.status:
        stmt = stmt.where(TaskModel.status == filters.status)
    if filters.priority:
        stmt = stmt.where(TaskModel.priority == filters.priority)
    return stmt


def _update_assignments(changes: TaskUpdate) -> list[tuple]:
    assignments = [(tasks_table.c.updated_at, now())]
    for name in UPDATABLE_FIELDS:
        value = getattr(changes, name)
        if value is not None:
            assignments.append((tasks_table.c[name], value))
    return assignments


class TaskRepository:
    def __init__(self, database: Database) -> None:
        self._db = database

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        try:
            with self._db.session() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("Failed to %s: %s", action, exc)
            raise StorageError(f"Failed to {action}") from exc

    def list_tasks(self, filters: TaskFilters) -> list[TaskEntity]:
        with self._session("fetch tasks") as session:
            stmt = select(TaskModel)
            stmt = _apply_filters(stmt, filters)
            stmt = stmt.order_by(
                TaskModel.created_at.desc(),
                TaskModel.id.desc(),
            ).limit(filters.limit)
            return [_to_entity(task) for task in session.scalars(stmt)]

    def get_task(self, task_id: int) -> Optional[TaskEntity]:
        with self._session("fetch task") as session:
            task = session.get(TaskModel, task_id)
            return _to_entity(task) if task else None

    def create_task(self, data: NewTask) -> TaskEntity:
        with self._session("create task") as session:
            created = now()
            task = TaskModel(
                title=data.title,
                description=data.description,
                status=data.status,
                priority=data.priority,
                created_at=created,
                updated_at=created,
            )
            session.add(task)
            session.commit()
            session.refresh(task)
            return _to_entity(task)

    def update_task(self, task_id: int, changes: TaskUpdate) -> Optional[TaskEntity]:
        stmt = (
            update(tasks_table)
            .where(tasks_table.c.id == task_id)
            .ordered_values(*_update_assignments(changes))
            .returning(*tasks_table.c)
        )
        with self._session("update task") as session:
            row = session.execute(stmt).first()
            session.commit()
            return _to_entity(row) if row else None

    def delete_task(self, task_id: int) -> bool:
        with self._session("delete task") as session:
            result = session.execute(delete(tasks_table).where(tasks_table.c.id == task_id))
            session.commit()
            return result.rowcount > 0

    def get_stats(self) -> TaskStats:
        with self._session("get stats") as session:
            total = session.scalar(select(func.count()).select_from(TaskModel)) or 0
            by_status = session.execute(
                select(TaskModel.status, func.count()).group_by(TaskModel.status)
            ).all()
            by_priority = session.execute(
                select(TaskModel.priority, func.count()).group_by(TaskModel.priority)
            ).all()
            completed_today = session.scalar(
                select(func.count())
                .select_from(TaskModel)
                .where(
                    TaskModel.status == TaskStatus.COMPLETED.value,
                    func.date(TaskModel.updated_at) == date.today(),
                )
            ) or 0
            return TaskStats(
                total=total,
                by_status={status: count for status, count in by_status},
                by_priority={priority: count for priority, count in by_priority},
                completed_today=completed_today,
            )
