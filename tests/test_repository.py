from __future__ import annotations

import time

import pytest
from sqlalchemy import inspect

from taskapi.config import Settings
from taskapi.domain.entities import NewTask, TaskUpdate
from taskapi.domain.enums import TaskPriority, TaskStatus
from taskapi.domain.errors import StorageError
from taskapi.domain.filters import TaskFilters
from taskapi.infra.db import Database
from taskapi.infra.repository import TaskRepository


def test_schema_has_indexes_and_is_idempotent(database: Database) -> None:
    database.create_schema()

    inspector = inspect(database.engine)
    assert "tasks" in inspector.get_table_names()
    columns = {column["name"] for column in inspector.get_columns("tasks")}
    assert columns == {
        "id", "title", "description", "status", "priority", "created_at", "updated_at",
    }
    indexes = {index["name"] for index in inspector.get_indexes("tasks")}
    assert {"idx_tasks_status", "idx_tasks_priority", "idx_tasks_created_at"} <= indexes


def test_initialize_fails_when_store_unreachable(tmp_path) -> None:
    settings = Settings(database_override=f"sqlite:///{tmp_path / 'missing' / 'dir' / 'tasks.db'}")
    database = Database(settings)

    with pytest.raises(StorageError):
        database.initialize()


def test_session_before_initialize_raises() -> None:
    with pytest.raises(StorageError):
        Database(Settings()).session()


def test_shutdown_without_initialize_is_noop() -> None:
    Database(Settings()).shutdown()


def test_create_assigns_id_and_timestamps(repo: TaskRepository) -> None:
    task = repo.create_task(NewTask(title="Test", status="pending", priority="medium"))

    assert task.id > 0
    assert task.created_at == task.updated_at
    assert task.status == TaskStatus.PENDING
    assert task.priority == TaskPriority.MEDIUM
    assert repo.get_task(task.id) == task


def test_check_constraint_rejects_unknown_status(repo: TaskRepository) -> None:
    with pytest.raises(StorageError):
        repo.create_task(NewTask(title="Bypass", status="archived"))


def test_check_constraint_rejects_unknown_priority(repo: TaskRepository) -> None:
    with pytest.raises(StorageError):
        repo.create_task(NewTask(title="Bypass", priority="urgent"))


def test_ids_are_not_reused(repo: TaskRepository) -> None:
    first = repo.create_task(NewTask(title="One"))
    assert repo.delete_task(first.id)

    second = repo.create_task(NewTask(title="Two"))

    assert second.id > first.id


def test_update_sets_only_present_fields(repo: TaskRepository) -> None:
    task = repo.create_task(NewTask(title="Draft", description="notes", priority="low"))
    time.sleep(0.01)

    updated = repo.update_task(task.id, TaskUpdate(status="in_progress"))

    assert updated is not None
    assert updated.status == TaskStatus.IN_PROGRESS
    assert updated.title == "Draft"
    assert updated.description == "notes"
    assert updated.priority == TaskPriority.LOW
    assert updated.created_at == task.created_at
    assert updated.updated_at > task.updated_at


def test_update_missing_returns_none(repo: TaskRepository) -> None:
    assert repo.update_task(12345, TaskUpdate(title="Nope")) is None


def test_delete_missing_returns_false(repo: TaskRepository) -> None:
    assert repo.delete_task(12345) is False


def test_list_filters_and_orders(repo: TaskRepository) -> None:
    repo.create_task(NewTask(title="a", status="completed", priority="high"))
    repo.create_task(NewTask(title="b", status="completed", priority="low"))
    repo.create_task(NewTask(title="c", status="pending", priority="high"))
    newest = repo.create_task(NewTask(title="d", status="completed", priority="high"))

    tasks = repo.list_tasks(TaskFilters(status="completed", priority="high"))

    assert [t.title for t in tasks] == ["d", "a"]
    assert tasks[0] == newest
    assert repo.list_tasks(TaskFilters(limit=1)) == [newest]
    assert repo.list_tasks(TaskFilters(limit=0)) == []


def test_list_empty_store(repo: TaskRepository) -> None:
    assert repo.list_tasks(TaskFilters()) == []


def test_stats(repo: TaskRepository) -> None:
    for _ in range(3):
        repo.create_task(NewTask(title="todo", priority="low"))
    for _ in range(2):
        repo.create_task(NewTask(title="done", status="completed", priority="high"))

    stats = repo.get_stats()

    assert stats.total == 5
    assert stats.by_status == {"pending": 3, "completed": 2}
    assert stats.by_priority == {"low": 3, "high": 2}
    assert stats.completed_today == 2


def test_storage_errors_are_wrapped(repo: TaskRepository, database: Database) -> None:
    database.shutdown()

    with pytest.raises(StorageError):
        repo.list_tasks(TaskFilters())
