from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Request

from taskapi.domain.filters import DEFAULT_LIMIT, MAX_INT64, TaskFilters
from taskapi.services.task_service import TaskService

from .schemas import (
    DeletedOut,
    HealthOut,
    TaskCreate,
    TaskListOut,
    TaskOut,
    TaskPatch,
    TaskStatsOut,
)

SERVICE_NAME = "task-manager-api"

health_router = APIRouter(tags=["Health"])
router = APIRouter(prefix="/api/v1", tags=["Tasks"])

# Ids outside the 64-bit range are rejected as malformed input.
TaskId = Annotated[int, Path(ge=-MAX_INT64 - 1, le=MAX_INT64)]


def get_task_service(request: Request) -> TaskService:
    return request.app.state.task_service


@health_router.get("/health", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut(status="healthy", service=SERVICE_NAME)


@router.get("/tasks", response_model=TaskListOut)
def list_tasks(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    limit: str = DEFAULT_LIMIT,
    service: TaskService = Depends(get_task_service),
) -> TaskListOut:
    filters = TaskFilters.from_query(status=status, priority=priority, limit=limit)
    tasks = [TaskOut.model_validate(task) for task in service.list_tasks(filters)]
    return TaskListOut(tasks=tasks, count=len(tasks))


@router.get("/tasks/{task_id}", response_model=TaskOut)
def get_task(task_id: TaskId, service: TaskService = Depends(get_task_service)) -> TaskOut:
    return TaskOut.model_validate(service.get_task(task_id))


@router.post("/tasks", response_model=TaskOut, status_code=201)
def create_task(payload: TaskCreate, service: TaskService = Depends(get_task_service)) -> TaskOut:
    return TaskOut.model_validate(service.create_task(payload.to_new_task()))


@router.put("/tasks/{task_id}", response_model=TaskOut)
def update_task(
    task_id: TaskId,
    payload: TaskPatch,
    service: TaskService = Depends(get_task_service),
) -> TaskOut:
    return TaskOut.model_validate(service.update_task(task_id, payload.to_update()))


@router.delete("/tasks/{task_id}", response_model=DeletedOut)
def delete_task(task_id: TaskId, service: TaskService = Depends(get_task_service)) -> DeletedOut:
    service.delete_task(task_id)
    return DeletedOut(message="Task deleted successfully", id=task_id)


@router.get("/stats", response_model=TaskStatsOut)
def get_stats(service: TaskService = Depends(get_task_service)) -> TaskStatsOut:
    return TaskStatsOut.model_validate(service.get_stats())
