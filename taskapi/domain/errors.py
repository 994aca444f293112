from __future__ import annotations


class TaskApiError(Exception):
    message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class DecodeError(TaskApiError):
    message = "Invalid request data"


class ValidationError(TaskApiError):
    message = "Invalid task"


class EmptyTitle(ValidationError):
    message = "title is required"


class TitleTooLong(ValidationError):
    message = "title must be 255 characters or less"


class InvalidStatus(ValidationError):
    message = "status must be one of: pending, in_progress, completed"


class InvalidPriority(ValidationError):
    message = "priority must be one of: low, medium, high"


class NotFound(TaskApiError):
    message = "Task not found"


class StorageError(TaskApiError):
    message = "Storage failure"
