from __future__ import annotations

from .entities import NewTask, TaskUpdate
from .enums import PRIORITY_VALUES, STATUS_VALUES
from .errors import EmptyTitle, InvalidPriority, InvalidStatus, TitleTooLong

MAX_TITLE_LENGTH = 255


def _check_title(title: str) -> None:
    if title == "":
        raise EmptyTitle()
    if len(title) > MAX_TITLE_LENGTH:
        raise TitleTooLong()


def _check_status(status: str) -> None:
    if status not in STATUS_VALUES:
        raise InvalidStatus()


def _check_priority(priority: str) -> None:
    if priority not in PRIORITY_VALUES:
        raise InvalidPriority()


def validate(task: NewTask) -> None:
    """Raise the first ValidationError that applies to ``task``."""
    _check_title(task.title)
    _check_status(task.status)
    _check_priority(task.priority)


def validate_update(update: TaskUpdate) -> None:
    if update.title is not None:
        _check_title(update.title)
    if update.status is not None:
        _check_status(update.status)
    if update.priority is not None:
        _check_priority(update.priority)
