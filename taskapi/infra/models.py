from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, Text, func

from .db import Base


def now() -> datetime:
    return datetime.now()


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, server_default="pending")
    priority = Column(String(20), nullable=False, server_default="medium")
    created_at = Column(DateTime, nullable=False, default=now, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, default=now, server_default=func.current_timestamp())

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed')",
            name="ck_tasks_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high')",
            name="ck_tasks_priority",
        ),
        {"sqlite_autoincrement": True},
    )


Index("idx_tasks_status", TaskModel.status)
Index("idx_tasks_priority", TaskModel.priority)
Index("idx_tasks_created_at", TaskModel.created_at.desc())
