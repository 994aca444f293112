from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskapi.config import Settings
from taskapi.infra.db import Database
from taskapi.infra.repository import TaskRepository
from taskapi.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file instead of PostgreSQL."""
    return Settings(
        database_override=f"sqlite:///{tmp_path / 'tasks.db'}",
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture()
def database(settings: Settings):
    db = Database(settings)
    db.initialize()
    yield db
    db.shutdown()


@pytest.fixture()
def repo(database: Database) -> TaskRepository:
    return TaskRepository(database)


@pytest.fixture()
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
