from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from taskapi.api.middleware import install_error_handlers, install_middleware
from taskapi.api.routes import health_router, router
from taskapi.config import Settings, load_env, load_settings
from taskapi.infra.db import Database
from taskapi.infra.logging import setup_logging
from taskapi.infra.repository import TaskRepository
from taskapi.services.task_service import TaskRepo, TaskService

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, repository: TaskRepo | None = None) -> FastAPI:
    """Build the API.

    Without a ``repository`` the app owns a ``Database`` that is initialized
    on startup (failure aborts startup) and shut down on exit.
    """
    settings = settings or load_settings()
    database = Database(settings) if repository is None else None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if database is not None:
            database.initialize()
        yield
        if database is not None:
            database.shutdown()

    app = FastAPI(title="Task Manager API", debug=settings.debug, lifespan=lifespan)
    app.state.settings = settings
    app.state.task_service = TaskService(repository if repository is not None else TaskRepository(database))

    install_middleware(app)
    install_error_handlers(app)
    app.include_router(health_router)
    app.include_router(router)
    return app


def main() -> None:
    load_env()
    settings = load_settings()
    setup_logging(settings)

    app = create_app(settings)
    logger.info("Server starting on port %s", settings.port)
    logger.info("Health check: http://localhost:%s/health", settings.port)
    logger.info("API endpoint: http://localhost:%s/api/v1/tasks", settings.port)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(settings.port),
        log_config=None,
        access_log=False,
    )


if __name__ == "__main__":
    main()
