from __future__ import annotations

import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from taskapi.config import Settings
from taskapi.domain.errors import StorageError

Base = declarative_base()

logger = logging.getLogger(__name__)

# 25 open connections at most, 5 of them kept idle, recycled after 5 minutes.
POOL_SIZE = 5
MAX_OVERFLOW = 20
POOL_RECYCLE_SECONDS = 300


def _engine_args(url) -> dict:
    if str(url).startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": POOL_SIZE,
        "max_overflow": MAX_OVERFLOW,
        "pool_recycle": POOL_RECYCLE_SECONDS,
    }


class Database:
    """Owns the connection pool and provisions the schema."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StorageError("Database is not initialized")
        return self._engine

    def initialize(self) -> None:
        engine = None
        try:
            url = self._settings.database_url
            engine = create_engine(url, **_engine_args(url))
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, ValueError) as exc:
            if engine is not None:
                engine.dispose()
            logger.error("Failed to connect to database: %s", exc)
            raise StorageError("Failed to connect to database") from exc
        logger.info("Database connected successfully")

        self._engine = engine
        self._sessionmaker = sessionmaker(bind=engine, autoflush=False, autocommit=False)
        self.create_schema()

    def create_schema(self) -> None:
        # Registers TaskModel on Base.metadata.
        from . import models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine, checkfirst=True)
        except SQLAlchemyError as exc:
            logger.error("Failed to create tables: %s", exc)
            raise StorageError("Failed to create tables") from exc
        logger.info("Tables created/verified successfully")

    def session(self) -> Session:
        if self._sessionmaker is None:
            raise StorageError("Database is not initialized")
        return self._sessionmaker()

    def shutdown(self) -> None:
        if self._engine is None:
            return
        try:
            self._engine.dispose()
        except SQLAlchemyError as exc:
            logger.error("Error closing database: %s", exc)
        else:
            logger.info("Database connection closed")
        finally:
            self._engine = None
            self._sessionmaker = None
