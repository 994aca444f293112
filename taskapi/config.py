from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL


def _resolve_project_root() -> Path:
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


def _env(key: str, default: str) -> str:
    # Empty counts as unset.
    return os.getenv(key) or default


@dataclass(frozen=True)
class Settings:
    db_host: str = "localhost"
    db_port: str = "5432"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "taskdb"
    port: str = "8080"
    run_mode: str = "debug"
    database_override: str | None = None
    log_level: str = "INFO"
    log_dir: str = "logs"

    @property
    def database_url(self) -> str | URL:
        if self.database_override:
            return self.database_override
        return URL.create(
            "postgresql+psycopg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=int(self.db_port),
            database=self.db_name,
        )

    @property
    def debug(self) -> bool:
        return self.run_mode != "release"


def load_settings() -> Settings:
    return Settings(
        db_host=_env("DB_HOST", "localhost"),
        db_port=_env("DB_PORT", "5432"),
        db_user=_env("DB_USER", "postgres"),
        db_password=_env("DB_PASSWORD", "postgres"),
        db_name=_env("DB_NAME", "taskdb"),
        port=_env("PORT", "8080"),
        run_mode=_env("GIN_MODE", "debug"),
        database_override=os.getenv("DATABASE_URL", "").strip() or None,
        log_level=_env("LOG_LEVEL", "INFO"),
        log_dir=_env("LOG_DIR", "logs"),
    )
