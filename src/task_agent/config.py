# src/task_agent/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Only PORT is read without the project prefix (hosting platforms set it).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKAGENT"

STORE_SQLITE = "sqlite"
STORE_MEMORY = "memory"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- HTTP ----
    host: str
    port: int
    cors_origins: list[str]

    # ---- Storage ----
    store_backend: str
    data_dir: Path
    tasks_db_path: Path

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "TaskAgent")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "0.0.0.0")
        port = _env_int(_k("PORT"), _env_int("PORT", 3000))
        cors_origins = _env_list(_k("CORS_ORIGINS"), ["*"])

        store_backend = _env(_k("STORE"), STORE_SQLITE).strip().lower()
        if store_backend not in (STORE_SQLITE, STORE_MEMORY):
            raise ValueError(
                f"{_k('STORE')} must be '{STORE_SQLITE}' or '{STORE_MEMORY}', got {store_backend!r}"
            )

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_agent"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            host=host,
            port=port,
            cors_origins=cors_origins,
            store_backend=store_backend,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
