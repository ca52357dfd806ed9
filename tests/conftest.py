# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from task_agent.api.app import create_app
from task_agent.core.state import AppState
from task_agent.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the app factory.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="TaskAgent",
        log_level="DEBUG",
        host="127.0.0.1",
        port=3000,
        cors_origins=["*"],
        store_backend="sqlite",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState backed by a real SQLite store in tmp_path.

    The store's persistence behaviour is part of what we want to test.
    """
    return AppState(settings=settings, task_store=TaskStore(settings.tasks_db_path))


@pytest.fixture()
def client(state: AppState):
    with TestClient(create_app(state)) as c:
        yield c
