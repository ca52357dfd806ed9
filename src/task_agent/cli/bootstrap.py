# src/task_agent/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the configured task store into AppState.
"""

from __future__ import annotations

import logging

from ..config import STORE_MEMORY, get_settings
from ..core.ports import TaskRepo
from ..core.state import AppState
from ..tasks.memory_store import InMemoryTaskStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_task_store(settings) -> TaskRepo:
    backend = getattr(settings, "store_backend", "sqlite")
    if backend == STORE_MEMORY:
        return InMemoryTaskStore()
    return TaskStore(settings.tasks_db_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    state = AppState(settings=settings, task_store=create_task_store(settings))
    logger.info("State ready (store=%s)", type(state.task_store).__name__)
    return state


def shutdown_state(state: AppState) -> None:
    """Release the task store. Errors are logged, not raised."""
    try:
        state.task_store.close()
    except Exception:
        logger.exception("Task store close failed.")
