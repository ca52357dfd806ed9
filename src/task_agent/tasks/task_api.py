# src/task_agent/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.state import AppState
from .task_models import Task

logger = logging.getLogger(__name__)

NO_TASKS_MESSAGE = "No tasks yet."
DONE_MARKER = "✅"
OPEN_MARKER = "⬜"


def create_task(state: AppState, title: str) -> Task:
    """
    Create a new open task.
    Raises ValueError if the title is blank after trimming.
    """
    title = (title or "").strip()
    if not title:
        raise ValueError("task title must not be empty")

    task = state.task_store.add_task(title=title)
    logger.info("Created task id=%s", task.id)
    return task


def list_tasks(state: AppState) -> list[Task]:
    return state.task_store.list_tasks()


def complete_task(state: AppState, task_id: int) -> Task | None:
    """Mark a task done. Returns None if the id is unknown."""
    task = state.task_store.mark_done(task_id)
    if task is None:
        logger.info("Complete requested for missing task id=%s", task_id)
    else:
        logger.info("Completed task id=%s", task.id)
    return task


def format_task(task: Task) -> str:
    marker = DONE_MARKER if task.done else OPEN_MARKER
    return f"{marker} [{task.id}] {task.title}"


def format_tasks(tasks: Sequence[Task]) -> str:
    if not tasks:
        return NO_TASKS_MESSAGE
    return "\n".join(format_task(t) for t in tasks)
