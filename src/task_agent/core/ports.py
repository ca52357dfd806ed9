# src/task_agent/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    """
    Task persistence.

    Implemented by TaskStore (SQLite) and InMemoryTaskStore.
    """

    def count_tasks(self) -> int: ...
    def add_task(self, *, title: str) -> Task: ...

    # Ordered most recent first.
    def list_tasks(self) -> list[Task]: ...

    # None when the id does not exist.
    def mark_done(self, task_id: int) -> Task | None: ...

    def close(self) -> None: ...
