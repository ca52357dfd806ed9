# tests/fakes.py

from __future__ import annotations

import sqlite3

from task_agent.tasks.task_models import Task


class BrokenTaskStore:
    """
    TaskRepo whose every operation fails like an unreachable database.
    Used to check that store failures surface as server errors.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _fail(self, op: str):
        self.calls.append(op)
        raise sqlite3.OperationalError("unable to open database file")

    def count_tasks(self) -> int:
        return self._fail("count_tasks")

    def add_task(self, *, title: str) -> Task:
        return self._fail("add_task")

    def list_tasks(self) -> list[Task]:
        return self._fail("list_tasks")

    def mark_done(self, task_id: int) -> Task | None:
        return self._fail("mark_done")

    def close(self) -> None:
        return
