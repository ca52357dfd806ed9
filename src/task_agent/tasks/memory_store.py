# src/task_agent/tasks/memory_store.py

from __future__ import annotations

import logging
import threading
from dataclasses import replace

from .task_models import Task, utc_now

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """
    Process-local task store (TASKAGENT_STORE=memory).

    Same API as TaskStore; contents are lost on restart.
    The counter and the record dict are guarded by one lock, so ids stay
    unique when handlers run in a thread pool.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._next_id = 1
        self._tasks: dict[int, Task] = {}
        logger.info("InMemoryTaskStore ready")

    def close(self) -> None:
        return

    def count_tasks(self) -> int:
        with self._lock:
            return len(self._tasks)

    def add_task(self, *, title: str) -> Task:
        if not title or not title.strip():
            raise ValueError("title is required")

        with self._lock:
            task = Task(id=self._next_id, title=title.strip(), done=False, created_at=utc_now())
            self._next_id += 1
            self._tasks[task.id] = task

        logger.debug("Task added id=%s title=%r", task.id, task.title)
        return task

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return sorted(self._tasks.values(), key=lambda t: t.id, reverse=True)

    def mark_done(self, task_id: int) -> Task | None:
        with self._lock:
            task = self._tasks.get(int(task_id))
            if task is None:
                return None
            if not task.done:
                task = replace(task, done=True)
                self._tasks[task.id] = task
        logger.debug("Task done id=%s", task_id)
        return task
