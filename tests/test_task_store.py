# tests/test_task_store.py

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from task_agent.tasks.memory_store import InMemoryTaskStore
from task_agent.tasks.task_store import TaskStore


@pytest.fixture(params=["sqlite", "memory"])
def store(request, tmp_path: Path):
    if request.param == "sqlite":
        return TaskStore(tmp_path / "tasks.sqlite3")
    return InMemoryTaskStore()


def test_add_list_and_mark_done(store) -> None:
    before = datetime.now(UTC) - timedelta(seconds=1)
    t1 = store.add_task(title="  write spec  ")
    t2 = store.add_task(title="ship it")

    assert t1.id > 0
    assert t2.id > t1.id
    assert t1.title == "write spec"
    assert t1.done is False
    assert t1.created_at >= before
    assert store.count_tasks() == 2

    assert [t.id for t in store.list_tasks()] == [t2.id, t1.id]

    done = store.mark_done(t1.id)
    assert done is not None
    assert done.done is True
    assert done.title == "write spec"
    assert done.created_at == t1.created_at

    assert [(t.id, t.done) for t in store.list_tasks()] == [(t2.id, False), (t1.id, True)]


def test_mark_done_is_idempotent(store) -> None:
    t = store.add_task(title="x")
    first = store.mark_done(t.id)
    second = store.mark_done(t.id)
    assert first is not None and second is not None
    assert first.done is True and second.done is True
    assert store.count_tasks() == 1


@pytest.mark.parametrize(
    "task_id",
    [0, 99, -1, 2**63 - 1, 2**63, 99999999999999999999, -(2**63) - 1, 10**400],
)
def test_missing_id_returns_none(store, task_id: int) -> None:
    store.add_task(title="only one")
    assert store.mark_done(task_id) is None
    assert [t.done for t in store.list_tasks()] == [False]


def test_blank_title_rejected(store) -> None:
    with pytest.raises(ValueError):
        store.add_task(title="   ")
    assert store.count_tasks() == 0


def test_sqlite_store_persists_across_instances(tmp_path: Path) -> None:
    db = tmp_path / "tasks.sqlite3"
    store = TaskStore(db)
    t = store.add_task(title="survive restart")
    store.mark_done(t.id)

    reopened = TaskStore(db)
    tasks = reopened.list_tasks()
    assert len(tasks) == 1
    assert tasks[0].title == "survive restart"
    assert tasks[0].done is True
    assert tasks[0].created_at == t.created_at

    # Ids keep increasing after a restart.
    assert reopened.add_task(title="next").id > t.id


def test_sqlite_store_migrates_missing_columns(tmp_path: Path) -> None:
    before = datetime.now(UTC) - timedelta(seconds=1)
    db = tmp_path / "legacy.sqlite3"
    conn = sqlite3.connect(db)
    conn.execute("CREATE TABLE tasks (id INTEGER PRIMARY KEY AUTOINCREMENT, title TEXT NOT NULL)")
    conn.execute("INSERT INTO tasks(title) VALUES ('old one')")
    conn.commit()
    conn.close()

    store = TaskStore(db)
    tasks = store.list_tasks()
    assert len(tasks) == 1
    assert tasks[0].title == "old one"
    assert tasks[0].done is False
    # Migrated rows get a real timestamp, not the epoch.
    assert tasks[0].created_at >= before


def test_task_to_dict_shape(store) -> None:
    t = store.add_task(title="json me")
    d = t.to_dict()
    assert set(d) == {"id", "title", "done", "createdAt"}
    assert d["id"] == t.id
    assert d["done"] is False
    assert d["createdAt"].endswith("Z")
    assert datetime.fromisoformat(d["createdAt"].replace("Z", "+00:00")) == t.created_at.replace(
        microsecond=t.created_at.microsecond // 1000 * 1000
    )
