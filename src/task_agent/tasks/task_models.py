# src/task_agent/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601, millisecond precision, 'Z' suffix (2024-05-01T12:00:00.000Z)."""
    return ts.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str | None) -> datetime:
    if not raw:
        return datetime.fromtimestamp(0, UTC)
    ts = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    return ts


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single to-do item.

    Tasks are never deleted, and `done` only ever moves from False to True.
    Instances are snapshots; the store owns the records.
    """

    id: int
    title: str
    done: bool
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "done": self.done,
            "createdAt": format_timestamp(self.created_at),
        }
