# src/task_agent/core/intents.py

"""
Intent router: turn a chat line into a structured command.

Rules are (pattern, builder) pairs tried in registration order; the first
match wins. Patterns are case-insensitive and matched against the whole
stripped input. Routing never raises: anything unmatched is Unknown.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import ClassVar

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class CreateTask:
    tag: ClassVar[str] = "create_task"
    # Verbatim capture; the service trims it.
    title: str


@dataclass(slots=True, frozen=True)
class ListTasks:
    tag: ClassVar[str] = "list_tasks"


@dataclass(slots=True, frozen=True)
class CompleteTask:
    tag: ClassVar[str] = "complete_task"
    task_id: int


@dataclass(slots=True, frozen=True)
class Unknown:
    tag: ClassVar[str] = "unknown"


Intent = CreateTask | ListTasks | CompleteTask | Unknown
IntentBuilder = Callable[[re.Match[str]], Intent]


class IntentRouter:
    """Ordered list of regex rules mapping text to intents."""

    def __init__(self) -> None:
        self._rules: list[tuple[re.Pattern[str], IntentBuilder]] = []

    def register(self, pattern: str, builder: IntentBuilder) -> None:
        self._rules.append((re.compile(pattern, re.IGNORECASE), builder))

    def route(self, message: object) -> Intent:
        if not isinstance(message, str):
            return Unknown()

        text = message.strip()
        for pattern, builder in self._rules:
            m = pattern.fullmatch(text)
            if m is None:
                continue
            intent = builder(m)
            logger.debug("Routed %r -> %s", text, intent)
            return intent

        return Unknown()

    def __len__(self) -> int:
        return len(self._rules)


# Ids are assigned from 1, so 0 never matches a stored task.
UNMATCHABLE_TASK_ID = 0


def _parse_task_id(digits: str) -> int:
    try:
        return int(digits)
    except ValueError:
        # Longer than the int string conversion limit.
        return UNMATCHABLE_TASK_ID


router = IntentRouter()

# "add task buy milk" | "create task buy milk"
router.register(r"(add|create)\s+task\s+(.+)", lambda m: CreateTask(title=m.group(2)))
# "todo buy milk"
router.register(r"todo\s+(.+)", lambda m: CreateTask(title=m.group(1)))
# "list tasks" | "show tasks"
router.register(r"(list|show)\s+tasks", lambda m: ListTasks())
# "complete 2" | "done 2"
router.register(
    r"(complete|done)\s+([0-9]+)",
    lambda m: CompleteTask(task_id=_parse_task_id(m.group(2))),
)


def route(message: object) -> Intent:
    return router.route(message)
