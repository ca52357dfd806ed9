# src/task_agent/core/agent.py

"""
Dispatcher: chat message -> intent -> task operation -> reply.

Connectors (HTTP, console) call handle_message() and only decide how to
present the AgentReply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..tasks.task_api import DONE_MARKER, complete_task, create_task, format_tasks, list_tasks
from ..tasks.task_models import Task
from .intents import CompleteTask, CreateTask, ListTasks, route
from .state import AppState

logger = logging.getLogger(__name__)

INVALID_MESSAGE_ERROR = "message must be a non-empty string"

HELP_TEXT = (
    "I can help with tasks. Try:\n"
    "- add task <title>\n"
    "- list tasks\n"
    "- complete <id>"
)


class InvalidMessageError(ValueError):
    """Inbound message is missing, not text, or blank."""

    def __init__(self, message: str = INVALID_MESSAGE_ERROR) -> None:
        super().__init__(message)


class ReplyOutcome(StrEnum):
    OK = "ok"
    NOT_FOUND = "not_found"


@dataclass(slots=True, frozen=True)
class AgentReply:
    agent: str
    intent: str
    reply: str
    # None means "no listing in this reply" (unknown intent, not found).
    tasks: list[Task] | None = None
    outcome: ReplyOutcome = ReplyOutcome.OK

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "agent": self.agent,
            "intent": self.intent,
            "reply": self.reply,
        }
        if self.tasks is not None:
            payload["tasks"] = [t.to_dict() for t in self.tasks]
        return payload


def handle_message(state: AppState, message: object) -> AgentReply:
    if not isinstance(message, str) or not message.strip():
        raise InvalidMessageError()

    intent = route(message)
    agent = state.agent_name
    logger.debug("Dispatching intent=%s", intent.tag)

    with state.lock:
        if isinstance(intent, CreateTask):
            task = create_task(state, intent.title)
            return AgentReply(
                agent=agent,
                intent=intent.tag,
                reply=f"Created task {DONE_MARKER}: [{task.id}] {task.title}",
                tasks=list_tasks(state),
            )

        if isinstance(intent, ListTasks):
            tasks = list_tasks(state)
            return AgentReply(agent=agent, intent=intent.tag, reply=format_tasks(tasks), tasks=tasks)

        if isinstance(intent, CompleteTask):
            updated = complete_task(state, intent.task_id)
            if updated is None:
                return AgentReply(
                    agent=agent,
                    intent=intent.tag,
                    reply=f"No task found with id {intent.task_id}",
                    outcome=ReplyOutcome.NOT_FOUND,
                )
            return AgentReply(
                agent=agent,
                intent=intent.tag,
                reply=f"Completed {DONE_MARKER}: [{updated.id}] {updated.title}",
                tasks=list_tasks(state),
            )

    return AgentReply(agent=agent, intent=intent.tag, reply=HELP_TEXT)
