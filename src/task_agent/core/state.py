# src/task_agent/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .ports import TaskRepo


@dataclass
class AppState:
    """Process-scoped state shared by connectors (HTTP, console)."""

    # Settings object (config.Settings or a compatible namespace in tests).
    settings: Any
    task_store: TaskRepo

    # Serializes store access for one dispatched message.
    lock: threading.Lock = field(default_factory=threading.Lock)

    @property
    def agent_name(self) -> str:
        return str(getattr(self.settings, "app_name", "TaskAgent"))
