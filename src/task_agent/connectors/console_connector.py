# src/task_agent/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..core.agent import InvalidMessageError, handle_message
from ..core.intents import ListTasks
from ..core.state import AppState
from ..tasks.task_api import format_tasks

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState) -> None:
    """Interactive REPL over the same dispatcher the HTTP API uses."""
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a message (e.g. 'add task buy milk'). Use /exit to quit.\n")

    app_name = state.agent_name

    while True:
        try:
            user_input = input(">>> You: ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            result = handle_message(state, user_input)
        except InvalidMessageError as e:
            _print_ts(str(e))
            continue
        except Exception:
            logger.exception("Console message handler crashed.")
            _print_ts("Internal error while handling the message.")
            continue

        _print_ts(f"<<< {app_name}: {result.reply}")

        # list_tasks already put the listing in the reply text.
        if result.tasks is not None and result.intent != ListTasks.tag:
            print(format_tasks(result.tasks))
        print()

    logger.info("Console connector finished.")
