# src/task_agent/cli/main.py

"""
CLI entrypoint.

Initializes logging, then starts one connector:
- `serve`   : HTTP API via uvicorn (default),
- `console` : interactive REPL in the main thread.

Usage:
    task-agent                      # serve on 0.0.0.0:3000 (or $PORT)
    task-agent serve --port 8080
    task-agent console
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ..api.app import create_app
from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="task-agent",
        description="Chat-style task manager",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP API (default)")
    serve.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind to (default: {settings.host})",
    )
    serve.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to bind to (default: {settings.port})",
    )

    sub.add_parser("console", help="Chat with the agent in this terminal")
    return parser


def _run_serve(settings, host: str, port: int) -> None:
    app = create_app(settings=settings)
    logger.info("Server listening on %s:%s", host, port)
    # log_config=None keeps uvicorn on our root handlers.
    uvicorn.run(app, host=host, port=port, log_config=None)


def _run_console(settings) -> None:
    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        shutdown_state(state)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    args = _build_parser(settings).parse_args(argv)
    command = args.command or "serve"

    logger.info("Starting %s (%s)...", settings.app_name, command)

    if command == "console":
        _run_console(settings)
    else:
        _run_serve(
            settings,
            getattr(args, "host", settings.host),
            getattr(args, "port", settings.port),
        )

    logger.info("Bye.")


if __name__ == "__main__":
    main()
