"""FastAPI application entry point."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..cli.bootstrap import create_initial_state, shutdown_state
from ..config import get_settings
from ..core.state import AppState
from . import chat, health

logger = logging.getLogger(__name__)


def create_app(state: AppState | None = None, *, settings=None) -> FastAPI:
    """
    Build the HTTP app.

    If `state` is given it is used as-is and left open on shutdown (the caller
    owns it). Otherwise a state is created at startup and closed at shutdown.
    """
    if settings is None:
        settings = state.settings if state is not None else get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned = state is None
        app.state.agent_state = create_initial_state(settings=settings) if owned else state
        logger.info("Starting %s HTTP API...", app.state.agent_state.agent_name)
        try:
            yield
        finally:
            logger.info("Shutting down %s HTTP API...", app.state.agent_state.agent_name)
            if owned:
                shutdown_state(app.state.agent_state)

    app = FastAPI(
        title="TaskAgent",
        description="Chat-style task manager",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(settings, "cors_origins", ["*"])),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(sqlite3.Error)
    async def store_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
        logger.exception("Task store failure on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "internal server error"},
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(chat.router, tags=["chat"])

    return app
