"""Chat endpoint: one message in, one agent reply out."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from ..core.agent import InvalidMessageError, ReplyOutcome, handle_message
from ..core.state import AppState

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_state(request: Request) -> AppState:
    return request.app.state.agent_state


async def _read_message(request: Request) -> Any:
    """Return body["message"], or None if the body is not a JSON object."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(body, dict):
        return None
    return body.get("message")


@router.post("/api/chat")
async def chat(request: Request) -> JSONResponse:
    """Route the message to a task operation and return the reply."""
    state = _get_state(request)
    message = await _read_message(request)

    try:
        result = await run_in_threadpool(handle_message, state, message)
    except InvalidMessageError as exc:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})

    status_code = (
        status.HTTP_404_NOT_FOUND
        if result.outcome is ReplyOutcome.NOT_FOUND
        else status.HTTP_200_OK
    )
    return JSONResponse(status_code=status_code, content=result.to_payload())
