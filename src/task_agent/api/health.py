"""Liveness and health endpoints."""

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Liveness message."""
    return "TaskAgent backend is alive ✅"


@router.get("/health")
async def health_check(request: Request) -> dict[str, str | int]:
    """Health check endpoint (touches the task store)."""
    store = request.app.state.agent_state.task_store
    total = await run_in_threadpool(store.count_tasks)
    return {"status": "healthy", "tasks": total}
