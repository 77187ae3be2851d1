"""Health and readiness endpoints for the HTTP transport."""

from __future__ import annotations

import os
import time

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from deck_mcp import __version__

SERVICE_NAME = "deck-mcp"
TOOL_NAMES = ["deck_create", "deck_read", "deck_update", "deck_delete", "deck_action"]

_start_time: float = 0.0
_ready: bool = False


def init_health() -> None:
    """Mark the server as ready and record the start time."""
    global _start_time, _ready
    _start_time = time.monotonic()
    _ready = True


async def health(request: Request) -> JSONResponse:
    """Liveness probe: always 200 while the process is running."""
    uptime = time.monotonic() - _start_time if _start_time else 0.0
    return JSONResponse(
        {
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": __version__,
            "nextcloud_url": os.environ.get("NEXTCLOUD_URL", ""),
            "tools": TOOL_NAMES,
            "uptime_seconds": round(uptime, 2),
        },
        status_code=200,
    )


async def ready(request: Request) -> JSONResponse:
    """Readiness probe: 200 only after :func:`init_health` has run."""
    if _ready:
        return JSONResponse({"status": "ready"}, status_code=200)
    return JSONResponse({"status": "not_ready"}, status_code=503)


health_routes: list[Route] = [
    Route("/health", health, methods=["GET"]),
    Route("/ready", ready, methods=["GET"]),
]
