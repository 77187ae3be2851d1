"""Correlation IDs for HTTP requests and the log records they produce."""

from __future__ import annotations

import contextvars
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def get_correlation_id() -> str:
    """Return the current correlation ID, or empty string if unset."""
    return correlation_id_var.get()


class CorrelationIdFilter(logging.Filter):
    """Copies the current correlation ID onto every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Reads or generates ``X-Correlation-ID`` and echoes it on the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        cid = request.headers.get("x-correlation-id") or str(uuid.uuid4())
        token = correlation_id_var.set(cid)
        try:
            response = await call_next(request)
            logger.info(
                "%s %s -> %d", request.method, request.url.path, response.status_code
            )
        finally:
            correlation_id_var.reset(token)

        response.headers["X-Correlation-ID"] = cid
        return response
