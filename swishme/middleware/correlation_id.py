"""
Correlation ID middleware for request tracing.

Slack retries and image unfurls arrive as unrelated HTTP calls; tagging every
log line with a per-request ID is what ties a failed unfurl back to its logs.
The ID comes from X-Correlation-ID when the caller sends one, otherwise a
UUID is generated. It is kept on request.state and in a contextvar, and
echoed on the response.
"""

import logging
import re
import uuid
from collections.abc import Callable
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

HEADER_CORRELATION_ID = "X-Correlation-ID"

_VALID_CORRELATION_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id(request: Request | None = None) -> str | None:
    """
    Get correlation ID for the current request.
    Prefers request.state, then contextvar. Returns None if neither set.
    """
    if request is not None:
        cid = getattr(request.state, "correlation_id", None)
        if cid:
            return cid
    return _correlation_id_var.get()


class CorrelationIdFilter(logging.Filter):
    """Logging filter that stamps records with the current correlation ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = _correlation_id_var.get() or "-"
        return True


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Sets correlation_id on every request and echoes it back."""

    async def dispatch(self, request: Request, call_next: Callable):
        incoming = (request.headers.get(HEADER_CORRELATION_ID) or "").strip()
        cid = incoming if _VALID_CORRELATION_ID.match(incoming) else str(uuid.uuid4())
        request.state.correlation_id = cid
        token = _correlation_id_var.set(cid)
        try:
            response = await call_next(request)
        finally:
            _correlation_id_var.reset(token)
        response.headers[HEADER_CORRELATION_ID] = cid
        return response
