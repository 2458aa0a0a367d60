"""
Exception handlers shared by the Slack and image endpoints.

Every SwishMeError is logged and returned as {"error": <message>} with the
error's status code. Anything else becomes a bare 500 so no internals leak.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from swishme.core.errors import SwishMeError
from swishme.middleware.correlation_id import get_correlation_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"


def error_response(status_code: int, error: str) -> JSONResponse:
    """Build JSONResponse for API errors: {"error": ...}."""
    return JSONResponse(status_code=status_code, content={"error": error})


async def swishme_error_handler(request: Request, exc: SwishMeError) -> JSONResponse:
    correlation_id = get_correlation_id(request)
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(
        level,
        f"{request.method} {request.url.path} failed with {exc.status_code}: "
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "correlation_id": correlation_id,
            "event_type": "request.failed",
        },
    )
    return error_response(exc.status_code, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"{request.method} {request.url.path} failed unexpectedly - "
        f"error_type={type(exc).__name__}: {str(exc)}",
        exc_info=exc,
        extra={
            "correlation_id": get_correlation_id(request),
            "event_type": "request.unhandled_error",
        },
    )
    return error_response(500, INTERNAL_ERROR_DETAIL)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SwishMeError, swishme_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
