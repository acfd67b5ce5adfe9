"""Global exception handlers for consistent error responses.

Design:
- RateLimitAppError -> 429 {"error": "Rate limit exceeded"}
- UpstreamAppError -> upstream status (or 500) {"error": <category>, "message": ...}
- Unexpected Exception -> generic 500 (safety net, details only in logs)
- All error bodies include request_id for correlation
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.errors import RateLimitAppError, UpstreamAppError
from app.core.logging import get_request_id

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


def _error_body(error: str, message: str | None = None) -> dict:
    body: dict = {"error": error}
    if message is not None:
        body["message"] = message
    body["request_id"] = get_request_id()
    return body


async def rate_limit_error_handler(request: Request, exc: RateLimitAppError) -> JSONResponse:
    """Reject a throttled request. No Retry-After is computed."""
    return JSONResponse(status_code=429, content=_error_body(exc.message))


async def upstream_error_handler(request: Request, exc: UpstreamAppError) -> JSONResponse:
    """Surface an upstream failure with the upstream status when known.

    The failure description is returned as-is so callers can see what the
    upstream reported.
    """
    logger.error(
        "upstream.failed",
        extra={
            "error_code": exc.code,
            "category": exc.category,
            "error_msg": exc.message,
            "upstream_status": exc.status_code,
            "request_path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.http_status,
        content=_error_body(exc.category, exc.message),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs the exception with its traceback while returning a generic message,
    so no implementation details reach the client.
    """
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
        },
    )

    return JSONResponse(
        status_code=500,
        content=_error_body(INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE),
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with the FastAPI app.

    Starlette resolves handlers by walking the exception's MRO, so the
    AppError subclasses win over the Exception fallback.
    """
    app.exception_handler(RateLimitAppError)(rate_limit_error_handler)
    app.exception_handler(UpstreamAppError)(upstream_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
