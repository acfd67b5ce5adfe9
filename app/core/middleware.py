"""HTTP middleware for request ID propagation and access logging.

The middleware:
- Accepts the incoming X-Request-ID header or generates a UUID
- Stores request_id in contextvars so handler and client logs carry it
- Turns unhandled exceptions into the generic 500 body while the request id
  is still set, so that response also passes back through CORS
- Echoes request_id and total duration back in response headers
- Emits one ``request.completed`` log line per request

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from app.core.config import settings
from app.core.exception_handlers import general_exception_handler
from app.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Attach a correlation id to the request/response pair.

    If the client sends the configured request id header (``LOG_REQUEST_ID_HEADER``,
    default ``X-Request-ID``), that value is reused; otherwise a UUID4 is generated.

    Side Effects:
        - Sets request_id in contextvars for the lifetime of the request
        - Adds the request id and X-Request-Duration-ms headers to the response
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        try:
            response: Response = await call_next(request)
        except Exception as exc:
            response = await general_exception_handler(request, exc)

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request.completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
