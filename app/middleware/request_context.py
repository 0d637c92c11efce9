"""Request context middleware: a unique ID and an access log line per request.

Concurrent requests interleave their log lines on the one event loop.
Tagging every record with the request's ID makes them separable again:

  {"level": "ERROR", "message": "metrics serialization failed", "request_id": "abc"}
  {"level": "INFO", "message": "GET /metrics → 500 (0.8ms)", "request_id": "abc"}

The ID lives in a ContextVar rather than a thread-local: asyncio runs
many requests on the same thread, and each task gets its own copy of
the context.  The logging filter that reads it is installed by
app.core.logging.setup_logging.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a request ID, time the request and log its completion.

    The ID is taken from an incoming X-Request-ID header when present,
    otherwise a UUID4 is generated.  It is echoed on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(req_id)

        try:
            start = time.monotonic()
            response = await call_next(request)
            duration_ms = round((time.monotonic() - start) * 1000, 1)

            logger.info(
                "%s %s → %d (%.1fms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = req_id
        return response
