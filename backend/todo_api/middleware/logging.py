"""
Todo API - Request Logging Middleware
======================================

What:  One access-log line per HTTP request.
How:   Measures the time from middleware entry to response return and logs
       the request line, status, response size and duration:

           GET /todo/1 200 27B 1.4ms [3f2a9c1e] from 127.0.0.1

       Level follows the status: 5xx ERROR, 4xx WARNING, everything else INFO.
       Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from todo_api.middleware.request_id import request_id_var

logger = logging.getLogger("todo_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, size and duration of each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        size = response.headers.get("content-length", "-")

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %sB %.1fms [%s] from %s",
            method,
            path,
            status,
            size,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
