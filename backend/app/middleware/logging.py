"""
Exercise Tracker Backend — Request Logging Middleware
======================================================

What:  One access log line per HTTP request: method, path, status, duration,
       request id, client address.
Why:   uvicorn.access is turned down to WARNING in setup_logging; this line
       replaces it and adds the request id and timing.
How:   Measures from middleware entry to the moment the response is ready.
       The log level follows the status code.

Log levels:
    5xx  ERROR     should not happen, since UnexpectedErrorMiddleware answers 400
    4xx  WARNING   every client or database failure (all of them are 400)
    else INFO

Not logged:
    - /health, which load balancers poll every few seconds
    - Request and response bodies, which may carry user data

The structured fields are also passed as `extra`, so a JSON formatter can
pick them up without parsing the message.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("exercise_tracker.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs structured information about each HTTP request and response.

    Runs inside RequestIDMiddleware, so request_id_var is already set when
    dispatch starts.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
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
