"""
Exercise Tracker Backend — Unexpected Error Middleware
=======================================================

What:  Last line of defence: any exception no handler claimed becomes the
       usual 400 "Error: An unexpected error occurred".
Why:   FastAPI routes handlers registered for `Exception` to Starlette's
       ServerErrorMiddleware, which sits outside every user middleware.
       Its response would skip CORS and X-Request-ID, and the exception
       would still be re-raised to the server.
How:   A BaseHTTPMiddleware added first, so it is the innermost one. The
       response it builds travels back out through CORS, logging and
       request id like any other response.

Handled exceptions never reach this point: ExerciseTrackerError and
RequestValidationError are answered by the handlers in main.py, which run
inside the routing layer.
"""

import logging

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR = "An unexpected error occurred"


def error_response(message: str) -> JSONResponse:
    """The single failure shape: HTTP 400 with the JSON string "Error: <message>"."""
    return JSONResponse(status_code=400, content=f"Error: {message}")


class UnexpectedErrorMiddleware(BaseHTTPMiddleware):
    """
    Converts unhandled exceptions into the standard error response.

    The traceback is logged with the request id; the client only sees the
    generic message, never exception text.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            rid = request_id_var.get("")
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=exc,
            )
            return error_response(UNEXPECTED_ERROR)
