"""
Exercise Tracker Backend — Request ID Middleware
=================================================

What:  Assigns an id to each request and echoes it as X-Request-ID.
Why:   Every failure is answered with the same status and a short
       "Error: ..." string, so the response alone rarely says what went
       wrong. The id ties that response to the server-side log lines that do.
How:   Reads or generates the id, stores it in a ContextVar and on
       request.state, and sets the response header on the way out.
When:  Outermost middleware: it runs before logging, CORS and error
       handling, so all of them can read the id.

Why a ContextVar:
    Requests run concurrently on one event loop thread, so a module global
    or threading.local would be shared between them. A ContextVar is copied
    into each task, and the exception handlers and the access logger read
    it without needing the Request object.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a correlation id to each request.

    Behavior:
        1. If the client sent X-Request-ID, reuse it so a caller can match
           its own logs against ours
        2. Otherwise generate one (first 8 hex chars of a UUID4)
        3. Store it in request_id_var and request.state.request_id
        4. Echo it in the X-Request-ID response header

    The header is exposed through CORS (see create_app), so browser clients
    can read it too.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers["X-Request-ID"] = rid
        return response
