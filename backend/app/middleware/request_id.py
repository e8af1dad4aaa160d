"""
Vidly Backend — Request ID Middleware
======================================

What:  Assigns a short id to each incoming request and echoes it back.
Why:   Every log line and every error body for one request carries the same
       id, so a client-reported error can be matched to server logs.
How:   Reads X-Request-ID if the client sent one, otherwise generates one;
       stores it in a ContextVar and in request.state; sets the response
       header.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 chars is enough for correlation and stays readable in logs
        rid = request.headers.get("X-Request-ID", str(uuid.uuid4())[:8])

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response
