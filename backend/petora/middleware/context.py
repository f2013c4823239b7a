"""
Petora Backend - Request Context Middleware
============================================

What:  Gives each request a correlation ID and writes one access-log line
       for it once the response is known.
How:   A single BaseHTTPMiddleware. The ID comes from the client's
       `X-Request-ID` header or the first 8 characters of a UUID4; it is kept
       in a ContextVar (read by loggers and exception handlers), on
       `request.state.request_id`, and echoed on the response.

Access line:
    GET /api/pets/{pet_id} 404 2.3ms [a1b2c3d4] user=- from 127.0.0.1
        │                  │          │             │
        │                  │          │             └── session id, when the
        │                  │          │                 access guard ran
        │                  │          └── request ID
        │                  └── 5xx → ERROR, 4xx → WARNING, else INFO
        └── matched route template, so pet ids do not fan out log keys

Quiet paths (no access line, ID still assigned):
    /health      probe traffic
    /uploads/*   static pet images, one hit per image on every listing page

Never logged: bodies, query strings, Authorization headers, passwords.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger("petora.access")

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def _session_user(request: Request) -> Optional[str]:
    claims = getattr(request.state, "user", None)
    if isinstance(claims, dict):
        return claims.get("id")
    return None


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Args:
        quiet_prefixes: Path prefixes served without an access line.
    """

    def __init__(self, app: ASGIApp, quiet_prefixes: Iterable[str] = ("/health",)):
        super().__init__(app)
        self.quiet_prefixes = tuple(quiet_prefixes)

    def _is_quiet(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.quiet_prefixes
        )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        start_time = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid

        if self._is_quiet(request.url.path):
            return response

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        # Route and state are only filled in once the handler has run
        route = _route_template(request)
        user_id = _session_user(request)
        client_ip = request.client.host if request.client else "unknown"

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            user_id or "-",
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "user_id": user_id,
                "client_ip": client_ip,
            },
        )
        return response
