# Middleware package init
"""
Petora Backend - Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request Context] → [GZip] → [CORS] → Route Handler

    Request Context runs outermost so the request ID exists before any
    handler logs, and the access line sees the final status code.

Authentication is not middleware: admin-only routes declare the access
guard as a dependency (see petora.dependencies). The context middleware
only reads what the guard left on `request.state.user`.
"""

from petora.middleware.context import RequestContextMiddleware, request_id_var

__all__ = ["RequestContextMiddleware", "request_id_var"]
