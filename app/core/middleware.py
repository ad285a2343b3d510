"""
Request logging middleware.

Logs one line per request with method, path, status and elapsed time.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request handled by the application."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        target = request.url.path
        if request.url.query:
            target = f"{target}?{request.url.query}"

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {target} → {response.status_code} ({elapsed_ms:.1f}ms)")
        return response
