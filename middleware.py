"""
HTTP middleware for Task Scheduler
Timing and security headers on every response
"""

import time
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from security_config import SECURITY_HEADERS


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Track request processing time and expose it as response headers"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Response-Time-Ms"] = f"{round(process_time * 1000, 2)}"

        # Task data changes on every mutation
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"

        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)

        return response
