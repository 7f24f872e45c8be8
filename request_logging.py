"""
Task Scheduler Request Logging Middleware
One log line per request and per response, tagged with a short request id
"""

import time
import uuid
import logging
from typing import Callable, List, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger("task_scheduler.requests")

DEFAULT_EXCLUDE_PATHS = [
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
]


def get_client_ip(request: Request) -> str:
    """Client IP, preferring the first X-Forwarded-For hop"""
    forwarded_for = request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
    if forwarded_for:
        return forwarded_for
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log HTTP requests and responses with timing information.

    The request id is stored on `request.state.request_id` and echoed back
    in the `X-Request-ID` response header.
    """

    def __init__(self, app: ASGIApp, exclude_paths: Optional[List[str]] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths if exclude_paths is not None else DEFAULT_EXCLUDE_PATHS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(path) for path in self.exclude_paths):
            return await call_next(request)

        request_id = uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        client_ip = get_client_ip(request)
        start_time = time.perf_counter()

        logger.info(
            f"[{request_id}] --> {request.method} {request.url.path} from {client_ip}",
            extra={"extra_fields": {"request_id": request_id, "method": request.method, "path": request.url.path}},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.exception(f"[{request_id}] !!! Error after {duration_ms:.1f}ms: {e}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        log_level = logging.INFO
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING

        logger.log(
            log_level,
            f"[{request_id}] <-- {response.status_code} ({duration_ms:.1f}ms)",
            extra={"extra_fields": {"request_id": request_id, "status": response.status_code, "duration_ms": round(duration_ms, 1)}},
        )

        response.headers["X-Request-ID"] = request_id
        return response


def setup_request_logging(app, exclude_paths: Optional[List[str]] = None):
    """Configure request logging middleware for the app"""
    app.add_middleware(RequestLoggingMiddleware, exclude_paths=exclude_paths)
