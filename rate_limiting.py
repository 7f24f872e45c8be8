"""
Task Scheduler Rate Limiting Configuration
Default per-client limit applied to every API route
"""

import os
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from fastapi import Request
from fastapi.responses import JSONResponse

from constants import ErrorCodes


class RateLimits:
    """
    Rate limits, overridable via environment variables.
    """

    # General API endpoints
    API = os.getenv("RATE_LIMIT_API", "120/minute")

    # Disabled by default under the test suite
    ENABLED = os.getenv(
        "RATE_LIMIT_ENABLED",
        "0" if os.getenv("TESTING") == "1" else "1",
    ) == "1"


limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RateLimits.API],
    enabled=RateLimits.ENABLED,
)


# ============ Rate Limit Error Handler ============

async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Rate limit exceeded response in the standard error envelope"""
    retry_after = getattr(exc, "retry_after", 60)

    return JSONResponse(
        status_code=429,
        content={
            "error": f"Rate limit exceeded. Retry after {retry_after} seconds",
            "error_code": ErrorCodes.RATE_LIMIT_EXCEEDED,
            "details": {
                "retry_after": retry_after,
                "limit": str(exc.detail) if hasattr(exc, "detail") else None,
            },
        },
        headers={"Retry-After": str(retry_after)},
    )


def setup_rate_limiting(app):
    """
    Configure rate limiting for the FastAPI app.

    The limiter's default limits are enforced by SlowAPIMiddleware, so
    routes need no per-endpoint decorator.
    """
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
    app.add_middleware(SlowAPIMiddleware)
