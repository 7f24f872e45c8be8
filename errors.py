"""
Task Scheduler Error Handling Module
Structured error responses for API consistency
"""

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Optional, Dict, Any
import logging
import os

from constants import ErrorCodes

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API Error with structured response"""

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCodes.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class ValidationError(APIError):
    """Input validation failed"""
    def __init__(self, message: str, field: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if errors:
            details["errors"] = errors
        super().__init__(
            message=message,
            error_code=ErrorCodes.VALIDATION_ERROR,
            status_code=422,
            details=details,
        )


class NotFoundError(APIError):
    """Resource not found"""
    def __init__(self, resource: str = "Task", resource_id: Optional[str] = None):
        super().__init__(
            message=f"{resource} not found",
            error_code=ErrorCodes.NOT_FOUND,
            status_code=404,
            details={"resource": resource, "id": resource_id},
        )


class StorageError(APIError):
    """Reading or writing the tasks file failed"""
    def __init__(self, operation: str = "read", path: Optional[str] = None):
        super().__init__(
            message=f"Task storage {operation} failed",
            error_code=ErrorCodes.STORAGE_ERROR,
            status_code=500,
            details={"operation": operation, "path": path},
        )


class TaskRequestError(APIError):
    """
    Client-side failure talking to the task API.

    `status_code` is the HTTP status of the response, or 503 when the
    server could not be reached at all.
    """
    def __init__(
        self,
        message: str,
        status_code: int = 503,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code=ErrorCodes.REQUEST_FAILED,
            status_code=status_code,
            details=details,
        )


# Exception handlers for FastAPI
async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions"""
    logger.warning(
        f"API Error: {exc.error_code} - {exc.message}",
        extra={"extra_fields": {"path": request.url.path, "method": request.method}},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle FastAPI/Starlette HTTPException"""
    logger.warning(
        f"HTTP {exc.status_code} error: {exc.detail}",
        extra={"extra_fields": {"path": request.url.path, "method": request.method}},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "error_code": ErrorCodes.HTTP_ERROR,
            "details": {},
        },
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body/path validation failures"""
    errors = {
        ".".join(str(part) for part in err.get("loc", ())): err.get("msg", "")
        for err in exc.errors()
    }
    return JSONResponse(
        status_code=422,
        content=ValidationError("Invalid request payload", errors=errors).to_dict(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions"""
    error_id = id(exc)
    logger.exception(
        f"Unhandled exception [{error_id}]: {exc}",
        extra={"extra_fields": {"path": request.url.path, "method": request.method}},
    )

    details: Dict[str, Any] = {"error_id": error_id}
    # DEBUG_ERRORS=1 exposes the exception in the response body
    if os.getenv("DEBUG_ERRORS", "0") == "1":
        details["type"] = type(exc).__name__
        details["message"] = str(exc)

    return JSONResponse(
        status_code=500,
        content={
            "error": "An unexpected error occurred",
            "error_code": ErrorCodes.INTERNAL_ERROR,
            "details": details,
        },
    )


def register_error_handlers(app):
    """Register all error handlers with the FastAPI app"""
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
