from .core import HealthCheck
from .tasks import (
    Priority,
    Task,
    TaskCreate,
    TaskUpdate,
    TaskFormData,
    TaskStats,
    ErrorResponse,
)

__all__ = [
    "HealthCheck",
    "Priority",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFormData",
    "TaskStats",
    "ErrorResponse",
]
