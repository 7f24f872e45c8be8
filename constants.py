"""
Task Scheduler Constants
Application-wide constants and configuration values
"""

# ============ Application Info ============

APP_NAME = "Task Scheduler"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Personal task scheduler with a JSON file backend"


# ============ Task Priorities ============

class Priorities:
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    ALL = [LOW, MEDIUM, HIGH]


# ============ List Filters ============

FILTER_ALL = "all"


class StatusFilters:
    ALL = FILTER_ALL
    PENDING = "pending"
    COMPLETED = "completed"

    CHOICES = [ALL, PENDING, COMPLETED]


# Values the priority filter accepts
PRIORITY_FILTERS = [FILTER_ALL] + Priorities.ALL


# ============ Request Lifecycle ============

class RequestStatus:
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


# ============ Task Defaults ============

DEFAULT_PRIORITY = Priorities.MEDIUM
DEFAULT_CATEGORY = "general"
DEFAULT_DESCRIPTION = ""


# ============ Client Messages ============

class ClientMessages:
    LOAD_FAILED = "Failed to load tasks. Please make sure the server is running."
    FETCH_FAILED = "Failed to fetch tasks"
    CREATE_FAILED = "Failed to create task"
    UPDATE_FAILED = "Failed to update task"
    DELETE_FAILED = "Failed to delete task"
    TOGGLE_FAILED = "Failed to toggle task"

    TITLE_REQUIRED = "Title is required"
    CATEGORY_REQUIRED = "Category is required"


# ============ Error Codes ============

class ErrorCodes:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    STORAGE_ERROR = "STORAGE_ERROR"
    REQUEST_FAILED = "REQUEST_FAILED"
    HTTP_ERROR = "HTTP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
