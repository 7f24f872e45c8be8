"""
Shared FastAPI dependency helpers for Task Scheduler.

Routes resolve the task store through `get_store` so tests can swap in a
store backed by a temporary file via `app.dependency_overrides`.
"""

from models.tasks import TaskStore, get_task_store


def get_store() -> TaskStore:
    """Resolve the process-wide task store"""
    return get_task_store()
