"""
Task Scheduler - Models Package
"""

from .tasks import (
    TASKS_FILE,
    TaskStore,
    get_task_store,
    generate_task_id,
)

__all__ = [
    "TASKS_FILE",
    "TaskStore",
    "get_task_store",
    "generate_task_id",
]
