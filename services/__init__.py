"""Task Scheduler Services Package"""

from .task_api import TaskAPIClient
from .task_state import TaskBoardState, form_data_from_task

__all__ = [
    'TaskAPIClient',
    'TaskBoardState',
    'form_data_from_task',
]
