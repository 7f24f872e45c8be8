"""
Task Scheduler - Client State Controller
In-memory mirror of the server's task collection, plus the form and filter
state a task list UI renders from.

Local state only changes after the server confirms a mutation, so a failed
request leaves `tasks` exactly as it was and no rollback is needed.
"""

from typing import Dict, List, Optional

from constants import ClientMessages, FILTER_ALL, PRIORITY_FILTERS, RequestStatus, StatusFilters
from errors import TaskRequestError, ValidationError
from logging_config import get_logger
from schemas.tasks import Task, TaskFormData, TaskStats
from services.task_api import TaskAPIClient
from task_filters import compute_stats, filter_tasks
from validators import require_choice, require_valid_task_form

logger = get_logger(__name__)


def form_data_from_task(task: Optional[Task] = None) -> TaskFormData:
    """Pre-fill the task form; a blank form when creating"""
    if task is None:
        return TaskFormData()
    return TaskFormData(
        title=task.title,
        description=task.description,
        priority=task.priority,
        due_date=task.due_date.isoformat() if task.due_date else "",
        category=task.category,
    )


class TaskBoardState:
    """State container for the task list, passed by reference to view code"""

    def __init__(self, api: TaskAPIClient):
        self.api = api
        self.tasks: List[Task] = []
        self.status: str = RequestStatus.IDLE
        self.error: Optional[str] = None

        self.is_form_open: bool = False
        self.editing_task: Optional[Task] = None
        self.form_errors: Dict[str, str] = {}

        self.search_term: str = ""
        self._filter_priority: str = FILTER_ALL
        self._filter_status: str = StatusFilters.ALL

    # ============ Filter Inputs ============

    @property
    def filter_priority(self) -> str:
        return self._filter_priority

    @filter_priority.setter
    def filter_priority(self, value: str) -> None:
        self._filter_priority = require_choice("filter_priority", value, PRIORITY_FILTERS)

    @property
    def filter_status(self) -> str:
        return self._filter_status

    @filter_status.setter
    def filter_status(self, value: str) -> None:
        self._filter_status = require_choice("filter_status", value, StatusFilters.CHOICES)

    # ============ Derived Views ============

    @property
    def loading(self) -> bool:
        return self.status == RequestStatus.LOADING

    @property
    def filtered_tasks(self) -> List[Task]:
        return filter_tasks(self.tasks, self.search_term, self.filter_priority, self.filter_status)

    @property
    def stats(self) -> TaskStats:
        return compute_stats(self.tasks)

    def find_task(self, task_id: str) -> Optional[Task]:
        return next((task for task in self.tasks if task.id == task_id), None)

    # ============ Request Lifecycle ============

    def _start(self) -> None:
        self.status = RequestStatus.LOADING

    def _succeed(self) -> None:
        self.status = RequestStatus.SUCCESS
        self.error = None

    def _fail(self, message: str, exc: Exception, action: str) -> None:
        self.status = RequestStatus.ERROR
        self.error = message
        logger.error(f"Error {action}: {exc}")

    def dismiss_error(self) -> None:
        """Return to idle after the user has seen the error"""
        self.error = None
        self.status = RequestStatus.IDLE

    # ============ Server Operations ============

    async def load_tasks(self) -> bool:
        """Replace the local collection with the server's"""
        self._start()
        try:
            tasks = await self.api.get_tasks()
        except TaskRequestError as e:
            self._fail(ClientMessages.LOAD_FAILED, e, "loading tasks")
            return False
        self.tasks = tasks
        self._succeed()
        return True

    async def create_task(self, form: TaskFormData) -> Optional[Task]:
        self._start()
        try:
            task = await self.api.create_task(form)
        except TaskRequestError as e:
            self._fail(ClientMessages.CREATE_FAILED, e, "creating task")
            return None
        self.tasks = [task] + self.tasks
        self._close_form()
        self._succeed()
        return task

    async def update_task(self, task_id: str, form: TaskFormData) -> Optional[Task]:
        self._start()
        try:
            task = await self.api.update_task(task_id, form)
        except TaskRequestError as e:
            self._fail(ClientMessages.UPDATE_FAILED, e, "updating task")
            return None
        self._replace(task)
        self._close_form()
        self._succeed()
        return task

    async def toggle_task(self, task_id: str) -> Optional[Task]:
        if self.find_task(task_id) is None:
            return None
        self._start()
        try:
            task = await self.api.toggle_task(task_id)
        except TaskRequestError as e:
            self._fail(ClientMessages.UPDATE_FAILED, e, "toggling task")
            return None
        self._replace(task)
        self._succeed()
        return task

    async def delete_task(self, task_id: str) -> bool:
        self._start()
        try:
            await self.api.delete_task(task_id)
        except TaskRequestError as e:
            self._fail(ClientMessages.DELETE_FAILED, e, "deleting task")
            return False
        self.tasks = [task for task in self.tasks if task.id != task_id]
        self._succeed()
        return True

    def _replace(self, updated: Task) -> None:
        self.tasks = [updated if task.id == updated.id else task for task in self.tasks]

    # ============ Form Handling ============

    def open_form(self, task: Optional[Task] = None) -> TaskFormData:
        """Open the form for a new task, or for editing `task`"""
        self.editing_task = task
        self.form_errors = {}
        self.is_form_open = True
        return form_data_from_task(task)

    def cancel_form(self) -> None:
        self._close_form()

    def _close_form(self) -> None:
        self.is_form_open = False
        self.editing_task = None
        self.form_errors = {}

    async def submit_form(self, form: TaskFormData) -> Optional[Task]:
        """
        Validate and send the form: update when editing, create otherwise.
        An invalid form is never sent; its errors land in `form_errors`.
        """
        try:
            require_valid_task_form(form)
        except ValidationError as e:
            self.form_errors = e.details["errors"]
            return None
        self.form_errors = {}
        if self.editing_task is not None:
            return await self.update_task(self.editing_task.id, form)
        return await self.create_task(form)
