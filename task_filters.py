"""
Task Scheduler - Task Filtering and Stats
Derived, read-only views over the local task collection
"""

from datetime import datetime, time, timezone
from typing import Callable, Iterable, List, Optional

from constants import FILTER_ALL, StatusFilters
from schemas.tasks import Task, TaskStats

TaskRule = Callable[[Task], bool]


class TaskFilter:
    """Keep tasks that pass every configured rule"""

    def __init__(self):
        self.rules: List[TaskRule] = []

    def add_rule(self, rule_func: TaskRule) -> "TaskFilter":
        """Add a filtering rule"""
        self.rules.append(rule_func)
        return self

    def matches(self, task: Task) -> bool:
        return all(rule(task) for rule in self.rules)

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        return [task for task in tasks if self.matches(task)]


# ============ Built-in Filter Rules ============

def search_rule(search_term: str) -> TaskRule:
    """Case-insensitive substring match on title, description or category"""
    needle = (search_term or "").lower()

    def rule(task: Task) -> bool:
        return (
            needle in task.title.lower()
            or needle in task.description.lower()
            or needle in task.category.lower()
        )
    return rule


def priority_rule(priority: str) -> TaskRule:
    """Exact priority match; "all" keeps everything"""
    def rule(task: Task) -> bool:
        return priority == FILTER_ALL or task.priority == priority
    return rule


def status_rule(status: str) -> TaskRule:
    """Completion status match: completed, pending or all"""
    def rule(task: Task) -> bool:
        if status == StatusFilters.COMPLETED:
            return task.completed
        if status == StatusFilters.PENDING:
            return not task.completed
        return status == StatusFilters.ALL
    return rule


def filter_tasks(
    tasks: Iterable[Task],
    search_term: str = "",
    priority: str = FILTER_ALL,
    status: str = StatusFilters.ALL,
) -> List[Task]:
    """Apply search, priority and status filters together"""
    task_filter = (
        TaskFilter()
        .add_rule(search_rule(search_term))
        .add_rule(priority_rule(priority))
        .add_rule(status_rule(status))
    )
    return task_filter.apply(tasks)


# ============ Stats ============

def due_datetime(task: Task) -> Optional[datetime]:
    """The due date as midnight UTC, or None when the task has no deadline"""
    if task.due_date is None:
        return None
    return datetime.combine(task.due_date, time.min, tzinfo=timezone.utc)


def is_overdue(task: Task, now: Optional[datetime] = None) -> bool:
    """Not completed and due before `now`"""
    if task.completed:
        return False
    due = due_datetime(task)
    if due is None:
        return False
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return due < now


def compute_stats(tasks: Iterable[Task], now: Optional[datetime] = None) -> TaskStats:
    """Total, completed, pending and overdue counts"""
    tasks = list(tasks)
    now = now or datetime.now(timezone.utc)
    completed = sum(1 for task in tasks if task.completed)
    return TaskStats(
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        overdue=sum(1 for task in tasks if is_overdue(task, now)),
    )
