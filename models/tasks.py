"""
Task Scheduler - Task Store
The authoritative task collection, persisted as one JSON array in a flat file
"""

import asyncio
import json
import os
import tempfile
import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from constants import DEFAULT_CATEGORY, DEFAULT_DESCRIPTION, DEFAULT_PRIORITY
from errors import NotFoundError, StorageError
from logging_config import get_logger
from schemas.tasks import Task, TaskCreate, TaskUpdate

logger = get_logger(__name__)

# Backing file for the task collection
TASKS_FILE = os.getenv("TASKS_FILE", "data/tasks.json")

# Fields a patch may set to null; every other null in a patch is ignored
NULLABLE_FIELDS = {"due_date"}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_task_id() -> str:
    """Millisecond timestamp plus a random suffix: sortable and collision-resistant"""
    return f"{time.time_ns() // 1_000_000}-{uuid.uuid4().hex[:8]}"


class TaskStore:
    """
    JSON-file task store.

    Every mutation reads the whole file, changes the collection in memory
    and rewrites the whole file. Writes go through a temp file and an atomic
    rename, and an asyncio lock serializes read-modify-write cycles within
    the process.
    """

    def __init__(self, path: str = TASKS_FILE):
        self.path = path
        self._lock = asyncio.Lock()

    # ============ File Access ============

    def init_file(self) -> None:
        """Create the backing file as an empty array if it does not exist"""
        if os.path.exists(self.path):
            return
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        self._write_raw([])
        logger.info(f"Initialized tasks file: {self.path}")

    def read_tasks(self) -> List[Task]:
        """Load the full collection in insertion order"""
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read tasks file {self.path}: {e}")
            raise StorageError("read", self.path) from e

        if not isinstance(raw, list):
            logger.error(f"Tasks file {self.path} does not contain a JSON array")
            raise StorageError("read", self.path)
        try:
            return [Task.model_validate(item) for item in raw]
        except PydanticValidationError as e:
            logger.error(f"Tasks file {self.path} holds an invalid task record: {e}")
            raise StorageError("read", self.path) from e

    def write_tasks(self, tasks: List[Task]) -> None:
        """Rewrite the whole file with the given collection"""
        self._write_raw([task.model_dump(mode="json", by_alias=True) for task in tasks])

    def _write_raw(self, data: List[Dict[str, Any]]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tasks-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write tasks file {self.path}: {e}")
            raise StorageError("write", self.path) from e

    # ============ Operations ============
    # File I/O runs in a worker thread so the event loop stays free while the lock is held

    async def list_tasks(self) -> List[Task]:
        """Get all tasks"""
        return await asyncio.to_thread(self.read_tasks)

    async def get_task(self, task_id: str) -> Task:
        """Get a specific task"""
        for task in await asyncio.to_thread(self.read_tasks):
            if task.id == task_id:
                return task
        raise NotFoundError("Task", task_id)

    async def create_task(self, data: TaskCreate) -> Task:
        """Create a new task with server-assigned id and timestamps"""
        async with self._lock:
            tasks = await asyncio.to_thread(self.read_tasks)
            existing_ids = {task.id for task in tasks}

            task_id = generate_task_id()
            while task_id in existing_ids:
                task_id = generate_task_id()

            now = utc_now()
            task = Task(
                id=task_id,
                title=data.title or "",
                description=data.description or DEFAULT_DESCRIPTION,
                priority=data.priority or DEFAULT_PRIORITY,
                due_date=data.due_date,
                category=data.category or DEFAULT_CATEGORY,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            tasks.append(task)
            await asyncio.to_thread(self.write_tasks, tasks)

        logger.info(f"Created task {task.id}")
        return task

    async def update_task(self, task_id: str, patch: TaskUpdate) -> Task:
        """Shallow-merge the provided fields onto the stored task"""
        changes = {
            key: value
            for key, value in patch.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FIELDS
        }

        async with self._lock:
            tasks = await asyncio.to_thread(self.read_tasks)
            index = self._find_index(tasks, task_id)
            current = tasks[index]
            changes["updated_at"] = self._next_timestamp(current)
            tasks[index] = current.model_copy(update=changes)
            await asyncio.to_thread(self.write_tasks, tasks)

        logger.info(f"Updated task {task_id}: {sorted(k for k in changes if k != 'updated_at')}")
        return tasks[index]

    async def delete_task(self, task_id: str) -> None:
        """Remove a task permanently"""
        async with self._lock:
            tasks = await asyncio.to_thread(self.read_tasks)
            remaining = [task for task in tasks if task.id != task_id]
            if len(remaining) == len(tasks):
                raise NotFoundError("Task", task_id)
            await asyncio.to_thread(self.write_tasks, remaining)

        logger.info(f"Deleted task {task_id}")

    async def toggle_task(self, task_id: str) -> Task:
        """Flip the completion flag"""
        async with self._lock:
            tasks = await asyncio.to_thread(self.read_tasks)
            index = self._find_index(tasks, task_id)
            current = tasks[index]
            tasks[index] = current.model_copy(update={
                "completed": not current.completed,
                "updated_at": self._next_timestamp(current),
            })
            await asyncio.to_thread(self.write_tasks, tasks)

        logger.info(f"Toggled task {task_id} -> completed={tasks[index].completed}")
        return tasks[index]

    # ============ Helpers ============

    @staticmethod
    def _find_index(tasks: List[Task], task_id: str) -> int:
        for index, task in enumerate(tasks):
            if task.id == task_id:
                return index
        raise NotFoundError("Task", task_id)

    @staticmethod
    def _next_timestamp(task: Task) -> datetime:
        # updated_at must strictly increase, even within one clock tick
        now = utc_now()
        previous = task.updated_at
        if previous.tzinfo is None:
            previous = previous.replace(tzinfo=timezone.utc)
        floor = previous + timedelta(microseconds=1)
        return now if now >= floor else floor


_store: Optional[TaskStore] = None


def get_task_store() -> TaskStore:
    """Get or create the global task store"""
    global _store
    if _store is None:
        _store = TaskStore()
    return _store
