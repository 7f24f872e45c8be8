"""
Task Scheduler Task Store Tests
Unit tests for the JSON file task store
"""

import asyncio
import json
import os
import pytest

from errors import NotFoundError, StorageError
from models.tasks import TaskStore, generate_task_id
from schemas.tasks import TaskCreate, TaskUpdate


class TestFileInitialization:
    """Tests for the backing file lifecycle"""

    def test_init_creates_empty_array(self, tmp_path):
        path = tmp_path / "nested" / "tasks.json"
        store = TaskStore(str(path))

        store.init_file()

        assert path.exists()
        assert json.loads(path.read_text()) == []

    def test_init_keeps_existing_file(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text('[{"id": "1", "title": "Keep me", "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-01-01T00:00:00Z"}]')
        store = TaskStore(str(path))

        store.init_file()

        assert [task.title for task in store.read_tasks()] == ["Keep me"]

    def test_missing_file_reads_as_empty(self, tmp_path):
        store = TaskStore(str(tmp_path / "absent.json"))
        assert store.read_tasks() == []

    def test_non_array_file_is_rejected(self, tmp_path):
        path = tmp_path / "tasks.json"
        path.write_text('{"tasks": []}')

        with pytest.raises(StorageError):
            TaskStore(str(path)).read_tasks()

    def test_write_leaves_no_temp_files(self, store):
        store.write_tasks([])
        leftovers = [name for name in os.listdir(os.path.dirname(store.path)) if name.startswith(".tasks-")]
        assert leftovers == []


class TestTaskIds:

    def test_ids_are_unique(self):
        ids = {generate_task_id() for _ in range(500)}
        assert len(ids) == 500

    def test_ids_start_with_timestamp(self):
        prefix = generate_task_id().split("-")[0]
        assert prefix.isdigit()


@pytest.mark.asyncio
class TestCreate:

    async def test_title_only_gets_defaults(self, store):
        task = await store.create_task(TaskCreate(title="Write report"))

        assert task.title == "Write report"
        assert task.description == ""
        assert task.priority == "medium"
        assert task.due_date is None
        assert task.category == "general"
        assert task.completed is False
        assert task.created_at == task.updated_at

    async def test_create_persists_camel_case(self, store):
        await store.create_task(TaskCreate(title="Plan trip", due_date="2030-01-02"))

        with open(store.path, encoding="utf-8") as f:
            raw = json.load(f)

        assert len(raw) == 1
        assert raw[0]["dueDate"] == "2030-01-02"
        assert "createdAt" in raw[0] and "updatedAt" in raw[0]

    async def test_list_preserves_insertion_order(self, store):
        for title in ("first", "second", "third"):
            await store.create_task(TaskCreate(title=title))

        assert [task.title for task in await store.list_tasks()] == ["first", "second", "third"]

    async def test_empty_strings_fall_back_to_defaults(self, store):
        task = await store.create_task(TaskCreate(title="x", category="", due_date=""))

        assert task.category == "general"
        assert task.due_date is None

    async def test_concurrent_creates_all_persist(self, store):
        created = await asyncio.gather(
            *(store.create_task(TaskCreate(title=f"task {i}")) for i in range(20))
        )

        stored = store.read_tasks()
        assert len(stored) == 20
        assert {task.id for task in stored} == {task.id for task in created}


@pytest.mark.asyncio
class TestUpdate:

    async def test_merges_only_provided_fields(self, store):
        created = await store.create_task(TaskCreate(title="Old", description="keep", priority="low"))

        updated = await store.update_task(created.id, TaskUpdate(title="New"))

        assert updated.title == "New"
        assert updated.description == "keep"
        assert updated.priority == "low"
        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

    async def test_null_clears_due_date_but_not_title(self, store):
        created = await store.create_task(TaskCreate(title="Dated", due_date="2030-01-01"))

        patch = TaskUpdate.model_validate({"dueDate": None, "title": None})
        updated = await store.update_task(created.id, patch)

        assert updated.due_date is None
        assert updated.title == "Dated"

    async def test_unknown_id_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.update_task("nope", TaskUpdate(title="x"))

    async def test_update_is_persisted(self, store):
        created = await store.create_task(TaskCreate(title="a"))
        await store.update_task(created.id, TaskUpdate(completed=True))

        reloaded = TaskStore(store.path)
        assert (await reloaded.get_task(created.id)).completed is True


@pytest.mark.asyncio
class TestToggleAndDelete:

    async def test_toggle_twice_restores_value(self, store):
        created = await store.create_task(TaskCreate(title="Flip"))

        once = await store.toggle_task(created.id)
        twice = await store.toggle_task(created.id)

        assert once.completed is True
        assert twice.completed is False
        assert created.updated_at < once.updated_at < twice.updated_at

    async def test_concurrent_toggles_are_serialized(self, store):
        created = await store.create_task(TaskCreate(title="Flip"))

        await asyncio.gather(*(store.toggle_task(created.id) for _ in range(7)))

        assert (await store.get_task(created.id)).completed is True

    async def test_toggle_unknown_id_raises(self, store):
        with pytest.raises(NotFoundError):
            await store.toggle_task("nope")

    async def test_delete_removes_task(self, store):
        keep = await store.create_task(TaskCreate(title="keep"))
        drop = await store.create_task(TaskCreate(title="drop"))

        await store.delete_task(drop.id)

        assert [task.id for task in await store.list_tasks()] == [keep.id]

    async def test_delete_unknown_id_keeps_collection(self, store):
        await store.create_task(TaskCreate(title="only"))

        with pytest.raises(NotFoundError):
            await store.delete_task("nope")

        assert len(await store.list_tasks()) == 1
