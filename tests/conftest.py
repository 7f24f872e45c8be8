"""
Task Scheduler Test Fixtures
Shared pytest fixtures for backend and client testing
"""

import os
import sys
import pytest

# Set test environment
os.environ["TESTING"] = "1"
os.environ["LOG_LEVEL"] = "WARNING"

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture
def tasks_file(tmp_path) -> str:
    """Path of the tasks file inside a per-test temporary directory"""
    path = tmp_path / "data" / "tasks.json"
    return str(path)


@pytest.fixture
def store(tasks_file):
    """Task store backed by a temporary file"""
    from models.tasks import TaskStore

    task_store = TaskStore(tasks_file)
    task_store.init_file()
    return task_store


@pytest.fixture
async def test_app(store):
    """FastAPI app wired to the temporary store"""
    from main import app
    from dependencies import get_store

    app.dependency_overrides[get_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app):
    """Create async test client"""
    from httpx import AsyncClient, ASGITransport

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def api_client(test_client):
    """TaskAPIClient talking to the in-process app"""
    from services.task_api import TaskAPIClient

    return TaskAPIClient(base_url="http://test/api", client=test_client)


@pytest.fixture
def sample_task() -> dict:
    """Return a sample create payload"""
    return {
        "title": "Buy milk",
        "description": "Two litres, semi-skimmed",
        "priority": "high",
        "dueDate": "2030-05-01",
        "category": "Shopping",
    }
