from fastapi import APIRouter, Depends, Response, status
from typing import List, Optional
from schemas.tasks import ErrorResponse, Task, TaskCreate, TaskUpdate
from models.tasks import TaskStore
from dependencies import get_store

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Task not found"}}


@router.get("", response_model=List[Task])
async def list_tasks(store: TaskStore = Depends(get_store)):
    """Get all tasks in insertion order"""
    return await store.list_tasks()


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
async def create_new_task(
    task: Optional[TaskCreate] = None,
    store: TaskStore = Depends(get_store),
):
    """Create a task; missing fields (or a missing body) get server defaults"""
    return await store.create_task(task or TaskCreate())


@router.get("/{task_id}", response_model=Task, responses=NOT_FOUND)
async def get_existing_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Get a single task"""
    return await store.get_task(task_id)


@router.put("/{task_id}", response_model=Task, responses=NOT_FOUND)
async def update_existing_task(
    task_id: str,
    task: Optional[TaskUpdate] = None,
    store: TaskStore = Depends(get_store),
):
    """Merge the provided fields into a task; no body is an empty patch"""
    return await store.update_task(task_id, task or TaskUpdate())


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_existing_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Delete a task"""
    await store.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/toggle", response_model=Task, responses=NOT_FOUND)
async def toggle_existing_task(task_id: str, store: TaskStore = Depends(get_store)):
    """Flip a task's completion flag"""
    return await store.toggle_task(task_id)
