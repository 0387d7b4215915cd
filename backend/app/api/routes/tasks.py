"""
Task routes. Every operation is scoped to the authenticated user.
"""
from fastapi import APIRouter, Depends, status
from typing import List
from app.api.dependencies import get_current_user, get_store
from app.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from app.schemas.user import MessageResponse
from app.services import task_service
from app.stores.base import Store

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    current_user=Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Get all tasks of the current user, newest first."""
    tasks = task_service.list_tasks(store, current_user.id)
    return [TaskResponse.model_validate(task) for task in tasks]


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user=Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Create a new task."""
    task = task_service.create_task(store, current_user.id, task_data.title)
    return TaskResponse.model_validate(task)


@router.api_route("/{task_id}", methods=["PUT", "PATCH"], response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    current_user=Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Update title and/or completed status."""
    task = task_service.update_task(
        store,
        current_user.id,
        task_id,
        title=task_data.title,
        completed=task_data.completed
    )
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    current_user=Depends(get_current_user),
    store: Store = Depends(get_store)
):
    """Delete a task."""
    task_service.delete_task(store, current_user.id, task_id)
    return MessageResponse(message="Task deleted successfully")
