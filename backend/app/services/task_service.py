"""
Task service: per-user CRUD with ownership enforced on every mutation.
"""
import logging
from datetime import timedelta
from typing import Any, List, Optional
from app.core.errors import InvalidInput, NotFound
from app.core.utils import utcnow
from app.stores.base import TaskStore

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 255
TASK_NOT_FOUND = "Task not found"


def _clean_title(title: Optional[str]) -> str:
    if title is None or not isinstance(title, str) or not title.strip():
        raise InvalidInput("Task title is required")
    title = title.strip()
    if len(title) > TITLE_MAX_LENGTH:
        raise InvalidInput(f"Task title must be at most {TITLE_MAX_LENGTH} characters")
    return title


def _get_owned_task(store: TaskStore, user_id: int, task_id: int) -> Any:
    """
    Fetch a task the caller owns.

    A missing task and somebody else's task both raise the same NotFound,
    so callers cannot probe for other users' task ids.
    """
    task = store.get_task(task_id)
    if task is None or task.owner_id != user_id:
        raise NotFound(TASK_NOT_FOUND)
    return task


def list_tasks(store: TaskStore, user_id: int) -> List[Any]:
    """The caller's tasks, newest first."""
    return store.list_tasks(user_id)


def create_task(store: TaskStore, user_id: int, title: Optional[str]) -> Any:
    """Create a pending task owned by the caller."""
    task = store.add_task(user_id, _clean_title(title))
    logger.info("User %s created task %s", user_id, task.id)
    return task


def update_task(
    store: TaskStore,
    user_id: int,
    task_id: int,
    title: Optional[str] = None,
    completed: Optional[bool] = None
) -> Any:
    """Change title and/or completed. At least one must be given."""
    if title is None and completed is None:
        raise InvalidInput("No fields to update")
    if title is not None:
        title = _clean_title(title)

    task = _get_owned_task(store, user_id, task_id)

    # updated_at must move forward even when the clock has not
    now = utcnow()
    if now <= task.updated_at:
        now = task.updated_at + timedelta(microseconds=1)

    updated = store.update_task(user_id, task_id, updated_at=now, title=title, completed=completed)
    if updated is None:
        # Deleted between the ownership check and the write
        raise NotFound(TASK_NOT_FOUND)
    logger.info("User %s updated task %s", user_id, task_id)
    return updated


def delete_task(store: TaskStore, user_id: int, task_id: int) -> None:
    """Permanently remove one of the caller's tasks."""
    _get_owned_task(store, user_id, task_id)
    if not store.delete_task(user_id, task_id):
        raise NotFound(TASK_NOT_FOUND)
    logger.info("User %s deleted task %s", user_id, task_id)
