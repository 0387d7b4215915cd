"""
Volatile in-process store.

Data lives in dicts keyed by id and is lost when the process exits. A
single re-entrant lock makes every method atomic, which covers the
uniqueness check at registration and check-then-mutate on tasks.
"""
from __future__ import annotations

import itertools
import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Iterator, Optional

from app.core.errors import DuplicateIdentity
from app.core.utils import utcnow
from app.stores.base import TaskRecord, UserRecord

logger = logging.getLogger(__name__)


class MemoryStore:
    """Users and tasks in process memory. Returns copies, never the stored objects."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[int, UserRecord] = {}
        self._tasks: dict[int, TaskRecord] = {}
        self._user_ids = itertools.count(1)
        self._task_ids = itertools.count(1)

    # ---- users ----

    def add_user(self, username: str, email: str, hashed_password: str) -> UserRecord:
        with self._lock:
            for existing in self._users.values():
                if existing.username == username:
                    raise DuplicateIdentity("Username already exists")
                if existing.email == email:
                    raise DuplicateIdentity("Email already exists")
            now = utcnow()
            user = UserRecord(
                id=next(self._user_ids),
                username=username,
                email=email,
                hashed_password=hashed_password,
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            return replace(user)

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return replace(user)
            return None

    def delete_user(self, user_id: int) -> bool:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
            owned = [task_id for task_id, task in self._tasks.items() if task.owner_id == user_id]
            for task_id in owned:
                del self._tasks[task_id]
            logger.debug("Removed user %s with %d task(s)", user_id, len(owned))
            return True

    # ---- tasks ----

    def list_tasks(self, owner_id: int) -> list[TaskRecord]:
        with self._lock:
            owned = [replace(t) for t in self._tasks.values() if t.owner_id == owner_id]
        owned.sort(key=lambda t: (t.created_at, t.id), reverse=True)
        return owned

    def get_task(self, task_id: int) -> Optional[TaskRecord]:
        with self._lock:
            task = self._tasks.get(task_id)
            return replace(task) if task else None

    def add_task(self, owner_id: int, title: str) -> TaskRecord:
        with self._lock:
            now = utcnow()
            task = TaskRecord(
                id=next(self._task_ids),
                owner_id=owner_id,
                title=title,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            self._tasks[task.id] = task
            return replace(task)

    def update_task(
            self,
            owner_id: int,
            task_id: int,
            *,
            updated_at: datetime,
            title: Optional[str] = None,
            completed: Optional[bool] = None,
    ) -> Optional[TaskRecord]:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None or task.owner_id != owner_id:
                return None
            if title is not None:
                task.title = title
            if completed is not None:
                task.completed = completed
            task.updated_at = updated_at
            return replace(task)

    def delete_task(self, owner_id: int, task_id: int) -> bool:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None or task.owner_id != owner_id:
                return False
            del self._tasks[task_id]
            return True


class MemoryStoreProvider:
    """Hands the same process-wide MemoryStore to every request."""

    name = "memory"

    def __init__(self) -> None:
        self.store = MemoryStore()

    @contextmanager
    def session(self) -> Iterator[MemoryStore]:
        yield self.store

    def close(self) -> None:
        return
