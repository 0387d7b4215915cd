"""
Store interfaces used by the services.

Services depend on these Protocols only, so the SQL and in-memory
backends are interchangeable. Records returned by either backend expose
the same attributes (``id``, ``owner_id``, ``title`` ...), which is all
the services and response schemas rely on.
"""
from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Protocol

from app.core.utils import utcnow


@dataclass
class UserRecord:
    id: int
    username: str
    email: str
    hashed_password: str
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass
class TaskRecord:
    id: int
    owner_id: int
    title: str
    completed: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


class UserStore(Protocol):
    def add_user(self, username: str, email: str, hashed_password: str) -> Any:
        """Insert a user; raises DuplicateIdentity if username or email is taken."""
        ...

    def get_user(self, user_id: int) -> Optional[Any]: ...
    def get_user_by_email(self, email: str) -> Optional[Any]: ...

    def delete_user(self, user_id: int) -> bool:
        """Remove a user and every task it owns. False if there was no such user."""
        ...


class TaskStore(Protocol):
    def list_tasks(self, owner_id: int) -> list[Any]:
        """Tasks of one owner, newest first."""
        ...

    def get_task(self, task_id: int) -> Optional[Any]: ...
    def add_task(self, owner_id: int, title: str) -> Any: ...

    def update_task(
            self,
            owner_id: int,
            task_id: int,
            *,
            updated_at: datetime,
            title: Optional[str] = None,
            completed: Optional[bool] = None,
    ) -> Optional[Any]:
        """Apply the given fields to the owner's task. None if no such task."""
        ...

    def delete_task(self, owner_id: int, task_id: int) -> bool: ...


class Store(UserStore, TaskStore, Protocol):
    """Everything a request needs from persistence."""


class StoreProvider(Protocol):
    """Hands out a store per request and owns the backend's lifetime."""

    name: str

    def session(self) -> AbstractContextManager[Store]: ...
    def close(self) -> None: ...
