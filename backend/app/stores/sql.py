"""
Relational store backed by SQLAlchemy (MySQL, PostgreSQL or SQLite).
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, List, Optional
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.errors import DuplicateIdentity, StoreUnavailable
from app.core.utils import utcnow
from app.db.session import create_db_engine, create_session_factory, init_db
from app.models.task import Task
from app.models.user import User

logger = logging.getLogger(__name__)


class SQLStore:
    """Store operations on one database session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str):
        """Turn driver/connection failures into StoreUnavailable."""
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Database error during %s: %s", action, exc, exc_info=True)
            raise StoreUnavailable() from exc

    # Users

    def add_user(self, username: str, email: str, hashed_password: str) -> User:
        with self._guard("add_user"):
            if self.db.query(User.id).filter(User.username == username).first():
                raise DuplicateIdentity("Username already exists")
            if self.db.query(User.id).filter(User.email == email).first():
                raise DuplicateIdentity("Email already exists")

            now = utcnow()
            user = User(
                username=username,
                email=email,
                hashed_password=hashed_password,
                created_at=now,
                updated_at=now
            )
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError as exc:
                # Lost a race with a concurrent registration
                self.db.rollback()
                raise DuplicateIdentity() from exc
            return user

    def get_user(self, user_id: int) -> Optional[User]:
        with self._guard("get_user"):
            return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._guard("get_user_by_email"):
            return self.db.query(User).filter(User.email == email).first()

    def delete_user(self, user_id: int) -> bool:
        with self._guard("delete_user"):
            user = self.db.query(User).filter(User.id == user_id).first()
            if not user:
                return False
            # ORM cascade removes the user's tasks
            self.db.delete(user)
            self.db.commit()
            return True

    # Tasks

    def list_tasks(self, owner_id: int) -> List[Task]:
        with self._guard("list_tasks"):
            return (
                self.db.query(Task)
                .filter(Task.user_id == owner_id)
                .order_by(Task.created_at.desc(), Task.id.desc())
                .all()
            )

    def get_task(self, task_id: int) -> Optional[Task]:
        with self._guard("get_task"):
            return self.db.query(Task).filter(Task.id == task_id).first()

    def add_task(self, owner_id: int, title: str) -> Task:
        with self._guard("add_task"):
            now = utcnow()
            task = Task(
                user_id=owner_id,
                title=title,
                completed=False,
                created_at=now,
                updated_at=now
            )
            self.db.add(task)
            self.db.commit()
            return task

    def update_task(
        self,
        owner_id: int,
        task_id: int,
        *,
        updated_at: datetime,
        title: Optional[str] = None,
        completed: Optional[bool] = None
    ) -> Optional[Task]:
        with self._guard("update_task"):
            task = (
                self.db.query(Task)
                .filter(Task.id == task_id, Task.user_id == owner_id)
                .populate_existing()
                .with_for_update()
                .first()
            )
            if not task:
                self.db.rollback()
                return None
            if title is not None:
                task.title = title
            if completed is not None:
                task.completed = completed
            task.updated_at = updated_at
            self.db.commit()
            return task

    def delete_task(self, owner_id: int, task_id: int) -> bool:
        with self._guard("delete_task"):
            deleted = (
                self.db.query(Task)
                .filter(Task.id == task_id, Task.user_id == owner_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            return deleted > 0


class SQLStoreProvider:
    """Owns the engine; opens one session per request."""

    name = "sql"

    def __init__(self, database_url: str, echo: bool = False, auto_create: bool = True):
        self.engine = create_db_engine(database_url, echo=echo)
        self._session_factory = create_session_factory(self.engine)
        if auto_create:
            init_db(self.engine)

    @contextmanager
    def session(self) -> Iterator[SQLStore]:
        db = self._session_factory()
        try:
            yield SQLStore(db)
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()
