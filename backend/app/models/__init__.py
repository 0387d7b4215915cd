"""Models package - Import all models for SQLAlchemy registration."""
from app.models.user import User
from app.models.task import Task

__all__ = [
    "User",
    "Task",
]
