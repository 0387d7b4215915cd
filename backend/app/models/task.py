"""
Task model for per-user to-do items.
"""
from sqlalchemy import Column, String, Boolean, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.db.base import BaseModel


class Task(BaseModel):
    """To-do item owned by exactly one user."""
    __tablename__ = "tasks"
    
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    completed = Column(Boolean, default=False, nullable=False)
    
    # Relationships
    owner = relationship("User", back_populates="tasks")

    @property
    def owner_id(self) -> int:
        return self.user_id
