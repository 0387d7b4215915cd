"""
Pydantic schemas for Task entity.
"""
from pydantic import BaseModel, StrictBool
from typing import Optional
from datetime import datetime


class TaskCreate(BaseModel):
    """Schema for task creation. Blank titles are rejected by the service."""
    title: Optional[str] = None


class TaskUpdate(BaseModel):
    """Schema for task update. Omitted (or null) fields are left unchanged."""
    title: Optional[str] = None
    completed: Optional[StrictBool] = None


class TaskResponse(BaseModel):
    """Schema for task response."""
    id: int
    title: str
    completed: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
