"""
Pydantic schemas for User entity and authentication.
"""
from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class UserBase(BaseModel):
    """Base user schema."""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    """Schema for user login. Email is not format-checked so every miss is a 401."""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserPublic(BaseModel):
    """User as embedded in auth responses."""
    id: int
    username: str
    email: str
    
    class Config:
        from_attributes = True


class UserResponse(UserPublic):
    """Schema for user response."""
    created_at: datetime


class AuthResponse(BaseModel):
    """Schema for register/login response."""
    message: str
    token: str
    token_type: str = "bearer"
    user: UserPublic


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
