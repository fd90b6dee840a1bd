"""
Pydantic schemas for User entity.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from courtside.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for user registration. Fields are checked by the service."""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class UserLogin(BaseModel):
    """Schema for user login."""
    email: str
    password: str


class UserUpdate(BaseModel):
    """Schema for profile update. Email cannot be changed."""
    name: Optional[str] = None
    photo_url: Optional[str] = None


class PasswordChange(BaseModel):
    """Schema for password change."""
    current_password: Optional[str] = None
    new_password: Optional[str] = None


class UserResponse(BaseModel):
    """Schema for user profile response."""
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: UserRole
    created_at: datetime

    class Config:
        from_attributes = True


class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"
    user_id: int
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = None
    role: UserRole
