"""
Pydantic schemas for Group entity.
"""
from pydantic import BaseModel
from typing import Optional


class GroupCreate(BaseModel):
    """Schema for group creation. Blank names are rejected by the service."""
    name: Optional[str] = None


class GroupResponse(BaseModel):
    """Schema for group response."""
    id: int
    name: str
    created_by_id: Optional[int] = None

    class Config:
        from_attributes = True


class AddMemberRequest(BaseModel):
    """Schema for adding a registered user by email."""
    email: Optional[str] = None


class AddGuestRequest(BaseModel):
    """Schema for adding a name-only guest member."""
    display_name: Optional[str] = None


class GroupMemberResponse(BaseModel):
    """Schema for group member response."""
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    photo_url: Optional[str] = None
    is_guest: bool

    class Config:
        from_attributes = True
