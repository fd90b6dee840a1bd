"""
User management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from courtside.db.session import get_db
from courtside.schemas.user import UserResponse, UserUpdate, PasswordChange
from courtside.models.user import User
from courtside.api.dependencies import get_current_user
from courtside.services import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user information."""
    return current_user


@router.put("/me", response_model=UserResponse)
async def update_current_user(
    profile: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update name and/or photo URL."""
    return user_service.update_profile(db, current_user, profile.name, profile.photo_url)


@router.put("/me/password")
async def change_password(
    passwords: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Change password (current password required)."""
    user_service.change_password(db, current_user, passwords.current_password, passwords.new_password)
    return {"message": "Password updated successfully"}


@router.get("/search", response_model=List[UserResponse])
async def search_users(
    query: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search registered users by name or email."""
    return user_service.search_users(db, query)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get user by ID."""
    user = user_service.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user
