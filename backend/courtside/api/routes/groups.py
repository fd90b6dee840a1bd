"""
Group management routes.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from courtside.db.session import get_db
from courtside.models.user import User
from courtside.schemas.group import (
    GroupCreate, GroupResponse, GroupMemberResponse,
    AddMemberRequest, AddGuestRequest
)
from courtside.api.dependencies import get_current_user
from courtside.services import group_service

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new group with the current user as first member."""
    return group_service.create_group(db, group_data.name, current_user.id)


@router.get("/my", response_model=List[GroupResponse])
async def list_my_groups(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List groups the current user belongs to."""
    return group_service.list_my_groups(db, current_user.id)


@router.delete("/{group_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_group(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a group (creator only)."""
    group_service.delete_group(db, group_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{group_id}/add-member", response_model=GroupMemberResponse)
async def add_member(
    group_id: int,
    request: AddMemberRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a registered user to the group by email."""
    return group_service.add_member_by_email(db, group_id, request.email)


@router.post("/{group_id}/add-guest", response_model=GroupMemberResponse, status_code=status.HTTP_201_CREATED)
async def add_guest(
    group_id: int,
    request: AddGuestRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Add a guest player (name only, no registration) to the group."""
    return group_service.add_guest_member(db, group_id, request.display_name)


@router.delete("/{group_id}/members/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_member(
    group_id: int,
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Remove a member (group creator, or the member themself)."""
    group_service.remove_member(db, group_id, user_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{group_id}/members", response_model=List[GroupMemberResponse])
async def get_members(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List group members sorted by email."""
    return group_service.get_members(db, group_id)


@router.get("/{group_id}/search-members", response_model=List[GroupMemberResponse])
async def search_members(
    group_id: int,
    query: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search group members by name or email."""
    return group_service.search_members(db, group_id, query)
