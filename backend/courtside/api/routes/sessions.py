"""
Play session routes. Lookup, join and participant listing are public:
the join code itself is the access token.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from courtside.db.session import get_db
from courtside.models.user import User
from courtside.schemas.session import (
    SessionCreate, SessionResponse,
    JoinSessionRequest, SessionParticipantResponse
)
from courtside.api.dependencies import get_current_user
from courtside.services import session_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    session_data: SessionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a new session with a fresh join code."""
    return session_service.create_session(db, session_data.name, session_data.group_id, current_user.id)


@router.get("/my", response_model=List[SessionResponse])
async def list_my_sessions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Sessions created by the current user."""
    return session_service.list_my_sessions(db, current_user.id)


@router.get("/by-group/{group_id}", response_model=List[SessionResponse])
async def list_group_sessions(
    group_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Sessions linked to a group."""
    return session_service.list_group_sessions(db, group_id)


@router.get("/{code}", response_model=SessionResponse)
async def get_session(code: str, db: Session = Depends(get_db)):
    """Get session details by join code."""
    return session_service.get_session_by_code(db, code)


@router.post("/{code}/join", response_model=SessionParticipantResponse, status_code=status.HTTP_201_CREATED)
async def join_session(
    code: str,
    request: JoinSessionRequest,
    db: Session = Depends(get_db)
):
    """Join a session by entering your name."""
    return session_service.join_session(db, code, request.player_name)


@router.get("/{code}/participants", response_model=List[SessionParticipantResponse])
async def list_participants(code: str, db: Session = Depends(get_db)):
    """All participants in the session."""
    return session_service.list_participants(db, code)


@router.put("/{code}/close", response_model=SessionResponse)
async def close_session(
    code: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Close the session (creator only)."""
    return session_service.close_session(db, code, current_user.id)
