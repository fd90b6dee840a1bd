"""
Pydantic schemas for play sessions.
"""
from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from courtside.models.session import SessionStatus

PARTICIPANT_TYPE_GUEST = "GUEST"


class SessionCreate(BaseModel):
    """Schema for session creation."""
    name: Optional[str] = None
    group_id: Optional[int] = None


class SessionResponse(BaseModel):
    """Schema for session response with live participant count."""
    id: int
    code: str
    name: str
    group_id: Optional[int] = None
    group_name: Optional[str] = None
    status: SessionStatus
    created_at: datetime
    participant_count: int = 0


class JoinSessionRequest(BaseModel):
    """Schema for joining a session by code."""
    player_name: Optional[str] = None


class SessionParticipantResponse(BaseModel):
    """Schema for a session participant."""
    id: int
    display_name: str
    type: str = PARTICIPANT_TYPE_GUEST  # GUEST; REGISTERED is reserved for account holders
