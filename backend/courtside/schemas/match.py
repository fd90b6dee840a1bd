"""
Pydantic schemas for Match entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from courtside.models.match import MatchType


class MatchCreate(BaseModel):
    """Schema for match creation. Required fields are checked by the service."""
    group_id: Optional[int] = None
    match_type: Optional[str] = None
    team_one_user_ids: Optional[List[int]] = None
    team_two_user_ids: Optional[List[int]] = None
    team_one_score: Optional[int] = None
    team_two_score: Optional[int] = None


class MatchScoreUpdate(BaseModel):
    """Schema for overwriting a match score."""
    score: Optional[str] = None


class MatchPlayerResponse(BaseModel):
    """Schema for a player on a team."""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    is_guest: bool

    class Config:
        from_attributes = True


class MatchResponse(BaseModel):
    """Schema for match response."""
    id: int
    group_id: Optional[int] = None
    match_type: Optional[MatchType] = None
    team_one: List[MatchPlayerResponse] = []
    team_two: List[MatchPlayerResponse] = []
    score: Optional[str] = None
    match_date: datetime

    class Config:
        from_attributes = True
