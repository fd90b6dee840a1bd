"""
Match recording routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from courtside.db.session import get_db
from courtside.models.user import User
from courtside.schemas.match import MatchCreate, MatchResponse, MatchScoreUpdate
from courtside.api.dependencies import get_current_user
from courtside.services import match_service

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=List[MatchResponse])
async def list_matches(
    group_id: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List matches, newest first, optionally for one group."""
    return match_service.list_matches(db, group_id)


@router.post("", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
async def create_match(
    match_data: MatchCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Record a match between group members."""
    return match_service.create_match(
        db,
        group_id=match_data.group_id,
        match_type=match_data.match_type,
        team_one_ids=match_data.team_one_user_ids,
        team_two_ids=match_data.team_two_user_ids,
        team_one_score=match_data.team_one_score,
        team_two_score=match_data.team_two_score,
    )


@router.get("/{match_id}", response_model=MatchResponse)
async def get_match(
    match_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single match."""
    return match_service.get_match(db, match_id)


@router.put("/{match_id}", response_model=MatchResponse)
async def update_score(
    match_id: int,
    update: MatchScoreUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Overwrite a match score."""
    return match_service.update_score(db, match_id, update.score)
