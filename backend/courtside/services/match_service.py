"""
Match recording service.
"""
import logging
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session, selectinload
from courtside.core.errors import ValidationError, NotFoundError
from courtside.core.utils import utcnow
from courtside.models.group import Group
from courtside.models.match import Match, MatchType
from courtside.models.user import User

logger = logging.getLogger(__name__)


def _load_users(db: Session, user_ids: Sequence[int]) -> List[User]:
    """Load users keeping the submitted order; ids that do not resolve are dropped."""
    users = db.query(User).filter(User.id.in_(list(user_ids))).all()
    by_id = {u.id: u for u in users}
    return [by_id[uid] for uid in user_ids if uid in by_id]


def _parse_match_type(match_type) -> MatchType:
    if isinstance(match_type, MatchType):
        return match_type
    try:
        return MatchType(str(match_type).upper())
    except ValueError:
        raise ValidationError(f"Unknown match type: {match_type}")


def create_match(
    db: Session,
    group_id: Optional[int],
    match_type,
    team_one_ids: Optional[Sequence[int]],
    team_two_ids: Optional[Sequence[int]],
    team_one_score: Optional[int] = None,
    team_two_score: Optional[int] = None,
) -> Match:
    """
    Validate team composition against the group roster and record a match.

    Teams must have 1 player each for SINGLES and 2 for DOUBLES, no player may
    appear twice, and every player must currently be a member of the group.

    Raises:
        ValidationError: if a field is missing or the teams are invalid
        NotFoundError: if the group does not exist
    """
    if group_id is None or match_type is None or team_one_ids is None or team_two_ids is None:
        raise ValidationError("group_id, match_type, team_one_user_ids and team_two_user_ids are required")

    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise NotFoundError("Group not found")

    match_type = _parse_match_type(match_type)
    expected_team_size = match_type.team_size
    if len(team_one_ids) != expected_team_size or len(team_two_ids) != expected_team_size:
        raise ValidationError(f"Invalid team size for {match_type.value.lower()}")

    unique_player_ids = set(team_one_ids) | set(team_two_ids)
    if len(unique_player_ids) != expected_team_size * 2:
        raise ValidationError("Each player must be unique in a match")

    if not all(group.has_member(player_id) for player_id in unique_player_ids):
        raise ValidationError("All selected users must be members of the group")

    team_one = _load_users(db, team_one_ids)
    team_two = _load_users(db, team_two_ids)
    if len(team_one) != expected_team_size or len(team_two) != expected_team_size:
        raise ValidationError("One or more selected users were not found")

    match = Match(
        group_id=group.id,
        match_type=match_type,
        team_one=team_one,
        team_two=team_two,
        match_date=utcnow(),
    )
    if team_one_score is not None and team_two_score is not None:
        match.score = f"{team_one_score}-{team_two_score}"

    db.add(match)
    db.commit()
    db.refresh(match)

    logger.info(f"Match {match.id} ({match_type.value}) recorded for group {group.id}, score {match.score}")
    return match


def get_match(db: Session, match_id: int) -> Match:
    match = db.query(Match).options(
        selectinload(Match.team_one),
        selectinload(Match.team_two),
    ).filter(Match.id == match_id).first()
    if not match:
        raise NotFoundError(f"Match not found with id: {match_id}")
    return match


def update_score(db: Session, match_id: int, score: Optional[str]) -> Match:
    """Overwrite the score as given. The format is not re-validated."""
    match = get_match(db, match_id)
    match.score = score
    db.commit()
    db.refresh(match)
    logger.info(f"Match {match_id} score set to {score}")
    return match


def list_matches(db: Session, group_id: Optional[int] = None) -> List[Match]:
    """All matches, newest first, optionally only those of one group."""
    query = db.query(Match).options(
        selectinload(Match.team_one),
        selectinload(Match.team_two),
    )
    if group_id is not None:
        query = query.filter(Match.group_id == group_id)
    return query.order_by(Match.match_date.desc(), Match.id.desc()).all()
