"""
Play session lifecycle: create, look up by code, join, close and list.

A session starts ACTIVE and can be closed once by its creator. Anyone holding
the code can view it and join as a guest player while it is ACTIVE.
"""
import logging
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from courtside.core.errors import ValidationError, NotFoundError, ForbiddenError, GoneError, ConflictError
from courtside.core.utils import is_blank, utcnow
from courtside.models.group import Group
from courtside.models.session import PlaySession, GuestPlayer, SessionStatus
from courtside.schemas.session import SessionResponse, SessionParticipantResponse, PARTICIPANT_TYPE_GUEST
from courtside.services.code_generator import generate_unique_code

logger = logging.getLogger(__name__)


def code_exists(db: Session, code: str) -> bool:
    """Check whether a join code is already stored (exact match)."""
    return db.query(PlaySession.id).filter(PlaySession.code == code).first() is not None


def count_participants(db: Session, session_id: int) -> int:
    return db.query(func.count(GuestPlayer.id)).filter(
        GuestPlayer.session_id == session_id
    ).scalar() or 0


def to_session_response(db: Session, session: PlaySession, participant_count: Optional[int] = None) -> SessionResponse:
    """Build the public view of a session, resolving the group name if the group still exists."""
    group_name = None
    if session.group_id is not None:
        group_name = db.query(Group.name).filter(Group.id == session.group_id).scalar()

    if participant_count is None:
        participant_count = count_participants(db, session.id)

    return SessionResponse(
        id=session.id,
        code=session.code,
        name=session.name,
        group_id=session.group_id,
        group_name=group_name,
        status=session.status,
        created_at=session.created_at,
        participant_count=participant_count,
    )


def lookup_session(db: Session, code: str) -> Optional[PlaySession]:
    """Case-insensitive lookup; codes are stored upper-case."""
    if is_blank(code):
        return None
    return db.query(PlaySession).filter(PlaySession.code == code.upper()).first()


def find_session_by_code(db: Session, code: str) -> PlaySession:
    session = lookup_session(db, code)
    if not session:
        raise NotFoundError("Session not found")
    return session


def create_session(db: Session, name: Optional[str], group_id: Optional[int], creator_id: int) -> SessionResponse:
    """
    Create an ACTIVE session with a fresh join code.

    Raises:
        ValidationError: if the name is blank
        ExhaustionError: if no unused code could be generated
        ConflictError: if another session took the same code first (retryable)
    """
    if is_blank(name):
        raise ValidationError("Session name is required")

    code = generate_unique_code(lambda candidate: code_exists(db, candidate))
    session = PlaySession(
        code=code,
        name=name.strip(),
        group_id=group_id,
        created_by_id=creator_id,
        status=SessionStatus.ACTIVE,
        created_at=utcnow(),
    )
    db.add(session)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning(f"Join code {code} was taken by a concurrent session")
        raise ConflictError("Session code already in use, please try again")
    db.refresh(session)

    logger.info(f"Session {session.id} created with code {session.code} by user {creator_id}")
    return to_session_response(db, session, participant_count=0)


def get_session_by_code(db: Session, code: str) -> SessionResponse:
    session = find_session_by_code(db, code)
    return to_session_response(db, session)


def join_session(db: Session, code: str, player_name: Optional[str]) -> SessionParticipantResponse:
    """
    Add a guest player to an ACTIVE session.

    A closed session is reported as gone even when the name is also invalid.

    Raises:
        GoneError: if the session is closed
        ValidationError: if the player name is blank
        NotFoundError: if no session has this code
    """
    session = lookup_session(db, code)
    if session is not None and session.is_closed:
        raise GoneError("This session is closed")
    if is_blank(player_name):
        raise ValidationError("Player name is required")
    if session is None:
        raise NotFoundError("Session not found")

    guest = GuestPlayer(session_id=session.id, display_name=player_name.strip(), joined_at=utcnow())
    db.add(guest)
    db.commit()
    db.refresh(guest)

    logger.info(f"Guest player {guest.id} joined session {session.code}")
    return SessionParticipantResponse(id=guest.id, display_name=guest.display_name, type=PARTICIPANT_TYPE_GUEST)


def close_session(db: Session, code: str, requester_id: int) -> SessionResponse:
    """
    Close a session. Only the creator may do this; closing again is a no-op.

    Raises:
        NotFoundError: if no session has this code
        ForbiddenError: if the requester did not create the session
    """
    session = find_session_by_code(db, code)
    if session.created_by_id != requester_id:
        raise ForbiddenError("Only the session creator can close it")

    if not session.is_closed:
        session.status = SessionStatus.CLOSED
        db.commit()
        db.refresh(session)
        logger.info(f"Session {session.code} closed by user {requester_id}")

    return to_session_response(db, session)


def list_participants(db: Session, code: str) -> List[SessionParticipantResponse]:
    session = find_session_by_code(db, code)
    guests = db.query(GuestPlayer).filter(
        GuestPlayer.session_id == session.id
    ).order_by(GuestPlayer.joined_at.asc(), GuestPlayer.id.asc()).all()
    return [
        SessionParticipantResponse(id=g.id, display_name=g.display_name, type=PARTICIPANT_TYPE_GUEST)
        for g in guests
    ]


def _newest_first(query):
    return query.order_by(PlaySession.created_at.desc(), PlaySession.id.desc())


def list_my_sessions(db: Session, user_id: int) -> List[SessionResponse]:
    """Sessions created by the user, newest first."""
    sessions = _newest_first(db.query(PlaySession).filter(PlaySession.created_by_id == user_id)).all()
    return [to_session_response(db, s) for s in sessions]


def list_group_sessions(db: Session, group_id: int) -> List[SessionResponse]:
    """Sessions linked to a group, newest first."""
    sessions = _newest_first(db.query(PlaySession).filter(PlaySession.group_id == group_id)).all()
    return [to_session_response(db, s) for s in sessions]
