"""
Group membership management and permission checks.

Permission guards return a typed result instead of raising so callers (and
tests) can tell "allowed as creator" from "allowed as self". The service
functions turn a DENIED result into ForbiddenError.
"""
import enum
import logging
from typing import List, Optional
from sqlalchemy import func, insert, delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from courtside.core.errors import ValidationError, NotFoundError, ForbiddenError
from courtside.core.utils import is_blank
from courtside.models.group import Group, group_members
from courtside.models.match import Match
from courtside.models.user import User, RegisteredUser, GuestUser
from courtside.schemas.group import GroupResponse, GroupMemberResponse

logger = logging.getLogger(__name__)


class RemovalPermission(str, enum.Enum):
    """Outcome of checking whether a member may be removed."""
    ALLOWED_AS_CREATOR = "ALLOWED_AS_CREATOR"
    ALLOWED_AS_SELF = "ALLOWED_AS_SELF"
    DENIED = "DENIED"

    @property
    def allowed(self) -> bool:
        return self != RemovalPermission.DENIED


class GroupDeletePermission(str, enum.Enum):
    """Outcome of checking whether a group may be deleted."""
    ALLOWED_AS_CREATOR = "ALLOWED_AS_CREATOR"
    DENIED = "DENIED"

    @property
    def allowed(self) -> bool:
        return self != GroupDeletePermission.DENIED


def check_member_removal(group: Group, user_id: int, requester_id: int) -> RemovalPermission:
    """
    Only the group creator or the member themself can remove a member.

    The creator is always a member and cannot be removed; deleting the group
    is the way out.
    """
    if group.created_by_id is not None and user_id == group.created_by_id:
        return RemovalPermission.DENIED
    if group.created_by_id is not None and group.created_by_id == requester_id:
        return RemovalPermission.ALLOWED_AS_CREATOR
    if user_id == requester_id:
        return RemovalPermission.ALLOWED_AS_SELF
    return RemovalPermission.DENIED


def check_group_deletion(group: Group, requester_id: int) -> GroupDeletePermission:
    """Only the group creator can delete the group."""
    if group.created_by_id is not None and group.created_by_id == requester_id:
        return GroupDeletePermission.ALLOWED_AS_CREATOR
    return GroupDeletePermission.DENIED


def to_group_response(group: Group) -> GroupResponse:
    return GroupResponse(id=group.id, name=group.name, created_by_id=group.created_by_id)


def to_member_response(user: User) -> GroupMemberResponse:
    return GroupMemberResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        photo_url=user.photo_url,
        is_guest=user.is_guest,
    )


def _member_sort_key(user: User):
    # Registered members by email, then guests (no email) by name
    return (user.email is None, (user.email or user.display_name).lower())


def _insert_ignore(db: Session, table):
    """INSERT that is a no-op when the row already exists, or None if the dialect has no such form."""
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert(table).on_conflict_do_nothing()
    if dialect == "sqlite":
        return sqlite_insert(table).on_conflict_do_nothing()
    if dialect in ("mysql", "mariadb"):
        return insert(table).prefix_with("IGNORE")
    return None


def _insert_in_savepoint(db: Session, table, **values) -> bool:
    """Plain INSERT for dialects without insert-ignore. A duplicate only rolls back the savepoint."""
    try:
        with db.begin_nested():
            db.execute(insert(table).values(**values))
    except IntegrityError:
        logger.info(f"Duplicate row in {table.name} ignored: {values}")
        return False
    return True


def get_group(db: Session, group_id: int) -> Group:
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise NotFoundError("Group not found")
    return group


def _require_group_exists(db: Session, group_id: int) -> None:
    if db.query(Group.id).filter(Group.id == group_id).first() is None:
        raise NotFoundError("Group not found")


def add_membership(db: Session, group_id: int, user_id: int) -> bool:
    """
    Idempotently add a membership edge. Does not commit.

    Returns True if a new edge was written, False if it already existed.
    """
    existing = db.execute(
        select(group_members.c.user_id).where(
            group_members.c.group_id == group_id,
            group_members.c.user_id == user_id,
        )
    ).first()
    if existing:
        return False

    stmt = _insert_ignore(db, group_members)
    if stmt is None:
        return _insert_in_savepoint(db, group_members, group_id=group_id, user_id=user_id)

    result = db.execute(stmt.values(group_id=group_id, user_id=user_id))
    return bool(result.rowcount)


def create_group(db: Session, name: Optional[str], creator_id: int) -> GroupResponse:
    """Create a group and add the creator as its first member in one transaction."""
    if is_blank(name):
        raise ValidationError("Group name is required")

    group = Group(name=name.strip(), created_by_id=creator_id)
    db.add(group)
    db.flush()
    add_membership(db, group.id, creator_id)
    db.commit()
    db.refresh(group)

    logger.info(f"Group {group.id} '{group.name}' created by user {creator_id}")
    return to_group_response(group)


def list_my_groups(db: Session, user_id: int) -> List[GroupResponse]:
    """Groups the user belongs to, ordered by name."""
    groups = db.query(Group).join(
        group_members, group_members.c.group_id == Group.id
    ).filter(
        group_members.c.user_id == user_id
    ).order_by(Group.name.asc(), Group.id.asc()).all()
    return [to_group_response(g) for g in groups]


def get_members(db: Session, group_id: int) -> List[GroupMemberResponse]:
    group = get_group(db, group_id)
    return [to_member_response(u) for u in sorted(group.members, key=_member_sort_key)]


def add_member_by_email(db: Session, group_id: int, email: Optional[str]) -> GroupMemberResponse:
    """
    Add a registered user to a group by email (case-insensitive).

    Raises:
        ValidationError: if the email is blank
        NotFoundError: if the group or the user does not exist
    """
    if is_blank(email):
        raise ValidationError("Member email is required")

    _require_group_exists(db, group_id)

    user = db.query(RegisteredUser).filter(
        func.lower(RegisteredUser.email) == email.strip().lower()
    ).first()
    if not user:
        raise NotFoundError("No registered user found with that email")

    if add_membership(db, group_id, user.id):
        logger.info(f"User {user.id} added to group {group_id}")
    db.commit()
    return to_member_response(user)


def add_guest_member(db: Session, group_id: int, display_name: Optional[str]) -> GroupMemberResponse:
    """Create a name-only guest and add them to the group."""
    if is_blank(display_name):
        raise ValidationError("Display name is required")

    _require_group_exists(db, group_id)

    guest = GuestUser(name=display_name.strip())
    db.add(guest)
    db.flush()
    add_membership(db, group_id, guest.id)
    db.commit()
    db.refresh(guest)

    logger.info(f"Guest member {guest.id} added to group {group_id}")
    return to_member_response(guest)


def remove_member(db: Session, group_id: int, user_id: int, requester_id: int) -> RemovalPermission:
    """
    Remove a member. Removing someone who is not a member is a no-op.

    Raises:
        NotFoundError: if the group does not exist
        ForbiddenError: if the requester is neither the creator nor the member
    """
    group = get_group(db, group_id)
    permission = check_member_removal(group, user_id, requester_id)
    if not permission.allowed:
        raise ForbiddenError("Not allowed to remove this member")

    db.execute(
        delete(group_members).where(
            group_members.c.group_id == group_id,
            group_members.c.user_id == user_id,
        )
    )
    db.commit()

    logger.info(f"User {user_id} removed from group {group_id} ({permission.value})")
    return permission


def delete_group(db: Session, group_id: int, requester_id: int) -> None:
    """
    Delete a group and its memberships. Matches keep their history with no group.

    Raises:
        NotFoundError: if the group does not exist
        ForbiddenError: if the requester is not the creator
    """
    group = get_group(db, group_id)
    if not check_group_deletion(group, requester_id).allowed:
        raise ForbiddenError("Only the group creator can delete this group")

    db.query(Match).filter(Match.group_id == group_id).update(
        {Match.group_id: None}, synchronize_session=False
    )
    db.delete(group)
    db.commit()

    logger.info(f"Group {group_id} deleted by user {requester_id}")


def search_members(db: Session, group_id: int, query: Optional[str]) -> List[GroupMemberResponse]:
    """Case-insensitive substring search over member names and emails."""
    if is_blank(query):
        return []

    _require_group_exists(db, group_id)

    term = query.strip().lower()
    users = db.query(User).join(
        group_members, group_members.c.user_id == User.id
    ).filter(
        group_members.c.group_id == group_id,
        func.lower(func.coalesce(User.name, "")).contains(term, autoescape=True)
        | func.lower(func.coalesce(User.email, "")).contains(term, autoescape=True),
    ).all()
    return [to_member_response(u) for u in sorted(users, key=_member_sort_key)]
