"""
User account service: registration, authentication and profile management.
"""
import logging
from typing import List, Optional
from email_validator import validate_email, EmailNotValidError
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from courtside.core.config import settings
from courtside.core.errors import ValidationError, ConflictError
from courtside.core.security import get_password_hash, verify_password
from courtside.core.utils import is_blank
from courtside.models.user import User, RegisteredUser

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[RegisteredUser]:
    return db.query(RegisteredUser).filter(
        func.lower(RegisteredUser.email) == _normalize_email(email)
    ).first()


def register_user(db: Session, email: Optional[str], password: Optional[str], name: Optional[str] = None) -> RegisteredUser:
    """
    Register a new account.

    Raises:
        ValidationError: if email or password is missing, the email is malformed,
            or the password is too short
        ConflictError: if the email is already registered
    """
    if is_blank(email) or is_blank(password):
        raise ValidationError("Email and password are required")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters")

    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError(f"Invalid email address: {e}")

    if get_user_by_email(db, email):
        raise ConflictError("Email already in use")

    user = RegisteredUser(
        email=_normalize_email(email),
        hashed_password=get_password_hash(password),
        name=name.strip() if name and name.strip() else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Email already in use")
    db.refresh(user)

    logger.info(f"User {user.id} registered")
    return user


def authenticate(db: Session, email: str, password: str) -> Optional[RegisteredUser]:
    """Return the user if the credentials match. Guests have no credentials and never match."""
    if is_blank(email) or not password:
        return None
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def update_profile(db: Session, user: User, name: Optional[str], photo_url: Optional[str]) -> User:
    """Update name and photo URL. The email is immutable."""
    user.name = name.strip() if name is not None else None
    user.photo_url = photo_url.strip() if photo_url is not None else None
    db.commit()
    db.refresh(user)
    return user


def change_password(db: Session, user: User, current_password: Optional[str], new_password: Optional[str]) -> None:
    """
    Change the password after checking the current one.

    Raises:
        ValidationError: if a field is missing, the current password is wrong,
            or the new password is too short
    """
    if current_password is None or is_blank(new_password):
        raise ValidationError("Current and new password are required")
    if not verify_password(current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    if len(new_password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(f"New password must be at least {settings.MIN_PASSWORD_LENGTH} characters")

    user.hashed_password = get_password_hash(new_password)
    db.commit()
    logger.info(f"User {user.id} changed password")


def search_users(db: Session, query: Optional[str]) -> List[RegisteredUser]:
    """Registered users whose name or email contains the query, ordered by name."""
    if is_blank(query):
        return []
    term = query.strip().lower()
    return db.query(RegisteredUser).filter(
        func.lower(func.coalesce(RegisteredUser.name, "")).contains(term, autoescape=True)
        | func.lower(RegisteredUser.email).contains(term, autoescape=True)
    ).order_by(RegisteredUser.name.asc(), RegisteredUser.id.asc()).all()
