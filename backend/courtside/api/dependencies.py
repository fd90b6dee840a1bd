"""
Authentication dependencies for FastAPI routes.
"""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from courtside.core.security import decode_access_token
from courtside.db.session import get_db
from courtside.models.user import User
from courtside.services import user_service

security = HTTPBearer()


def _credentials_exception(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the authenticated user from the bearer token."""
    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise _credentials_exception("Invalid authentication token")

    user_id = payload.get("user_id")
    if user_id is None:
        raise _credentials_exception("Invalid token payload")

    user = user_service.get_user_by_id(db, user_id)
    if user is None or user.is_guest:
        raise _credentials_exception("User not found")

    return user
