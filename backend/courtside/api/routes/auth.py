"""
Authentication routes for registration and login.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from courtside.db.session import get_db
from courtside.schemas.user import UserCreate, UserLogin, Token, UserResponse
from courtside.core.security import create_access_token
from courtside.services import user_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    return user_service.register_user(db, user_data.email, user_data.password, user_data.name)


@router.post("/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login and get JWT token."""
    user = user_service.authenticate(db, credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    access_token = create_access_token(
        data={"sub": user.email, "user_id": user.id, "role": user.role.value}
    )

    return Token(
        access_token=access_token,
        user_id=user.id,
        email=user.email,
        name=user.name,
        photo_url=user.photo_url,
        role=user.role,
    )
