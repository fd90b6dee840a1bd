"""
Play session model for drop-in games joined by code.
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship, validates
from courtside.core.utils import utcnow
from courtside.db.base import BaseModel
import enum


class SessionStatus(str, enum.Enum):
    """Session status enumeration. ACTIVE -> CLOSED is the only transition."""
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class PlaySession(BaseModel):
    """A joinable session identified by a short public code, e.g. PCKL-7B2Q."""
    __tablename__ = "sessions"

    code = Column(String(12), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    group_id = Column(Integer, nullable=True, index=True)  # Not a FK: the group may be deleted later
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    status = Column(SQLEnum(SessionStatus), default=SessionStatus.ACTIVE, nullable=False)

    # Relationships
    guest_players = relationship(
        "GuestPlayer",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="GuestPlayer.joined_at",
    )

    @validates("code")
    def validate_code(self, key, value):
        if self.code is not None and value != self.code:
            raise ValueError("Session code cannot be changed")
        return value

    @property
    def is_closed(self) -> bool:
        return self.status == SessionStatus.CLOSED


class GuestPlayer(BaseModel):
    """Someone who joined a session by code without an account."""
    __tablename__ = "guest_players"

    session_id = Column(Integer, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    display_name = Column(String(100), nullable=False)
    joined_at = Column(DateTime, default=utcnow, nullable=False)

    # Relationships
    session = relationship("PlaySession", back_populates="guest_players")
