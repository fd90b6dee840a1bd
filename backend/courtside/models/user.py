"""
User models for authentication and group membership.

Users are a tagged variant discriminated by ``role``: a ``RegisteredUser``
has credentials and can log in, a ``GuestUser`` is just a display name that
can be added to groups and picked for matches.
"""
from sqlalchemy import Column, String, Enum as SQLEnum
from sqlalchemy.orm import relationship
from courtside.db.base import BaseModel
import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    USER = "USER"
    GUEST = "GUEST"


class User(BaseModel):
    """Anything that can be a group member."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=True, index=True)  # NULL for guests
    hashed_password = Column(String(255), nullable=True)  # NULL for guests
    name = Column(String(100), nullable=True)
    photo_url = Column(String(500), nullable=True)
    role = Column(SQLEnum(UserRole), nullable=False)

    # Relationships
    groups = relationship("Group", secondary="group_members", back_populates="members")

    __mapper_args__ = {"polymorphic_on": role}

    @property
    def is_guest(self) -> bool:
        return self.role == UserRole.GUEST

    @property
    def display_name(self) -> str:
        return self.name or self.email or ""


class RegisteredUser(User):
    """A user with an email and password."""
    __mapper_args__ = {"polymorphic_identity": UserRole.USER}


class GuestUser(User):
    """A name-only group member without credentials."""
    __mapper_args__ = {"polymorphic_identity": UserRole.GUEST}
