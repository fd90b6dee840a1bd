"""
Match model for recorded games.
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, ForeignKey, Integer, Table
from sqlalchemy.orm import relationship
from courtside.core.utils import utcnow
from courtside.db.base import Base, BaseModel
import enum


class MatchType(str, enum.Enum):
    """Match type enumeration."""
    SINGLES = "SINGLES"
    DOUBLES = "DOUBLES"

    @property
    def team_size(self) -> int:
        return 1 if self == MatchType.SINGLES else 2


match_team_one_players = Table(
    "match_team_one_players",
    Base.metadata,
    Column("match_id", Integer, ForeignKey("matches.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)

match_team_two_players = Table(
    "match_team_two_players",
    Base.metadata,
    Column("match_id", Integer, ForeignKey("matches.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id"), primary_key=True),
)


class Match(BaseModel):
    """Match model. Team rules are checked when the match is created."""
    __tablename__ = "matches"

    group_id = Column(Integer, ForeignKey("groups.id", ondelete="SET NULL"), nullable=True, index=True)
    match_type = Column(SQLEnum(MatchType), nullable=True)
    score = Column(String(50), nullable=True)  # "<teamOne>-<teamTwo>", free-form on update
    match_date = Column(DateTime, default=utcnow, nullable=False, index=True)

    # Relationships
    group = relationship("Group", back_populates="matches")
    team_one = relationship("User", secondary=match_team_one_players)
    team_two = relationship("User", secondary=match_team_two_players)
