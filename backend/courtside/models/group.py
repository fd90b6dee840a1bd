"""
Group model for players who play together.
"""
from sqlalchemy import Column, String, ForeignKey, Integer, Table
from sqlalchemy.orm import relationship
from courtside.db.base import Base, BaseModel


group_members = Table(
    "group_members",
    Base.metadata,
    Column("group_id", Integer, ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Group(BaseModel):
    """Group model. The creator is always a member."""
    __tablename__ = "groups"

    name = Column(String(200), nullable=False)
    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Relationships
    members = relationship("User", secondary=group_members, back_populates="groups")
    matches = relationship("Match", back_populates="group", passive_deletes=True)

    def has_member(self, user_id: int) -> bool:
        return any(member.id == user_id for member in self.members)
