"""Models package - Import all models for SQLAlchemy registration."""
from courtside.models.user import User, RegisteredUser, GuestUser, UserRole
from courtside.models.group import Group, group_members
from courtside.models.session import PlaySession, GuestPlayer, SessionStatus
from courtside.models.match import Match, MatchType, match_team_one_players, match_team_two_players

__all__ = [
    "User",
    "RegisteredUser",
    "GuestUser",
    "UserRole",
    "Group",
    "group_members",
    "PlaySession",
    "GuestPlayer",
    "SessionStatus",
    "Match",
    "MatchType",
    "match_team_one_players",
    "match_team_two_players",
]
