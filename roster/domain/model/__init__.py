"""Domain model entities for Roster."""

from roster.domain.model.user import CreateUser, User

__all__ = [
    "CreateUser",
    "User",
]
