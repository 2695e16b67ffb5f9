"""SQL repository implementations."""

from roster.persistence.repository.user import SqlUserRepository

__all__ = [
    "SqlUserRepository",
]
