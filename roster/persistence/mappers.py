"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from roster.domain.model import CreateUser, User
from roster.domain.value import CustomData, UserId


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a timestamp read from the database to aware UTC.

    SQLite hands back naive values; they were written as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        email=row["email"],
        name=row["name"],
        birth_date=row["birth_date"],
        custom_data=CustomData.model_validate(row["custom_data"]),
        created_at=_as_utc(row["created_at"]),
        updated_at=_as_utc(row.get("updated_at")),
    )


def create_user_to_dict(
    user: CreateUser, user_id: UserId, created_at: datetime
) -> Dict[str, Any]:
    """Convert a creation payload to a database dict.

    Args:
        user: Creation payload
        user_id: Freshly generated ID
        created_at: Creation timestamp

    Returns:
        Dict suitable for database insertion
    """
    return {
        **user.model_dump(mode="python"),
        "id": user_id,
        "created_at": created_at,
        "updated_at": None,
    }


def user_to_update_dict(user: User, updated_at: datetime) -> Dict[str, Any]:
    """Convert the replaceable fields of a User to a database dict.

    ``id`` and ``created_at`` are never written by an update.

    Args:
        user: User domain model
        updated_at: Update timestamp

    Returns:
        Dict suitable for a database update
    """
    return {
        **user.model_dump(include={"email", "name", "birth_date", "custom_data"}),
        "updated_at": updated_at,
    }
