"""SQLAlchemy table definitions for Roster.

Column types are dialect-neutral so the same schema runs on PostgreSQL
in production and SQLite in tests.
"""

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Index,
    MetaData,
    String,
    Table,
    Uuid,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("email", String(255), nullable=False),
    Column("name", String(255), nullable=False),
    Column("birth_date", Date, nullable=False),
    Column(
        "custom_data", JSON().with_variant(JSONB(), "postgresql"), nullable=False
    ),
    Column(
        "created_at",
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
    Column("updated_at", DateTime(timezone=True), nullable=True),
)

# Backstop for email uniqueness when concurrent writers race the pre-check
Index("uq_users_email", users_table.c.email, unique=True)
