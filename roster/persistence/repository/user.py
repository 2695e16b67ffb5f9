"""SQL implementation of User repository."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator, Optional
from uuid import uuid4

import logfire
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from roster.domain.error import ConflictError, NotFoundError, StorageUnavailableError
from roster.domain.model import CreateUser, User
from roster.domain.repository import UserRepository
from roster.domain.value import UserId
from roster.persistence.database import get_session
from roster.persistence.mappers import (
    create_user_to_dict,
    row_to_user,
    user_to_update_dict,
)
from roster.persistence.tables import users_table


class SqlUserRepository(UserRepository):
    """SQLAlchemy implementation of UserRepository.

    Each operation borrows one session from the pool and releases it on
    every exit path. Email uniqueness is pre-checked for a clear error and
    backed by the ``uq_users_email`` unique index; the two are not wrapped
    in a serializable transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session(self, email: Optional[str] = None) -> AsyncIterator[AsyncSession]:
        """Open a unit of work and translate driver failures.

        Args:
            email: Email being written, reported if the unique index trips
        """
        try:
            async with get_session(self.session_factory) as session:
                yield session
        except IntegrityError as e:
            logfire.warn("Unique constraint rejected write", email=email)
            raise ConflictError("User", "email", email or "") from e
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "User store unavailable", error=str(e), error_type=type(e).__name__
            )
            raise StorageUnavailableError(f"User store unavailable: {e}") from e

    async def _find_by_id(
        self, session: AsyncSession, user_id: UserId
    ) -> Optional[User]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def _find_by_email(self, session: AsyncSession, email: str) -> Optional[User]:
        stmt = select(users_table).where(users_table.c.email == email)
        result = await session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def get_all(self) -> list[User]:
        """Get all users.

        No ordering is imposed.
        """
        with logfire.span("user_repository.get_all"):
            async with self._session() as session:
                result = await session.execute(select(users_table))
                users = [row_to_user(dict(row)) for row in result.mappings().all()]
            logfire.info("Returning {count} users", count=len(users))
            return users

    async def get_by_id(self, user_id: UserId) -> User:
        """Get a user by ID.

        Args:
            user_id: User ID to look up

        Returns:
            The user

        Raises:
            NotFoundError: If no row has this ID
        """
        with logfire.span("user_repository.get_by_id", user_id=str(user_id)):
            async with self._session() as session:
                user = await self._find_by_id(session, user_id)
            if user is None:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_by_email(self, email: str) -> User:
        """Get a user by their email.

        Args:
            email: Email to search for

        Returns:
            The user

        Raises:
            NotFoundError: If no row has this email
        """
        with logfire.span("user_repository.get_by_email", email=email):
            async with self._session() as session:
                user = await self._find_by_email(session, email)
            if user is None:
                logfire.info("User with email not found", email=email)
                raise NotFoundError("User", email)
            return user

    async def create(self, user: CreateUser) -> User:
        """Insert a user and return the stored row.

        Args:
            user: Creation payload

        Returns:
            The created user as read back from the database

        Raises:
            ConflictError: If the email is already in use
        """
        with logfire.span("user_repository.create", email=user.email):
            async with self._session(email=user.email) as session:
                if await self._find_by_email(session, user.email) is not None:
                    logfire.warn("User email already in use", email=user.email)
                    raise ConflictError("User", "email", user.email)

                values = create_user_to_dict(
                    user, UserId(uuid4()), datetime.now(timezone.utc)
                )
                stmt = users_table.insert().values(**values).returning(users_table)
                result = await session.execute(stmt)
                created = row_to_user(dict(result.mappings().one()))

            logfire.info("User created", user_id=str(created.id))
            return created

    async def update(self, user: User) -> User:
        """Replace a user's mutable fields and return the stored row.

        Args:
            user: Full user, identified by its ID

        Returns:
            The updated user as read back from the database

        Raises:
            NotFoundError: If no row has this ID
            ConflictError: If another row holds the email
        """
        with logfire.span("user_repository.update", user_id=str(user.id)):
            async with self._session(email=user.email) as session:
                if await self._find_by_id(session, user.id) is None:
                    logfire.warn("User does not exist", user_id=str(user.id))
                    raise NotFoundError("User", str(user.id))

                holder = await self._find_by_email(session, user.email)
                if holder is not None and holder.id != user.id:
                    logfire.warn("User email already in use", email=user.email)
                    raise ConflictError("User", "email", user.email)

                stmt = (
                    users_table.update()
                    .where(users_table.c.id == user.id)
                    .values(**user_to_update_dict(user, datetime.now(timezone.utc)))
                    .returning(users_table)
                )
                result = await session.execute(stmt)
                row = result.mappings().one_or_none()
                # Deleted after the existence check
                if row is None:
                    logfire.warn("User does not exist", user_id=str(user.id))
                    raise NotFoundError("User", str(user.id))
                updated = row_to_user(dict(row))

            logfire.info("User updated", user_id=str(updated.id))
            return updated

    async def delete(self, user_id: UserId) -> UserId:
        """Delete a user. Unknown IDs are not an error.

        Args:
            user_id: User ID to delete

        Returns:
            The given ID
        """
        with logfire.span("user_repository.delete", user_id=str(user_id)):
            async with self._session() as session:
                stmt = (
                    users_table.delete()
                    .where(users_table.c.id == user_id)
                    .returning(users_table.c.id)
                )
                result = await session.execute(stmt)
                removed = len(result.all())

            if removed:
                logfire.info("User deleted", user_id=str(user_id))
            else:
                logfire.info("User already absent", user_id=str(user_id))
            return user_id
