"""In-memory user repository.

Keeps users in insertion order behind a single reader/writer lock.
Used for tests and development; nothing survives a restart.
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator
from uuid import uuid4

import logfire
from aiorwlock import RWLock

from roster.domain.error import ConflictError, NotFoundError, StorageUnavailableError
from roster.domain.model.user import CreateUser, User
from roster.domain.repository.user import UserRepository
from roster.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository.

    Reads share the lock; writes hold it exclusively. The uniqueness check
    and the insert/replace it guards run under one write acquisition, so
    two concurrent creates with the same email cannot both succeed.
    """

    def __init__(self, lock_timeout: float = 5.0) -> None:
        self._users: list[User] = []
        self._lock = RWLock()
        self._lock_timeout = lock_timeout

    @asynccontextmanager
    async def _acquire(self, lock) -> AsyncIterator[None]:
        """Hold ``lock`` for the block, giving up after the lock timeout.

        Readers queued behind a writer that gives up stay queued until the
        current holders release, so they can time out as well.
        """
        try:
            async with asyncio.timeout(self._lock_timeout):
                await lock.acquire()
        except TimeoutError as e:
            logfire.error("User store lock timed out", timeout=self._lock_timeout)
            raise StorageUnavailableError("Could not lock the user store") from e
        try:
            yield
        finally:
            lock.release()

    def _find_by_id(self, user_id: UserId) -> User | None:
        return next((u for u in self._users if u.id == user_id), None)

    def _find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users if u.email == email), None)

    async def get_all(self) -> list[User]:
        """Get all users in insertion order."""
        async with self._acquire(self._lock.reader_lock):
            users = list(self._users)
        logfire.info("Returning {count} users", count=len(users))
        return users

    async def get_by_id(self, user_id: UserId) -> User:
        """Get a user by ID."""
        async with self._acquire(self._lock.reader_lock):
            user = self._find_by_id(user_id)
        if user is None:
            logfire.warn("User not found", user_id=str(user_id))
            raise NotFoundError("User", str(user_id))
        return user

    async def get_by_email(self, email: str) -> User:
        """Get a user by their email."""
        async with self._acquire(self._lock.reader_lock):
            user = self._find_by_email(email)
        if user is None:
            logfire.info("User with email not found", email=email)
            raise NotFoundError("User", email)
        return user

    async def create(self, user: CreateUser) -> User:
        """Create a user with a fresh ID and creation timestamp."""
        async with self._acquire(self._lock.writer_lock):
            if self._find_by_email(user.email) is not None:
                logfire.warn("User email already in use", email=user.email)
                raise ConflictError("User", "email", user.email)

            new_user = User(
                id=UserId(uuid4()),
                email=user.email,
                name=user.name,
                birth_date=user.birth_date,
                custom_data=user.custom_data,
                created_at=datetime.now(timezone.utc),
                updated_at=None,
            )
            self._users.append(new_user)

        logfire.info("User created", user_id=str(new_user.id))
        return new_user

    async def update(self, user: User) -> User:
        """Replace a user, keeping its creation timestamp.

        The old record is removed and the new one appended, so an updated
        user moves to the end of ``get_all``.
        """
        async with self._acquire(self._lock.writer_lock):
            existing = self._find_by_id(user.id)
            if existing is None:
                logfire.warn("User does not exist", user_id=str(user.id))
                raise NotFoundError("User", str(user.id))

            holder = self._find_by_email(user.email)
            if holder is not None and holder.id != user.id:
                logfire.warn("User email already in use", email=user.email)
                raise ConflictError("User", "email", user.email)

            updated_user = user.model_copy(
                update={
                    "created_at": existing.created_at,
                    "updated_at": datetime.now(timezone.utc),
                }
            )
            self._users = [u for u in self._users if u.id != user.id]
            self._users.append(updated_user)

        logfire.info("User updated", user_id=str(user.id))
        return updated_user

    async def delete(self, user_id: UserId) -> UserId:
        """Delete a user. Unknown IDs are ignored."""
        async with self._acquire(self._lock.writer_lock):
            before = len(self._users)
            self._users = [u for u in self._users if u.id != user_id]
            removed = before - len(self._users)

        logfire.info("User deleted", user_id=str(user_id), removed=removed)
        return user_id
