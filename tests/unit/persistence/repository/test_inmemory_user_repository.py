"""Unit tests for InMemoryUserRepository."""

import asyncio
from contextlib import asynccontextmanager

import pytest

from roster.domain.error import ConflictError, StorageUnavailableError
from roster.persistence.repository.inmemory import InMemoryUserRepository
from tests.harness import make_create_user


@asynccontextmanager
async def held_by_other_task(lock):
    """Hold `lock` from a separate task for the duration of the block."""
    acquired = asyncio.Event()
    release = asyncio.Event()

    async def _hold():
        async with lock:
            acquired.set()
            await release.wait()

    holder = asyncio.create_task(_hold())
    await acquired.wait()
    try:
        yield
    finally:
        release.set()
        await holder


class TestOrdering:
    """get_all keeps insertion order."""

    @pytest.mark.asyncio
    async def test_get_all_in_insertion_order(self):
        """Should list users in the order they were created."""
        # Arrange
        repo = InMemoryUserRepository()
        emails = ["c@example.com", "a@example.com", "b@example.com"]
        for email in emails:
            await repo.create(make_create_user(email=email))

        # Act
        users = await repo.get_all()

        # Assert
        assert [u.email for u in users] == emails

    @pytest.mark.asyncio
    async def test_updated_user_moves_to_end(self):
        """Should re-append a user when it is updated."""
        # Arrange
        repo = InMemoryUserRepository()
        first = await repo.create(make_create_user(email="first@example.com"))
        await repo.create(make_create_user(email="second@example.com"))

        # Act
        await repo.update(first.model_copy(update={"name": "Renamed"}))

        # Assert
        users = await repo.get_all()
        assert [u.email for u in users] == ["second@example.com", "first@example.com"]
        assert users[-1].name == "Renamed"

    @pytest.mark.asyncio
    async def test_get_all_returns_a_copy(self):
        """Should not expose the internal list."""
        repo = InMemoryUserRepository()
        await repo.create(make_create_user())

        users = await repo.get_all()
        users.clear()

        assert len(await repo.get_all()) == 1


class TestConcurrency:
    """Behaviour under concurrent access."""

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_same_email_admit_one(self):
        """Should let exactly one of several racing creates win."""
        # Arrange
        repo = InMemoryUserRepository()

        # Act
        results = await asyncio.gather(
            *(repo.create(make_create_user(name=f"racer {i}")) for i in range(10)),
            return_exceptions=True,
        )

        # Assert
        created = [r for r in results if not isinstance(r, Exception)]
        conflicts = [r for r in results if isinstance(r, ConflictError)]
        assert len(created) == 1
        assert len(conflicts) == 9
        assert len(await repo.get_all()) == 1

    @pytest.mark.asyncio
    async def test_concurrent_reads_proceed_together(self):
        """Should serve parallel readers while no writer holds the lock."""
        repo = InMemoryUserRepository()
        user = await repo.create(make_create_user())

        found = await asyncio.gather(*(repo.get_by_id(user.id) for _ in range(20)))

        assert all(u == user for u in found)

    @pytest.mark.asyncio
    async def test_reader_times_out_while_writer_holds_lock(self):
        """Should report the store unavailable when the lock is not granted."""
        # Arrange
        repo = InMemoryUserRepository(lock_timeout=0.05)

        # Act & Assert
        async with held_by_other_task(repo._lock.writer_lock):
            with pytest.raises(StorageUnavailableError):
                await repo.get_all()

    @pytest.mark.asyncio
    async def test_writer_times_out_while_reader_holds_lock(self):
        """Should not let a write through while a read is in progress."""
        repo = InMemoryUserRepository(lock_timeout=0.05)

        async with held_by_other_task(repo._lock.reader_lock):
            with pytest.raises(StorageUnavailableError):
                await repo.create(make_create_user())

        assert await repo.get_all() == []

    @pytest.mark.asyncio
    async def test_reader_queued_behind_timed_out_writer_is_served(self):
        """Should admit a waiting reader once the holding reader releases."""
        # Arrange
        repo = InMemoryUserRepository(lock_timeout=0.3)

        # Act
        async with held_by_other_task(repo._lock.reader_lock):
            writer = asyncio.create_task(repo.create(make_create_user()))
            await asyncio.sleep(0.1)
            reader = asyncio.create_task(repo.get_all())

            with pytest.raises(StorageUnavailableError):
                await writer

        # Assert
        assert await reader == []

    @pytest.mark.asyncio
    async def test_lock_usable_after_timeout(self):
        """Should recover once the blocking holder releases the lock."""
        repo = InMemoryUserRepository(lock_timeout=0.05)

        async with held_by_other_task(repo._lock.writer_lock):
            with pytest.raises(StorageUnavailableError):
                await repo.get_all()

        created = await repo.create(make_create_user())
        assert await repo.get_all() == [created]
