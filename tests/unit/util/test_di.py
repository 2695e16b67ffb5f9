"""Unit tests for provider selection and the worker counter."""

import pytest

from roster.domain.repository import UserRepository
from roster.persistence.repository import SqlUserRepository
from roster.persistence.repository.inmemory import InMemoryUserRepository
from roster.util.di import (
    InMemoryPersistenceProvider,
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    get_provider,
)
from roster.util.di.container import create_container, in_memory_components
from roster.util.worker import next_worker_id, reset_worker_counter
from tests.di import build_test_container, make_test_settings


class TestGetProvider:
    """Tests for get_provider()."""

    def test_concrete_provider_returned_as_is(self):
        """Should return providers without implementations unchanged."""
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_selects_sql_persistence(self):
        """Should pick the SQL provider for production."""
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider

    def test_selects_in_memory_persistence(self):
        """Should pick the in-memory provider when asked."""
        assert (
            get_provider(PersistenceProvider, use_mock=True)
            is InMemoryPersistenceProvider
        )

    def test_storage_setting_drives_selection(self):
        """Should serve persistence from memory only for memory storage."""
        assert in_memory_components(make_test_settings(storage="memory")) == {
            "persistence"
        }
        assert in_memory_components(make_test_settings(storage="sql")) == set()

    def test_unknown_component_rejected(self):
        """Should refuse to unmock components that do not exist."""
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"cache"})  # type: ignore[arg-type]


class TestContainer:
    """Tests for create_container()."""

    @pytest.mark.asyncio
    async def test_memory_storage_shares_one_repository(self):
        """Should bind one in-memory repository for the whole app."""
        container = create_container(make_test_settings(storage="memory"))
        try:
            async with container() as first:
                repo_a = await first.get(UserRepository)
            async with container() as second:
                repo_b = await second.get(UserRepository)
        finally:
            await container.close()

        assert isinstance(repo_a, InMemoryUserRepository)
        assert repo_a is repo_b

    @pytest.mark.asyncio
    async def test_sql_storage_binds_sql_repository(self):
        """Should bind the SQL repository for sql storage."""
        container = create_container(make_test_settings(storage="sql"))
        try:
            repo = await container.get(UserRepository)
        finally:
            await container.close()

        assert isinstance(repo, SqlUserRepository)


class TestWorkerCounter:
    """Tests for worker numbering."""

    def test_numbers_increase_from_reset(self):
        """Should hand out consecutive numbers after a reset."""
        reset_worker_counter()

        assert [next_worker_id() for _ in range(3)] == [1, 2, 3]

    def test_reset_restarts_numbering(self):
        """Should restart from the given value."""
        next_worker_id()
        reset_worker_counter(start=10)

        assert next_worker_id() == 10
