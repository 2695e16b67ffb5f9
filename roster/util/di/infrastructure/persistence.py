"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from roster.config import MemorySettings, Settings
from roster.domain.error import StorageUnavailableError
from roster.domain.repository import UserRepository
from roster.persistence.database import (
    create_engine,
    create_session_factory,
    init_schema,
)
from roster.persistence.repository import SqlUserRepository
from roster.persistence.repository.inmemory import InMemoryUserRepository
from roster.util.di.base import ProviderBase
from roster.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using a SQL database."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine with the schema in place.

        The engine is disposed when the container closes.
        """
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        try:
            await init_schema(engine)
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Schema initialization failed", error=str(e))
            await engine.dispose()
            raise StorageUnavailableError(f"User store unavailable: {e}") from e
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_user_repository(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> UserRepository:
        """Provide User repository.

        Sessions are opened per operation, so one instance serves every request.
        """
        return SqlUserRepository(session_factory)


class InMemoryPersistenceProvider(PersistenceProvider):
    """Persistence provider backed by process memory.

    APP scope so every request sees the same users.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self, memory: MemorySettings) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository(lock_timeout=memory.lock_timeout)
