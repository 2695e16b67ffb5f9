"""Core DI providers (not swappable)."""

from dishka import Scope, from_context, provide

from roster.config import MemorySettings, Settings
from roster.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Config provider - concrete, no alternatives needed.

    Settings are loaded once at startup and passed in as container context.
    """

    settings = from_context(provides=Settings, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def provide_memory_settings(self, settings: Settings) -> MemorySettings:
        """Provide in-memory storage settings."""
        return settings.memory
