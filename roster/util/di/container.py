"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from roster.config import Settings, load_settings
from roster.util.di import PROVIDERS, get_provider


def in_memory_components(settings: Settings) -> set[str]:
    """Components to serve from process memory for these settings."""
    return {"persistence"} if settings.storage == "memory" else set()


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the application container.

    The persistence component is bound to the in-memory or SQL repository
    according to ``settings.storage``.

    Args:
        settings: Application settings; loaded from environment when omitted

    Returns:
        Configured DI container
    """
    settings = settings or load_settings()
    in_memory = in_memory_components(settings)

    provider_instances = []
    for base in PROVIDERS:
        component_name = getattr(base, "__mock_component__", None)
        provider_class = get_provider(base, use_mock=component_name in in_memory)
        provider_instances.append(provider_class())

    # Include FastapiProvider for proper integration with FastAPI
    return make_async_container(
        *provider_instances,
        FastapiProvider(),
        context={Settings: settings},
    )


def setup_di(app, container: AsyncContainer) -> None:
    """Setup dependency injection for FastAPI.

    Args:
        app: FastAPI application
        container: DI container
    """
    setup_dishka(container, app)
