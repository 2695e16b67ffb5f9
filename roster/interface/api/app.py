"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roster.config import load_settings
from roster.domain.error import StorageUnavailableError
from roster.interface.api.routes import health, users
from roster.interface.error import HTTPError, http_error_handler
from roster.util.di.container import create_container, setup_di
from roster.util.observability import instrument_fastapi
from roster.util.worker import next_worker_id


async def storage_unavailable_handler(
    request: Request, exc: StorageUnavailableError
) -> JSONResponse:
    """Render storage failures that escape a route, e.g. during DI resolution."""
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"message": str(exc), "status": status.HTTP_502_BAD_GATEWAY},
    )


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; built from settings when omitted

    Returns:
        Configured application
    """
    settings = load_settings()

    app_instance = FastAPI(
        title="Roster API",
        description="CRUD API for users backed by in-memory or SQL storage",
        version="0.1.0",
    )
    app_instance.state.worker_id = next_worker_id()

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        expose_headers=["X-Worker-Id"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container(settings))

    app_instance.add_exception_handler(HTTPError, http_error_handler)
    app_instance.add_exception_handler(
        StorageUnavailableError, storage_unavailable_handler
    )

    app_instance.include_router(health.router)
    app_instance.include_router(users.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
