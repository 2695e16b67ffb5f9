"""Health check routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from pydantic import BaseModel

router = APIRouter(tags=["health"])

WORKER_HEADER = "X-Worker-Id"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """Basic health check endpoint.

    The ``X-Worker-Id`` header names the application instance that answered.
    """
    response.headers[WORKER_HEADER] = str(request.app.state.worker_id)
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
    )
