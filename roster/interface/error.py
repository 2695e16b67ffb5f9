"""Interface layer errors."""

from fastapi import Request
from fastapi.responses import JSONResponse


class InterfaceError(Exception):
    """Base interface error."""

    pass


class HTTPError(InterfaceError):
    """Error rendered to the client as ``{"message": ..., "status": ...}``."""

    def __init__(self, message: str, status: int):
        self.message = message
        self.status = status
        super().__init__(message)


async def http_error_handler(request: Request, exc: HTTPError) -> JSONResponse:
    """Render an HTTPError as a JSON body."""
    return JSONResponse(
        status_code=exc.status,
        content={"message": exc.message, "status": exc.status},
    )
