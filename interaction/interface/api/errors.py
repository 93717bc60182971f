"""Exception handlers mapping domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from interaction.domain.error import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

# Most specific first: ContentDeletedError is a NotFoundError and
# InvalidTransitionError is a ValidationError
STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
]


def status_for(exc: DomainError) -> int:
    """HTTP status code for a domain error (400 for unmapped subclasses)."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def register_exception_handlers(app: FastAPI) -> None:
    """Register domain and catch-all exception handlers on ``app``.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Report a refused request with enough detail to correct it."""
        status_code = status_for(exc)
        logfire.warn(
            "Request refused",
            status_code=status_code,
            error_type=type(exc).__name__,
            detail=str(exc),
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "error_type": type(exc).__name__},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for storage outages and bugs. Internal details stay in the log."""
        logfire.exception(
            "Unhandled exception",
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )
