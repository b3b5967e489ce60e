"""Interface layer error handling.

Maps domain and adapter errors to HTTP responses of the form
``{"detail": <message>, "error": <code>}``.
"""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from nomen.adapter.error import DirectoryError
from nomen.domain.error import (
    AlreadyMergedError,
    AlreadyOwnedError,
    ConflictError,
    DomainError,
    ExpiredError,
    InvalidMergeError,
    NoProfileError,
    NotAuthenticatedError,
    NotAuthorizedError,
    NotFoundError,
    SameAccountError,
)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotAuthorizedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ExpiredError: status.HTTP_410_GONE,
    SameAccountError: status.HTTP_409_CONFLICT,
    AlreadyOwnedError: status.HTTP_409_CONFLICT,
    InvalidMergeError: status.HTTP_400_BAD_REQUEST,
    NoProfileError: status.HTTP_409_CONFLICT,
    AlreadyMergedError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
}


def status_for(error: DomainError) -> int:
    """HTTP status for a domain error (most specific class wins)."""
    for cls in type(error).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_400_BAD_REQUEST


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error."""
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error("Domain error", code=exc.code, error=str(exc))
    else:
        logfire.info(
            "Request rejected",
            code=exc.code,
            status_code=status_code,
            path=request.url.path,
        )
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": exc.code},
    )


async def handle_directory_error(
    request: Request, exc: DirectoryError
) -> JSONResponse:
    """Render a gateway admin API failure."""
    logfire.error("Directory unavailable", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "detail": "Authentication gateway unavailable, nothing was changed",
            "error": "directory_unavailable",
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the exception handlers on an app.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(DirectoryError, handle_directory_error)
