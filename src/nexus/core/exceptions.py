"""Domain error taxonomy and the exception handlers that render it.

Every error response has the same body: ``{"error": str, "details": [...]?,
"request_id": str}``. Services raise the ``DomainError`` subclasses below and
never leak persistence or storage exceptions to callers.
"""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.nexus.core.logging import get_logger

logger = get_logger(__name__)

GENERIC_SERVER_ERROR = "Internal server error"


class DomainError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = GENERIC_SERVER_ERROR

    def __init__(self, message: str | None = None, details: list[dict[str, Any]] | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(DomainError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data"


class Unauthenticated(DomainError):
    """No usable identity on the request."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(DomainError):
    """Administrative action attempted by a non-admin identity.

    Ownership failures never use this; they raise NotFound.
    """

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Administrator role required"


class NotFound(DomainError):
    """Entity absent or not owned by the caller."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(DomainError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class UpstreamFailure(DomainError):
    """Blob store or persistence layer failed. The cause is logged, never returned."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = GENERIC_SERVER_ERROR


def error_body(message: str, details: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    body["request_id"] = correlation_id.get()
    return body


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the uniform error body."""
    # Imported here: validation imports this module for ValidationError
    from src.nexus.core.validation import field_errors_from_pydantic

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Upstream failure",
                path=request.url.path,
                error_type=type(exc).__name__,
                cause=repr(exc.__cause__) if exc.__cause__ else exc.message,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=error_body(GENERIC_SERVER_ERROR),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = [error.as_dict() for error in field_errors_from_pydantic(exc.errors())]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(ValidationError.default_message, details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail)),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(GENERIC_SERVER_ERROR),
        )
