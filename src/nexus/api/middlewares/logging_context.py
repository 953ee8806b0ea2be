"""Per-request log context: correlation id, method and path."""

from asgi_correlation_id import correlation_id
from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from src.nexus.core.logging import bind_request_context, clear_request_context


async def logging_context_middleware(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """Scope log context to one request; the identity is added later by the auth dependency."""
    clear_request_context()
    bind_request_context(correlation_id.get(), method=request.method, path=request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_request_context()
