"""HTTP middleware stack for the registry API."""

from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.nexus.core.config import Settings

from .logging_context import logging_context_middleware

__all__ = [
    "setup_middlewares",
    "logging_context_middleware",
]

# The web client reads and writes the registry; nothing else is exposed cross-origin
_CORS_METHODS = ["GET", "POST", "PUT", "DELETE"]
_CORS_HEADERS = ["Authorization", "Content-Type", "X-Request-ID"]


def setup_middlewares(app: FastAPI, settings: Settings) -> None:
    """Install middlewares; the last one added is the outermost.

    CorrelationIdMiddleware must wrap the logging context so the id exists
    by the time it is bound.
    """
    app.middleware("http")(logging_context_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=_CORS_METHODS,
        allow_headers=_CORS_HEADERS,
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(CorrelationIdMiddleware)
