"""structlog setup and request-scoped log context for the registry."""

import logging
import sys

import structlog
from structlog.contextvars import bind_contextvars, clear_contextvars

# Third-party loggers that are chatty at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "multipart", "hpack")


def _base_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(debug: bool = False) -> None:
    """Route stdlib logging to stdout and configure structlog on top of it.

    Debug mode renders colored console lines; otherwise every event is one JSON
    object, which is what the log shipper in production expects.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )

    renderer: structlog.typing.Processor = (
        structlog.dev.ConsoleRenderer(colors=True) if debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[*_base_processors(), renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(
    request_id: str | None, method: str | None = None, path: str | None = None
) -> None:
    """Attach the correlation id (and the route, when known) to later log calls."""
    context = {"request_id": request_id, "method": method, "path": path}
    bind_contextvars(**{key: value for key, value in context.items() if value})


def bind_user_context(user_id: str, placeholder: bool = False) -> None:
    """Attach the caller's identity-provider subject to later log calls.

    Requests served under the development placeholder identity are flagged so
    they can be told apart from real users in the logs.
    """
    bind_contextvars(user_id=user_id)
    if placeholder:
        bind_contextvars(placeholder_identity=True)


def clear_request_context() -> None:
    clear_contextvars()
