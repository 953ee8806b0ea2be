"""Liveness report and Prometheus metrics.

``/health`` checks the database, names the configured blob store backend and
caches the verdict briefly so probes do not open a session every time.
"""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.nexus.core.config import get_settings
from src.nexus.core.db import get_session
from src.nexus.core.logging import get_logger

logger = get_logger(__name__)

HEALTH_CACHE_TTL = 10  # seconds

_cached_report: dict[str, Any] | None = None
_cached_at: float = 0


def reset_health_cache() -> None:
    global _cached_report, _cached_at
    _cached_report = None
    _cached_at = 0


async def _database_is_healthy() -> bool:
    try:
        async with get_session() as session:
            await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check database failure", error=str(e))
        return False
    return True


def _respond(report: dict[str, Any]) -> JSONResponse:
    healthy = report["status"] == "healthy"
    return JSONResponse(
        content=report,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def setup_health_endpoint(app: FastAPI) -> None:
    @app.get("/health", tags=["health"])
    async def health() -> JSONResponse:
        global _cached_report, _cached_at

        now = time.time()
        if _cached_report and (now - _cached_at) < HEALTH_CACHE_TTL:
            return _respond(
                {**_cached_report, "cached": True, "cache_age_seconds": round(now - _cached_at, 1)}
            )

        database_ok = await _database_is_healthy()
        report: dict[str, Any] = {
            "status": "healthy" if database_ok else "unhealthy",
            "database": "healthy" if database_ok else "unhealthy",
            "storage": get_settings().storage_backend,
            "cached": False,
            "timestamp": now,
        }
        _cached_report, _cached_at = report, now
        return _respond(report)


def setup_metrics(app: FastAPI) -> None:
    """Expose ``/metrics``, guarded by ``X-Metrics-Key`` when METRICS_API_KEY is set."""
    settings = get_settings()
    instrumentator = Instrumentator(excluded_handlers=["/health", "/metrics"]).instrument(app)

    if not settings.metrics_api_key:
        instrumentator.expose(app, endpoint="/metrics")
        return

    expected_key = settings.metrics_api_key
    api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

    async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
        if api_key is None or not secrets.compare_digest(api_key, expected_key):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or missing metrics API key",
            )

    instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
