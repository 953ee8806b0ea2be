from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.nexus.api.middlewares import setup_middlewares
from src.nexus.api.v1.router import api_router
from src.nexus.core.config import get_settings
from src.nexus.core.db import dispose_engine
from src.nexus.core.exceptions import setup_exception_handlers
from src.nexus.core.health import setup_health_endpoint, setup_metrics
from src.nexus.core.logging import get_logger, setup_logging
from src.nexus.core.storage import close_storage_gateway, setup_local_file_serving

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        "Starting application",
        app_name=settings.app_name,
        app_env=settings.app_env,
        storage_backend=settings.storage_backend,
        placeholder_identity=settings.auth_placeholder_user_id is not None,
    )

    yield

    logger.info("Closing connections...")
    await close_storage_gateway()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Owner-scoped research projects"},
    {"name": "products", "description": "Owner-scoped project products"},
    {"name": "product-types", "description": "Product type catalogue"},
    {"name": "public", "description": "Public listing and search, no authentication"},
    {"name": "attachments", "description": "File uploads for projects and products"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Research project registry API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)
    setup_local_file_serving(app, settings)

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
