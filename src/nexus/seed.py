"""
Product type catalogue seed - idempotent, safe to run on every deploy.

Run with:
    uv run python -m src.nexus.seed            # Insert missing product types
    uv run python -m src.nexus.seed --migrate  # Upgrade the schema first
"""

import argparse
import asyncio

from src.nexus.core.config import get_settings
from src.nexus.core.db import dispose_engine, get_session
from src.nexus.core.logging import get_logger, setup_logging
from src.nexus.core.migrations import run_migrations_async
from src.nexus.repositories import ProductTypeRepository
from src.nexus.schemas.product_type import ProductTypeCreate
from src.nexus.services.product_type_service import ProductTypeService

logger = get_logger(__name__)

PRODUCT_TYPE_CATALOGUE: list[ProductTypeCreate] = [
    # Publicaciones Científicas
    ProductTypeCreate(
        code="ARTICULO_CIENTIFICO",
        description="Artículo científico publicado en revista indexada",
        quality="Alto",
        category="Publicaciones Científicas",
    ),
    ProductTypeCreate(
        code="LIBRO",
        description="Libro o capítulo de libro",
        quality="Alto",
        category="Publicaciones Científicas",
    ),
    # Propiedad Intelectual
    ProductTypeCreate(
        code="PATENTE",
        description="Patente registrada",
        quality="Muy Alto",
        category="Propiedad Intelectual",
    ),
    # Productos Tecnológicos
    ProductTypeCreate(
        code="SOFTWARE",
        description="Software o aplicación desarrollada",
        quality="Alto",
        category="Productos Tecnológicos",
    ),
    ProductTypeCreate(
        code="PROTOTIPO",
        description="Prototipo funcional",
        quality="Medio",
        category="Productos Tecnológicos",
    ),
    ProductTypeCreate(
        code="MODELO_MATEMATICO",
        description="Modelo matemático o algoritmo",
        quality="Medio",
        category="Productos Tecnológicos",
    ),
    ProductTypeCreate(
        code="BASE_DATOS",
        description="Base de datos especializada",
        quality="Medio",
        category="Productos Tecnológicos",
    ),
    # Servicios
    ProductTypeCreate(
        code="CONSULTORIA",
        description="Servicio de consultoría especializada",
        quality="Medio",
        category="Servicios",
    ),
    ProductTypeCreate(
        code="CAPACITACION",
        description="Programa de capacitación o curso",
        quality="Bajo",
        category="Servicios",
    ),
    # Documentos Técnicos
    ProductTypeCreate(
        code="INFORME_TECNICO",
        description="Informe técnico o de investigación",
        quality="Bajo",
        category="Documentos Técnicos",
    ),
    ProductTypeCreate(
        code="GUIA_METODOLOGICA",
        description="Guía metodológica o manual",
        quality="Bajo",
        category="Documentos Técnicos",
    ),
    # Investigación Aplicada
    ProductTypeCreate(
        code="ESTUDIO_PILOTO",
        description="Estudio piloto o de viabilidad",
        quality="Medio",
        category="Investigación Aplicada",
    ),
    ProductTypeCreate(
        code="DIAGNOSTICO_TECNOLOGICO",
        description="Diagnóstico tecnológico sectorial",
        quality="Medio",
        category="Investigación Aplicada",
    ),
    ProductTypeCreate(
        code="MAPA_TECNOLOGICO",
        description="Mapa tecnológico o de capacidades",
        quality="Alto",
        category="Investigación Aplicada",
    ),
    # Innovación Empresarial
    ProductTypeCreate(
        code="INNOVACION_PROCESO",
        description="Innovación en procesos productivos",
        quality="Alto",
        category="Innovación Empresarial",
    ),
    ProductTypeCreate(
        code="INNOVACION_PRODUCTO",
        description="Innovación en productos",
        quality="Alto",
        category="Innovación Empresarial",
    ),
    ProductTypeCreate(
        code="TRANSFERENCIA_TECNOLOGICA",
        description="Proyecto de transferencia tecnológica",
        quality="Muy Alto",
        category="Innovación Empresarial",
    ),
    # Desarrollo Regional
    ProductTypeCreate(
        code="DESARROLLO_PRODUCTIVO",
        description="Desarrollo productivo regional",
        quality="Alto",
        category="Desarrollo Regional",
    ),
    ProductTypeCreate(
        code="CLUSTER_TECNOLOGICO",
        description="Formación de cluster tecnológico",
        quality="Muy Alto",
        category="Desarrollo Regional",
    ),
    # Infraestructura
    ProductTypeCreate(
        code="CENTRO_INNOVACION",
        description="Centro de innovación creado",
        quality="Muy Alto",
        category="Infraestructura",
    ),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the product type catalogue")
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Run Alembic migrations to head before seeding",
    )
    return parser.parse_args()


async def seed_product_types() -> int:
    """Insert the catalogue entries that are not present yet. Returns the number inserted."""
    async with get_session() as session:
        service = ProductTypeService(ProductTypeRepository(session), session, admin_user_ids=[])
        return await service.seed(PRODUCT_TYPE_CATALOGUE)


async def main() -> None:
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    try:
        if args.migrate:
            logger.info("Running migrations")
            await run_migrations_async()
        created = await seed_product_types()
        logger.info(
            "Product type seed complete",
            created=created,
            skipped=len(PRODUCT_TYPE_CATALOGUE) - created,
        )
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
