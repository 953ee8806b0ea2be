from fastapi import APIRouter

from src.nexus.api.v1 import product_types, products, projects, public, upload

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(products.router)
api_router.include_router(product_types.router)
api_router.include_router(public.router)
api_router.include_router(upload.router)
