"""Aggregate all v1 sub-routers."""

from fastapi import APIRouter

from pagebuilder.api.v1.components import router as components_router
from pagebuilder.api.v1.health import router as health_router
from pagebuilder.api.v1.pages import router as pages_router
from pagebuilder.api.v1.products import router as products_router
from pagebuilder.api.v1.public_storefront import router as public_storefront_router

api_v1_router = APIRouter()

api_v1_router.include_router(health_router, tags=["health"])
api_v1_router.include_router(pages_router, prefix="/pages", tags=["pages"])
api_v1_router.include_router(components_router, tags=["components"])
api_v1_router.include_router(products_router, prefix="/products", tags=["products"])
api_v1_router.include_router(public_storefront_router, prefix="/storefront", tags=["storefront"])
