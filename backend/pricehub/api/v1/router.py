"""API router -- aggregates all endpoint routers."""

from fastapi import APIRouter

from pricehub.api.v1 import health, history, products, search

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(history.router, prefix="/user", tags=["history"])
