"""
API router - aggregates all endpoint modules (RESTful structure).
"""

from fastapi import APIRouter

from app.api.endpoints import auth, health, products

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
