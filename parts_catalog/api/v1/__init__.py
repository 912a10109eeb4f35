"""
API routers
"""

from fastapi import APIRouter

from .health import router as health_router
from .manufacturers import router as manufacturers_router

api_router = APIRouter()

# Include routers
api_router.include_router(health_router, tags=["health"])
api_router.include_router(manufacturers_router, prefix="/core/manufacturers", tags=["manufacturers"])
