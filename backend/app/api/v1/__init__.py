"""Versioned API router."""

from fastapi import APIRouter

from . import health, pricing, service_catalog

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(pricing.router, tags=["pricing"])
router.include_router(service_catalog.router, tags=["service-catalog"])

__all__ = ["router"]
