"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api import deps
from app.core.config import get_settings
from app.services.pricing_engine import PricingEngine

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck(
    engine: Annotated[PricingEngine, Depends(deps.get_pricing_engine)],
) -> dict[str, str | int]:
    """Report readiness of the pricing engine and its quote cache."""
    settings = get_settings()
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.app_env,
        "service_types": len(engine.catalog),
        "promo_codes": len(engine.promo_codes),
        "quote_cache": type(engine.cache).__name__,
    }
