"""Service layer exports."""
from app.services import (
    catalog_service,
    money,
    pricing_engine,
    promo_service,
    quote_cache,
    recommendation_service,
)

__all__ = [
    "catalog_service",
    "money",
    "pricing_engine",
    "promo_service",
    "quote_cache",
    "recommendation_service",
]
