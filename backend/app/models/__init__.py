"""Pricing domain models package export."""

from app.models.breakdown import (
    Charge,
    PotentialSaving,
    PricingBreakdown,
    PricingLine,
    RawBreakdown,
    Recommendations,
    UpgradeOption,
)
from app.models.pricing_config import (
    AccessSurcharges,
    DemandLevel,
    DemandMultipliers,
    PricingConfig,
    Season,
    SeasonalMultipliers,
    SpecialItemSurcharges,
)
from app.models.promo_code import (
    FirstTimeCustomerCondition,
    MinimumDistanceCondition,
    MinimumVolumeCondition,
    PromoCode,
    PromoCondition,
    PromoKind,
    ServiceTypesCondition,
)
from app.models.service_type import ServiceType

__all__ = [
    "AccessSurcharges",
    "Charge",
    "DemandLevel",
    "DemandMultipliers",
    "FirstTimeCustomerCondition",
    "MinimumDistanceCondition",
    "MinimumVolumeCondition",
    "PotentialSaving",
    "PricingBreakdown",
    "PricingConfig",
    "PricingLine",
    "PromoCode",
    "PromoCondition",
    "PromoKind",
    "RawBreakdown",
    "Recommendations",
    "Season",
    "SeasonalMultipliers",
    "ServiceType",
    "ServiceTypesCondition",
    "SpecialItemSurcharges",
    "UpgradeOption",
]
