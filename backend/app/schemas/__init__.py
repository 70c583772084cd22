"""Schema exports."""

from app.schemas.pricing import (
    BookingItem,
    Coordinates,
    PricingBreakdownRead,
    PricingInput,
    PricingLineRead,
    PromoCodeValidateRequest,
    PromoCodeValidationRead,
    PromoContext,
    PropertyAccessDetails,
    PropertyType,
    RecommendationRequest,
    RouteCoordinates,
    ServiceRecommendationRead,
    ServiceRequirements,
    SlotPeriod,
    TimePreference,
    TimeSlot,
)

__all__ = [
    "BookingItem",
    "Coordinates",
    "PricingBreakdownRead",
    "PricingInput",
    "PricingLineRead",
    "PromoCodeValidateRequest",
    "PromoCodeValidationRead",
    "PromoContext",
    "PropertyAccessDetails",
    "PropertyType",
    "RecommendationRequest",
    "RouteCoordinates",
    "ServiceRecommendationRead",
    "ServiceRequirements",
    "SlotPeriod",
    "TimePreference",
    "TimeSlot",
]
