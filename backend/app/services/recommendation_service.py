"""Service-type scoring for a booking profile."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Sequence

from app.models.pricing_config import PricingConfig
from app.models.service_type import ServiceType
from app.schemas.pricing import BookingItem, ServiceRequirements, TimePreference

PREMIUM_SERVICE_ID = "premium"
VAN_ONLY_SERVICE_ID = "van-only"
LONG_DISTANCE_KM = Decimal("50")


@dataclass(slots=True)
class ServiceRecommendation:
    """Score and rationale for one service tier."""

    service_type: ServiceType
    score: int
    reasons: list[str] = field(default_factory=list)
    estimated_price: Decimal = Decimal("0.00")


def total_volume(items: Iterable[BookingItem]) -> Decimal:
    return sum((item.volume * item.quantity for item in items), Decimal("0"))


def total_weight(items: Iterable[BookingItem]) -> Decimal:
    return sum(
        ((item.weight or Decimal("0")) * item.quantity for item in items),
        Decimal("0"),
    )


def estimate_service_price(
    service: ServiceType,
    volume: Decimal,
    distance: Decimal,
    config: PricingConfig,
) -> Decimal:
    """Rough price ignoring time, multipliers and surcharges."""

    volume_cost = volume * config.price_per_cubic_meter
    chargeable = max(Decimal("0"), distance - config.free_distance_km)
    return service.base_price + volume_cost + chargeable * config.price_per_km


def get_service_recommendations(
    items: Sequence[BookingItem],
    distance: Decimal,
    requirements: ServiceRequirements | None = None,
    *,
    catalog: Iterable[ServiceType],
    config: PricingConfig,
) -> list[ServiceRecommendation]:
    """Rank every service tier for the given items and distance."""

    volume = total_volume(items)
    weight = total_weight(items)
    has_fragile = any(item.fragile for item in items)
    has_valuable = any(item.valuable for item in items)
    requirements = requirements or ServiceRequirements()

    recommendations: list[ServiceRecommendation] = []
    for service in catalog:
        score = 0
        reasons: list[str] = []
        is_premium = service.id == PREMIUM_SERVICE_ID
        estimated_price = estimate_service_price(service, volume, distance, config)

        if volume <= service.max_volume:
            score += 20
            reasons.append("Suitable for your volume")
        else:
            score -= 30
            reasons.append("May require multiple trips")

        if weight <= service.max_weight:
            score += 15
        else:
            score -= 20

        if distance > LONG_DISTANCE_KM and is_premium:
            score += 10
            reasons.append("Best for long-distance moves")

        if has_fragile and (is_premium or service.crew_size >= 2):
            score += 15
            reasons.append("Professional handling for fragile items")

        if has_valuable and is_premium:
            score += 10
            reasons.append("Premium insurance included")

        if requirements.budget is not None:
            if estimated_price <= requirements.budget:
                score += 10
                reasons.append("Within your budget")
            else:
                score -= 15

        preference = requirements.time_preference
        if preference is TimePreference.FAST:
            if service.crew_size >= 2:
                score += 10
                reasons.append("Faster with professional crew")
        elif preference is TimePreference.ECONOMICAL:
            if service.id == VAN_ONLY_SERVICE_ID:
                score += 15
                reasons.append("Most economical option")
        elif preference is TimePreference.PREMIUM:
            if is_premium:
                score += 20
                reasons.append("Premium service quality")

        if requirements.help_needed is False:
            if service.id == VAN_ONLY_SERVICE_ID:
                score += 10
                reasons.append("Perfect for DIY moves")
        elif service.crew_size > 0:
            score += 10
            reasons.append("Professional help included")

        recommendations.append(
            ServiceRecommendation(
                service_type=service,
                score=max(0, score),
                reasons=reasons,
                estimated_price=estimated_price,
            )
        )

    # sorted() is stable, so ties keep catalog order.
    return sorted(recommendations, key=lambda rec: rec.score, reverse=True)
