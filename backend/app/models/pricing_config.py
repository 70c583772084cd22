"""Global rate constants for the pricing engine."""

from __future__ import annotations

import enum
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class DemandLevel(str, enum.Enum):
    """Qualitative demand tier attached to a time slot."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "veryHigh"


class Season(str, enum.Enum):
    """Seasonal pricing bands keyed off the calendar month."""

    PEAK = "peak"
    HIGH = "high"
    NORMAL = "normal"


class SeasonalMultipliers(BaseModel):
    peak: Decimal = Field(Decimal("1.2"), gt=0)
    high: Decimal = Field(Decimal("1.1"), gt=0)
    normal: Decimal = Field(Decimal("1.0"), gt=0)

    model_config = _FROZEN

    def for_season(self, season: Season) -> Decimal:
        return getattr(self, season.value)


class DemandMultipliers(BaseModel):
    low: Decimal = Field(Decimal("0.95"), gt=0)
    medium: Decimal = Field(Decimal("1.0"), gt=0)
    high: Decimal = Field(Decimal("1.15"), gt=0)
    very_high: Decimal = Field(Decimal("1.3"), gt=0, alias="veryHigh")

    model_config = _FROZEN

    def for_level(self, level: DemandLevel) -> Decimal:
        mapping = {
            DemandLevel.LOW: self.low,
            DemandLevel.MEDIUM: self.medium,
            DemandLevel.HIGH: self.high,
            DemandLevel.VERY_HIGH: self.very_high,
        }
        return mapping[level]


class SpecialItemSurcharges(BaseModel):
    """Flat per-unit surcharges for items needing special handling."""

    piano: Decimal = Field(Decimal("50.00"), ge=0)
    antique: Decimal = Field(Decimal("25.00"), ge=0)
    artwork: Decimal = Field(Decimal("30.00"), ge=0)
    fragile: Decimal = Field(Decimal("15.00"), ge=0)
    valuable: Decimal = Field(Decimal("20.00"), ge=0)
    heavy: Decimal = Field(Decimal("10.00"), ge=0)

    model_config = _FROZEN


class AccessSurcharges(BaseModel):
    """Surcharges for awkward pickup or dropoff access."""

    no_lift: Decimal = Field(Decimal("15.00"), ge=0, alias="noLift")
    narrow_access: Decimal = Field(Decimal("20.00"), ge=0, alias="narrowAccess")
    long_carry: Decimal = Field(Decimal("25.00"), ge=0, alias="longCarry")
    stairs: Decimal = Field(Decimal("10.00"), ge=0)

    model_config = _FROZEN


class PricingConfig(BaseModel):
    """Immutable rate table consumed by the pricing engine."""

    base_fee: Decimal = Field(..., ge=0)
    vat_rate: Decimal = Field(..., ge=0, le=1)

    free_distance_km: Decimal = Field(..., ge=0)
    price_per_km: Decimal = Field(..., ge=0)
    long_distance_threshold: Decimal = Field(..., ge=0)
    long_distance_surcharge: Decimal = Field(..., ge=0)

    price_per_cubic_meter: Decimal = Field(..., ge=0)
    volume_discount_threshold: Decimal = Field(..., ge=0)
    volume_discount_rate: Decimal = Field(..., ge=0, le=1)

    minimum_duration: Decimal = Field(..., ge=0)
    price_per_hour: Decimal = Field(..., ge=0)

    service_multipliers: dict[str, Decimal] = Field(default_factory=dict)
    seasonal_multipliers: SeasonalMultipliers = Field(
        default_factory=SeasonalMultipliers
    )
    demand_multipliers: DemandMultipliers = Field(default_factory=DemandMultipliers)

    special_item_surcharges: SpecialItemSurcharges = Field(
        default_factory=SpecialItemSurcharges
    )
    heavy_item_weight_kg: Decimal = Field(Decimal("50"), ge=0)
    access_surcharges: AccessSurcharges = Field(default_factory=AccessSurcharges)

    max_discount_percentage: Decimal = Field(..., ge=0, le=100)
    max_discount_amount: Decimal = Field(..., ge=0)

    model_config = _FROZEN

    @field_validator("service_multipliers")
    @classmethod
    def _positive_multipliers(cls, value: dict[str, Decimal]) -> dict[str, Decimal]:
        for service_id, multiplier in value.items():
            if multiplier <= 0:
                raise ValueError(
                    f"service multiplier for {service_id!r} must be positive"
                )
        return value

    def service_multiplier(self, service_id: str) -> Decimal:
        return self.service_multipliers.get(service_id, Decimal("1.0"))
