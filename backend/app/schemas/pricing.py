"""Pricing schema definitions."""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.pricing_config import DemandLevel
from app.models.service_type import ServiceType


class PropertyType(str, enum.Enum):
    HOUSE = "house"
    FLAT = "flat"
    OFFICE = "office"
    STORAGE = "storage"
    OTHER = "other"


class SlotPeriod(str, enum.Enum):
    EARLY = "early"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    LATE = "late"


class TimePreference(str, enum.Enum):
    FAST = "fast"
    ECONOMICAL = "economical"
    PREMIUM = "premium"


class BookingItem(BaseModel):
    """One line item in a move."""

    id: str
    name: str
    category: str | None = None
    quantity: int = Field(1, ge=1)
    volume: Decimal = Field(..., gt=0)
    weight: Decimal | None = Field(default=None, ge=0)
    fragile: bool = False
    valuable: bool = False
    description: str | None = None

    model_config = ConfigDict(frozen=True)


class PropertyAccessDetails(BaseModel):
    """Access characteristics of a pickup or dropoff location."""

    property_type: PropertyType | None = None
    floor: int = Field(0, ge=0)
    has_lift: bool = False
    narrow_access: bool = False
    long_carry: bool = False

    model_config = ConfigDict(frozen=True)


class TimeSlot(BaseModel):
    """Selected arrival window with its demand tier."""

    id: str
    start_time: datetime.time | None = None
    end_time: datetime.time | None = None
    period: SlotPeriod | None = None
    demand: DemandLevel = DemandLevel.MEDIUM
    multiplier: Decimal = Field(Decimal("1.0"), gt=0)

    model_config = ConfigDict(frozen=True)


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class RouteCoordinates(BaseModel):
    pickup: Coordinates
    dropoff: Coordinates


class PromoContext(BaseModel):
    """Partial booking a promo code is checked against."""

    service_type: str | None = None
    distance: Decimal | None = Field(default=None, ge=0)
    is_first_time_customer: bool | None = None
    items: list[BookingItem] | None = None

    def total_volume(self) -> Decimal | None:
        if self.items is None:
            return None
        return sum((item.volume * item.quantity for item in self.items), Decimal("0"))


class PricingInput(BaseModel):
    """Complete pricing request."""

    items: list[BookingItem] = Field(default_factory=list)
    service_type: str
    distance: Decimal = Field(..., ge=0)
    estimated_duration: Decimal = Field(..., ge=0)
    time_slot: TimeSlot
    move_date: datetime.date
    pickup_property: PropertyAccessDetails = Field(
        default_factory=PropertyAccessDetails
    )
    dropoff_property: PropertyAccessDetails = Field(
        default_factory=PropertyAccessDetails
    )
    promo_code: str | None = None
    is_first_time_customer: bool = False
    coordinates: RouteCoordinates | None = None

    def promo_context(self) -> PromoContext:
        return PromoContext(
            service_type=self.service_type,
            distance=self.distance,
            is_first_time_customer=self.is_first_time_customer,
            items=self.items,
        )


class ServiceRequirements(BaseModel):
    """Optional customer preferences used when ranking services."""

    budget: Decimal | None = Field(default=None, ge=0)
    time_preference: TimePreference | None = None
    help_needed: bool | None = None


class RecommendationRequest(BaseModel):
    items: list[BookingItem] = Field(default_factory=list)
    distance: Decimal = Field(..., ge=0)
    requirements: ServiceRequirements | None = None


class PromoCodeValidateRequest(PromoContext):
    """Input payload for live promo-code feedback."""

    code: str = Field(..., min_length=1)
    order_value: Decimal = Field(..., ge=0)


class PromoCodeValidationRead(BaseModel):
    valid: bool
    discount: Decimal
    error: str | None = None
    code: str | None = None
    description: str | None = None


class PricingLineRead(BaseModel):
    """Individual surcharge or discount within a quote."""

    name: str
    amount: Decimal
    description: str

    model_config = ConfigDict(from_attributes=True)


class ChargeRead(BaseModel):
    name: str
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class RawBreakdownRead(BaseModel):
    base_fee: Decimal
    service_charge: Decimal
    volume_charge: Decimal
    distance_charge: Decimal
    time_charge: Decimal
    service_multiplier: Decimal
    time_slot_multiplier: Decimal
    seasonal_multiplier: Decimal
    demand_multiplier: Decimal
    special_item_surcharges: list[ChargeRead]
    access_surcharges: list[ChargeRead]
    promo_discount: Decimal
    subtotal_before_vat: Decimal
    vat_amount: Decimal
    final_total: Decimal

    model_config = ConfigDict(from_attributes=True)


class SavingRead(BaseModel):
    description: str
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class UpgradeOptionRead(BaseModel):
    service: str
    additional_cost: Decimal
    benefits: list[str]

    model_config = ConfigDict(from_attributes=True)


class RecommendationsRead(BaseModel):
    suggested_service: str | None = None
    potential_savings: list[SavingRead] = Field(default_factory=list)
    upgrade_options: list[UpgradeOptionRead] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class PricingBreakdownRead(BaseModel):
    """Full itemized pricing response."""

    base_price: Decimal
    items_price: Decimal
    distance_price: Decimal
    time_price: Decimal
    service_price: Decimal
    surcharges: list[PricingLineRead]
    discounts: list[PricingLineRead]
    subtotal: Decimal
    vat: Decimal
    total: Decimal
    breakdown: RawBreakdownRead
    recommendations: RecommendationsRead | None = None

    model_config = ConfigDict(from_attributes=True)


class ServiceRecommendationRead(BaseModel):
    service_type: ServiceType
    score: int
    reasons: list[str]
    estimated_price: Decimal

    model_config = ConfigDict(from_attributes=True)
