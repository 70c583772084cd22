"""Result types produced by the pricing engine."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True, slots=True)
class Charge:
    """Named amount contributing to a raw breakdown."""

    name: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class PricingLine:
    """Surcharge or discount line shown to the customer."""

    name: str
    amount: Decimal
    description: str


@dataclass(frozen=True, slots=True)
class RawBreakdown:
    """Every intermediate charge and multiplier behind a quote."""

    base_fee: Decimal
    service_charge: Decimal
    volume_charge: Decimal
    distance_charge: Decimal
    time_charge: Decimal
    service_multiplier: Decimal
    time_slot_multiplier: Decimal
    seasonal_multiplier: Decimal
    demand_multiplier: Decimal
    special_item_surcharges: tuple[Charge, ...]
    access_surcharges: tuple[Charge, ...]
    promo_discount: Decimal
    subtotal_before_vat: Decimal
    vat_amount: Decimal
    final_total: Decimal


@dataclass(frozen=True, slots=True)
class PotentialSaving:
    description: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class UpgradeOption:
    service: str
    additional_cost: Decimal
    benefits: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Recommendations:
    suggested_service: str | None = None
    potential_savings: tuple[PotentialSaving, ...] = ()
    upgrade_options: tuple[UpgradeOption, ...] = ()


@dataclass(frozen=True, slots=True)
class PricingBreakdown:
    """Itemized price quote for one pricing request."""

    base_price: Decimal
    items_price: Decimal
    distance_price: Decimal
    time_price: Decimal
    service_price: Decimal
    surcharges: tuple[PricingLine, ...]
    discounts: tuple[PricingLine, ...]
    subtotal: Decimal
    vat: Decimal
    total: Decimal
    breakdown: RawBreakdown
    recommendations: Recommendations | None = None
