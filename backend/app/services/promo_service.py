"""Promo code registry and validation."""

from __future__ import annotations

import datetime
import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Iterator

from app.models.pricing_config import PricingConfig
from app.models.promo_code import (
    FirstTimeCustomerCondition,
    MinimumDistanceCondition,
    MinimumVolumeCondition,
    PromoCode,
    PromoKind,
    ServiceTypesCondition,
)
from app.schemas.pricing import PromoContext
from app.services.money import ZERO, to_money

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PromoValidation:
    """Outcome of checking a promo code against an order."""

    valid: bool
    discount: Decimal
    error: str | None = None
    promo_code: PromoCode | None = None

    @classmethod
    def rejected(cls, error: str) -> "PromoValidation":
        return cls(valid=False, discount=to_money(ZERO), error=error)


class PromoCodeRegistry:
    """Case-insensitive promo code lookup with in-memory usage counts."""

    def __init__(self, promo_codes: Iterable[PromoCode] = ()) -> None:
        self._codes: dict[str, PromoCode] = {}
        for promo in promo_codes:
            key = _normalize(promo.code)
            if key in self._codes:
                raise ValueError(f"Duplicate promo code: {promo.code}")
            self._codes[key] = promo
        self._used = {key: promo.used_count for key, promo in self._codes.items()}
        self._lock = threading.Lock()

    def get(self, code: str) -> PromoCode | None:
        return self._codes.get(_normalize(code))

    def used_count(self, code: str) -> int:
        with self._lock:
            return self._used.get(_normalize(code), 0)

    def redeem(self, code: str) -> int:
        """Record one successful redemption and return the new count."""
        key = _normalize(code)
        promo = self._codes.get(key)
        if promo is None:
            raise KeyError(code)
        with self._lock:
            used = self._used[key]
            if promo.usage_limit is not None and used >= promo.usage_limit:
                raise ValueError(f"Promo code {promo.code} usage limit reached")
            self._used[key] = used + 1
            return used + 1

    def __iter__(self) -> Iterator[PromoCode]:
        return iter(self._codes.values())

    def __len__(self) -> int:
        return len(self._codes)


def _normalize(code: str) -> str:
    return code.strip().upper()


def _format_amount(value: Decimal) -> str:
    return format(value.normalize(), "f")


def _check_first_time(
    condition: FirstTimeCustomerCondition, context: PromoContext
) -> str | None:
    if not context.is_first_time_customer:
        return "This code is for first-time customers only"
    return None


def _check_service_types(
    condition: ServiceTypesCondition, context: PromoContext
) -> str | None:
    if context.service_type and context.service_type not in condition.service_types:
        return "This code is not valid for the selected service"
    return None


def _check_minimum_distance(
    condition: MinimumDistanceCondition, context: PromoContext
) -> str | None:
    if context.distance is not None and context.distance < condition.km:
        return f"Minimum distance of {_format_amount(condition.km)}km required"
    return None


def _check_minimum_volume(
    condition: MinimumVolumeCondition, context: PromoContext
) -> str | None:
    volume = context.total_volume()
    if volume is not None and volume < condition.cubic_meters:
        return (
            f"Minimum volume of {_format_amount(condition.cubic_meters)}m³ required"
        )
    return None


_CONDITION_HANDLERS: dict[type, Callable[..., str | None]] = {
    FirstTimeCustomerCondition: _check_first_time,
    ServiceTypesCondition: _check_service_types,
    MinimumDistanceCondition: _check_minimum_distance,
    MinimumVolumeCondition: _check_minimum_volume,
}


def _compute_discount(
    promo: PromoCode, order_value: Decimal, config: PricingConfig
) -> Decimal:
    if promo.kind is PromoKind.PERCENTAGE:
        discount = order_value * promo.value / Decimal("100")
        if promo.max_discount is not None:
            discount = min(discount, promo.max_discount)
    else:
        # Fixed and free-service codes both grant their flat value.
        discount = promo.value

    discount = min(discount, config.max_discount_amount)
    discount = min(
        discount, order_value * config.max_discount_percentage / Decimal("100")
    )
    return to_money(max(discount, ZERO))


def validate_promo_code(
    registry: PromoCodeRegistry,
    config: PricingConfig,
    code: str,
    order_value: Decimal,
    context: PromoContext | None = None,
    *,
    now: datetime.datetime,
) -> PromoValidation:
    """Check ``code`` against an order without recording a redemption."""

    context = context or PromoContext()
    promo = registry.get(code)
    if promo is None:
        logger.info("Rejected unknown promo code %r", code)
        return PromoValidation.rejected("Invalid promo code")

    result = _first_rejection(registry, promo, order_value, context, now)
    if result is not None:
        logger.info("Rejected promo code %s: %s", promo.code, result)
        return PromoValidation.rejected(result)

    discount = _compute_discount(promo, order_value, config)
    return PromoValidation(valid=True, discount=discount, promo_code=promo)


def _first_rejection(
    registry: PromoCodeRegistry,
    promo: PromoCode,
    order_value: Decimal,
    context: PromoContext,
    now: datetime.datetime,
) -> str | None:
    if promo.min_order_value is not None and order_value < promo.min_order_value:
        return f"Minimum order value £{to_money(promo.min_order_value)} required"

    if promo.valid_until is not None and now > promo.valid_until:
        return "Promo code has expired"

    if (
        promo.usage_limit is not None
        and registry.used_count(promo.code) >= promo.usage_limit
    ):
        return "Promo code usage limit reached"

    for condition in promo.conditions:
        handler = _CONDITION_HANDLERS[type(condition)]
        error = handler(condition, context)
        if error is not None:
            return error
    return None
