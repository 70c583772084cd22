"""Pricing engine for moving bookings."""

from __future__ import annotations

import datetime
import hashlib
import json
import logging
from decimal import Decimal
from typing import Sequence

from app.core.config import Settings, get_settings
from app.core.settings import get_quote_cache_settings
from app.models.breakdown import (
    Charge,
    PotentialSaving,
    PricingBreakdown,
    PricingLine,
    RawBreakdown,
    Recommendations,
    UpgradeOption,
)
from app.models.pricing_config import DemandLevel, PricingConfig, Season
from app.models.service_type import ServiceType
from app.schemas.pricing import (
    BookingItem,
    PricingInput,
    PromoContext,
    PropertyAccessDetails,
    ServiceRequirements,
    TimeSlot,
)
from app.services.catalog_service import ServiceCatalog, load_pricing_document
from app.services.money import ZERO, to_money
from app.services.promo_service import (
    PromoCodeRegistry,
    PromoValidation,
    validate_promo_code,
)
from app.services.quote_cache import (
    Clock,
    InMemoryQuoteCache,
    NullQuoteCache,
    QuoteCache,
    RedisQuoteCache,
    utcnow,
)
from app.services.recommendation_service import (
    PREMIUM_SERVICE_ID,
    ServiceRecommendation,
    get_service_recommendations,
    total_volume,
)

logger = logging.getLogger(__name__)

LOW_DEMAND_SAVING_RATE = Decimal("0.10")

_PEAK_MONTHS = frozenset({6, 7, 8, 12})
_HIGH_MONTHS = frozenset({3, 4, 5, 9, 10, 11})


class InvalidServiceTypeError(ValueError):
    """Raised when a request names a service type missing from the catalog."""

    def __init__(self, service_type: str) -> None:
        super().__init__(f"Invalid service type: {service_type}")
        self.service_type = service_type


def _plain(value: Decimal) -> str:
    return format(value.normalize(), "f")


def cache_key(pricing_input: PricingInput) -> str:
    """Derive a stable cache key from the parts of a request that affect price."""

    def _access(details: PropertyAccessDetails) -> list[object]:
        return [
            details.floor,
            details.has_lift,
            details.narrow_access,
            details.long_carry,
        ]

    payload = {
        "items": [[item.id, item.quantity] for item in pricing_input.items],
        "service_type": pricing_input.service_type,
        "distance": _plain(pricing_input.distance),
        "duration": _plain(pricing_input.estimated_duration),
        "time_slot": pricing_input.time_slot.id,
        "date": pricing_input.move_date.isoformat(),
        "promo_code": (
            pricing_input.promo_code.strip().upper()
            if pricing_input.promo_code
            else None
        ),
        "first_time": pricing_input.is_first_time_customer,
        "pickup": _access(pricing_input.pickup_property),
        "dropoff": _access(pricing_input.dropoff_property),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()


def season_for(move_date: datetime.date) -> Season:
    if move_date.month in _PEAK_MONTHS:
        return Season.PEAK
    if move_date.month in _HIGH_MONTHS:
        return Season.HIGH
    return Season.NORMAL


def demand_multiplier(
    move_date: datetime.date, time_slot: TimeSlot, config: PricingConfig
) -> Decimal:
    """Weekend demand, overridden by the slot's own tier."""

    multipliers = config.demand_multipliers
    multiplier = multipliers.medium
    if move_date.weekday() >= 5:
        multiplier = multipliers.high

    if time_slot.demand is DemandLevel.LOW:
        return multipliers.low
    return max(multiplier, multipliers.for_level(time_slot.demand))


def charge_for_volume(volume: Decimal, config: PricingConfig) -> Decimal:
    """Price volume, discounting only the part above the discount threshold."""

    rate = config.price_per_cubic_meter
    threshold = config.volume_discount_threshold
    if volume <= threshold:
        return volume * rate
    discounted_rate = rate * (1 - config.volume_discount_rate)
    return threshold * rate + (volume - threshold) * discounted_rate


def special_item_surcharges(
    items: Sequence[BookingItem], config: PricingConfig
) -> list[Charge]:
    rates = config.special_item_surcharges
    surcharges: list[Charge] = []
    for item in items:
        quantity = item.quantity
        if "piano" in item.name.lower():
            surcharges.append(Charge("Piano", rates.piano * quantity))
        if item.fragile:
            surcharges.append(Charge("Fragile Items", rates.fragile * quantity))
        if item.valuable:
            surcharges.append(Charge("Valuable Items", rates.valuable * quantity))
        if item.weight is not None and item.weight > config.heavy_item_weight_kg:
            surcharges.append(Charge("Heavy Items", rates.heavy * quantity))
    return surcharges


def access_surcharges(
    pickup: PropertyAccessDetails,
    dropoff: PropertyAccessDetails,
    config: PricingConfig,
) -> list[Charge]:
    rates = config.access_surcharges
    surcharges: list[Charge] = []
    for label, details in (("Pickup", pickup), ("Dropoff", dropoff)):
        if details.floor > 0 and not details.has_lift:
            surcharges.append(Charge(f"{label} - No Lift", rates.no_lift * details.floor))
        if details.narrow_access:
            surcharges.append(Charge(f"{label} - Narrow Access", rates.narrow_access))
        if details.long_carry:
            surcharges.append(Charge(f"{label} - Long Carry", rates.long_carry))
    return surcharges


class PricingEngine:
    """Rules-based quote calculator over an immutable catalog and rate table."""

    def __init__(
        self,
        *,
        catalog: ServiceCatalog,
        config: PricingConfig,
        promo_codes: PromoCodeRegistry | None = None,
        cache: QuoteCache | None = None,
        clock: Clock = utcnow,
    ) -> None:
        self.catalog = catalog
        self.config = config
        self.promo_codes = promo_codes or PromoCodeRegistry()
        self.cache: QuoteCache = cache if cache is not None else NullQuoteCache()
        self._clock = clock

    def calculate_pricing(self, pricing_input: PricingInput) -> PricingBreakdown:
        """Price a booking, returning a cached breakdown when one is live."""

        key = cache_key(pricing_input)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Quote cache hit for %s", key)
            return cached

        service = self.catalog.get(pricing_input.service_type)
        if service is None:
            logger.warning(
                "Pricing requested for unknown service type %r",
                pricing_input.service_type,
            )
            raise InvalidServiceTypeError(pricing_input.service_type)

        config = self.config
        base_fee = config.base_fee
        service_charge = service.base_price

        volume_charge = charge_for_volume(total_volume(pricing_input.items), config)

        distance = pricing_input.distance
        distance_charge = ZERO
        if distance > config.free_distance_km:
            distance_charge = (distance - config.free_distance_km) * config.price_per_km
            if distance > config.long_distance_threshold:
                distance_charge += (
                    distance - config.long_distance_threshold
                ) * config.long_distance_surcharge

        duration = max(pricing_input.estimated_duration, config.minimum_duration)
        time_charge = duration * config.price_per_hour

        time_slot_multiplier = pricing_input.time_slot.multiplier
        seasonal_multiplier = config.seasonal_multipliers.for_season(
            season_for(pricing_input.move_date)
        )
        demand = demand_multiplier(
            pricing_input.move_date, pricing_input.time_slot, config
        )
        service_multiplier = config.service_multiplier(service.id)

        subtotal = (
            (base_fee + service_charge + volume_charge + distance_charge + time_charge)
            * service_multiplier
            * time_slot_multiplier
            * seasonal_multiplier
            * demand
        )

        item_surcharges = special_item_surcharges(pricing_input.items, config)
        location_surcharges = access_surcharges(
            pricing_input.pickup_property, pricing_input.dropoff_property, config
        )
        subtotal += sum((s.amount for s in item_surcharges), ZERO)
        subtotal += sum((s.amount for s in location_surcharges), ZERO)

        promo_discount = ZERO
        if pricing_input.promo_code:
            validation = self.validate_promo_code(
                pricing_input.promo_code, subtotal, pricing_input.promo_context()
            )
            if validation.valid:
                promo_discount = validation.discount

        subtotal_before_vat = to_money(max(ZERO, subtotal - promo_discount))
        vat_amount = to_money(subtotal_before_vat * config.vat_rate)
        final_total = subtotal_before_vat + vat_amount

        breakdown = PricingBreakdown(
            base_price=to_money(base_fee),
            items_price=to_money(volume_charge),
            distance_price=to_money(distance_charge),
            time_price=to_money(time_charge),
            service_price=to_money(service_charge),
            surcharges=tuple(
                PricingLine(s.name, to_money(s.amount), f"Special handling for {s.name}")
                for s in item_surcharges
            )
            + tuple(
                PricingLine(s.name, to_money(s.amount), f"Access difficulty: {s.name}")
                for s in location_surcharges
            ),
            discounts=(
                (
                    PricingLine(
                        pricing_input.promo_code.strip().upper(),
                        promo_discount,
                        "Promotional discount applied",
                    ),
                )
                if promo_discount > 0 and pricing_input.promo_code
                else ()
            ),
            subtotal=subtotal_before_vat,
            vat=vat_amount,
            total=final_total,
            breakdown=RawBreakdown(
                base_fee=base_fee,
                service_charge=service_charge,
                volume_charge=volume_charge,
                distance_charge=distance_charge,
                time_charge=time_charge,
                service_multiplier=service_multiplier,
                time_slot_multiplier=time_slot_multiplier,
                seasonal_multiplier=seasonal_multiplier,
                demand_multiplier=demand,
                special_item_surcharges=tuple(item_surcharges),
                access_surcharges=tuple(location_surcharges),
                promo_discount=promo_discount,
                subtotal_before_vat=subtotal_before_vat,
                vat_amount=vat_amount,
                final_total=final_total,
            ),
            recommendations=self._recommendations(pricing_input, service, subtotal),
        )

        self.cache.set(key, breakdown)
        logger.debug("Quote cache stored %s", key)
        return breakdown

    def validate_promo_code(
        self,
        code: str,
        order_value: Decimal,
        context: PromoContext | None = None,
    ) -> PromoValidation:
        return validate_promo_code(
            self.promo_codes,
            self.config,
            code,
            order_value,
            context,
            now=self._clock(),
        )

    def get_service_recommendations(
        self,
        items: Sequence[BookingItem],
        distance: Decimal,
        requirements: ServiceRequirements | None = None,
    ) -> list[ServiceRecommendation]:
        return get_service_recommendations(
            items,
            distance,
            requirements,
            catalog=self.catalog,
            config=self.config,
        )

    def _recommendations(
        self,
        pricing_input: PricingInput,
        service: ServiceType,
        subtotal: Decimal,
    ) -> Recommendations:
        ranked = self.get_service_recommendations(
            pricing_input.items, pricing_input.distance
        )
        suggested: str | None = None
        if ranked:
            current_score = next(
                (rec.score for rec in ranked if rec.service_type.id == service.id), 0
            )
            best = ranked[0]
            if best.service_type.id != service.id and best.score > current_score:
                suggested = best.service_type.id

        savings: list[PotentialSaving] = []
        if pricing_input.time_slot.demand is DemandLevel.LOW:
            savings.append(
                PotentialSaving(
                    "Choose off-peak time slot",
                    to_money(subtotal * LOW_DEMAND_SAVING_RATE),
                )
            )

        upgrades: list[UpgradeOption] = []
        premium = self.catalog.get(PREMIUM_SERVICE_ID)
        if service.id != PREMIUM_SERVICE_ID and premium is not None:
            upgrades.append(
                UpgradeOption(
                    service=premium.id,
                    additional_cost=to_money(premium.base_price - service.base_price),
                    benefits=premium.included_services,
                )
            )

        return Recommendations(
            suggested_service=suggested,
            potential_savings=tuple(savings),
            upgrade_options=tuple(upgrades),
        )


def build_pricing_engine(
    settings: Settings | None = None, *, clock: Clock = utcnow
) -> PricingEngine:
    """Assemble an engine from the configured catalog and cache backend."""

    settings = settings or get_settings()
    document = load_pricing_document(settings.pricing_catalog_path)
    cache_settings = get_quote_cache_settings(settings)

    cache: QuoteCache
    if cache_settings.backend == "redis" and cache_settings.redis_url:
        cache = RedisQuoteCache.from_url(
            cache_settings.redis_url, cache_settings.ttl, prefix=cache_settings.prefix
        )
    elif cache_settings.backend == "none" or cache_settings.ttl_seconds == 0:
        cache = NullQuoteCache()
    else:
        if cache_settings.backend == "redis":
            logger.warning("REDIS_URL not set; falling back to in-memory quote cache")
        cache = InMemoryQuoteCache(cache_settings.ttl, clock=clock)

    return PricingEngine(
        catalog=ServiceCatalog(document.service_types),
        config=document.pricing,
        promo_codes=PromoCodeRegistry(document.promo_codes),
        cache=cache,
        clock=clock,
    )
