"""Test fixtures for the pricing backend."""
from __future__ import annotations

import datetime
import os
from collections.abc import AsyncIterator, Callable
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("QUOTE_CACHE_BACKEND", "memory")

from app.api import deps
from app.main import app
from app.schemas.pricing import (
    BookingItem,
    PricingInput,
    PropertyAccessDetails,
    TimeSlot,
)
from app.services.catalog_service import (
    PricingDocument,
    ServiceCatalog,
    load_pricing_document,
)
from app.services.pricing_engine import PricingEngine
from app.services.promo_service import PromoCodeRegistry
from app.services.quote_cache import InMemoryQuoteCache

# Tuesday in February: normal season, weekday.
REFERENCE_DATE = datetime.date(2025, 2, 11)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime.datetime | None = None) -> None:
        self.now = start or datetime.datetime(
            2025, 2, 1, 9, 0, tzinfo=datetime.timezone.utc
        )

    def __call__(self) -> datetime.datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += datetime.timedelta(**kwargs)


@pytest.fixture(scope="session")
def pricing_document() -> PricingDocument:
    """Reference catalog shipped with the package."""
    return load_pricing_document()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def quote_cache(clock: FakeClock) -> InMemoryQuoteCache:
    return InMemoryQuoteCache(datetime.timedelta(minutes=5), clock=clock)


@pytest.fixture()
def engine(
    pricing_document: PricingDocument,
    quote_cache: InMemoryQuoteCache,
    clock: FakeClock,
) -> PricingEngine:
    """Engine over the reference catalog with a fake clock."""
    return PricingEngine(
        catalog=ServiceCatalog(pricing_document.service_types),
        config=pricing_document.pricing,
        promo_codes=PromoCodeRegistry(pricing_document.promo_codes),
        cache=quote_cache,
        clock=clock,
    )


def _build_item(**overrides: Any) -> BookingItem:
    data: dict[str, Any] = {
        "id": "item-1",
        "name": "Wardrobe",
        "quantity": 1,
        "volume": Decimal("2"),
    }
    data.update(overrides)
    return BookingItem(**data)


@pytest.fixture()
def make_item() -> Callable[..., BookingItem]:
    """Build a two cubic metre item, overridable per field."""
    return _build_item


@pytest.fixture()
def make_input() -> Callable[..., PricingInput]:
    """Build a request defaulting to the reference man-and-van booking."""

    def _make(**overrides: Any) -> PricingInput:
        data: dict[str, Any] = {
            "items": [_build_item(fragile=True)],
            "service_type": "man-and-van",
            "distance": Decimal("10"),
            "estimated_duration": Decimal("2"),
            "time_slot": TimeSlot(id="slot-10-12", demand="medium", multiplier="1.0"),
            "move_date": REFERENCE_DATE,
            "pickup_property": PropertyAccessDetails(floor=0, has_lift=True),
            "dropoff_property": PropertyAccessDetails(floor=0, has_lift=True),
        }
        data.update(overrides)
        return PricingInput(**data)

    return _make


@pytest_asyncio.fixture()
async def client(engine: PricingEngine) -> AsyncIterator[AsyncClient]:
    """Yield an async client bound to the test engine."""
    app.dependency_overrides[deps.get_pricing_engine] = lambda: engine
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.pop(deps.get_pricing_engine, None)
