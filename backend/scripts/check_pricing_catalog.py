"""Validate a pricing catalog YAML and print sample quotes for each service."""

from __future__ import annotations

import argparse
import datetime
import logging
from decimal import Decimal
from pathlib import Path

import yaml
from pydantic import ValidationError

from app.schemas.pricing import BookingItem, PricingInput, TimeSlot
from app.services.catalog_service import (
    DEFAULT_CATALOG_PATH,
    ServiceCatalog,
    load_pricing_document,
)
from app.services.pricing_engine import PricingEngine
from app.services.promo_service import PromoCodeRegistry

LOGGER = logging.getLogger("check_pricing_catalog")

SAMPLE_ITEMS = [
    BookingItem(id="sofa", name="Sofa", volume=Decimal("2.5"), weight=Decimal("45")),
    BookingItem(id="box", name="Box (Medium)", volume=Decimal("0.1"), quantity=20),
]


def configure_logging() -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
    LOGGER.setLevel(logging.INFO)
    LOGGER.addHandler(handler)


def sample_quotes(engine: PricingEngine, distance: Decimal) -> dict[str, str]:
    move_date = datetime.date.today() + datetime.timedelta(days=14)
    quotes: dict[str, str] = {}
    for service in engine.catalog:
        breakdown = engine.calculate_pricing(
            PricingInput(
                items=SAMPLE_ITEMS,
                service_type=service.id,
                distance=distance,
                estimated_duration=Decimal("3"),
                time_slot=TimeSlot(id="morning"),
                move_date=move_date,
            )
        )
        quotes[service.id] = f"{breakdown.total:.2f}"
    return quotes


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate a pricing catalog")
    parser.add_argument(
        "catalog",
        nargs="?",
        type=Path,
        default=DEFAULT_CATALOG_PATH,
        help="Path to the pricing catalog YAML file.",
    )
    parser.add_argument(
        "--distance",
        type=Decimal,
        default=Decimal("20"),
        help="Distance in km used for the sample quotes.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Optional path to write the sample quotes as YAML.",
    )
    args = parser.parse_args()
    configure_logging()

    try:
        document = load_pricing_document(args.catalog)
    except (ValidationError, ValueError) as exc:
        LOGGER.error("Catalog %s is invalid: %s", args.catalog, exc)
        raise SystemExit(2) from exc

    engine = PricingEngine(
        catalog=ServiceCatalog(document.service_types),
        config=document.pricing,
        promo_codes=PromoCodeRegistry(document.promo_codes),
    )
    quotes = sample_quotes(engine, args.distance)
    for service_id, total in quotes.items():
        LOGGER.info("Sample quote %-16s £%s", service_id, total)

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        with args.report.open("w", encoding="utf-8") as fh:
            yaml.safe_dump({"distance_km": str(args.distance), "quotes": quotes}, fh)
        LOGGER.info("Wrote sample quotes to %s", args.report)


if __name__ == "__main__":
    main()
