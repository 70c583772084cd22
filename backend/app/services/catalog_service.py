"""Loading of the service catalog, rate table and promo codes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, Iterator

import yaml
from pydantic import BaseModel, ConfigDict, Field

from app.models.pricing_config import PricingConfig
from app.models.promo_code import PromoCode
from app.models.service_type import ServiceType

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "pricing_catalog.yaml"


class PricingDocument(BaseModel):
    """Validated contents of a pricing catalog file."""

    service_types: tuple[ServiceType, ...] = Field(..., min_length=1)
    pricing: PricingConfig
    promo_codes: tuple[PromoCode, ...] = ()

    model_config = ConfigDict(frozen=True)


class ServiceCatalog:
    """Read-only lookup of service tiers keyed by identifier."""

    def __init__(self, service_types: Iterable[ServiceType]) -> None:
        entries: dict[str, ServiceType] = {}
        for service in service_types:
            if service.id in entries:
                raise ValueError(f"Duplicate service type id: {service.id}")
            entries[service.id] = service
        self._entries = entries

    def get(self, service_id: str) -> ServiceType | None:
        return self._entries.get(service_id)

    def all(self) -> list[ServiceType]:
        return list(self._entries.values())

    def __contains__(self, service_id: object) -> bool:
        return service_id in self._entries

    def __iter__(self) -> Iterator[ServiceType]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)


def parse_pricing_document(raw: dict[str, Any]) -> PricingDocument:
    """Validate a decoded catalog mapping."""

    document = PricingDocument.model_validate(raw)
    # Surface duplicate ids at load time rather than on first lookup.
    ServiceCatalog(document.service_types)
    codes = [promo.code for promo in document.promo_codes]
    if len(codes) != len(set(codes)):
        raise ValueError("Duplicate promo codes in pricing catalog")
    return document


def load_pricing_document(path: Path | str | None = None) -> PricingDocument:
    """Read and validate a YAML pricing catalog."""

    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    with catalog_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Pricing catalog {catalog_path} must be a mapping")
    document = parse_pricing_document(raw)
    logger.info(
        "Loaded pricing catalog from %s (%s service types, %s promo codes)",
        catalog_path,
        len(document.service_types),
        len(document.promo_codes),
    )
    return document
