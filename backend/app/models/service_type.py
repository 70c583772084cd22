"""Service tier definitions."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ServiceType(BaseModel):
    """One tier of moving service offered in the catalog."""

    id: str = Field(..., min_length=1)
    name: str
    description: str = ""
    base_price: Decimal = Field(..., ge=0)
    price_per_km: Decimal = Field(..., ge=0)
    price_per_hour: Decimal | None = Field(default=None, ge=0)
    included_services: tuple[str, ...] = ()
    max_volume: Decimal = Field(..., gt=0)
    max_weight: Decimal = Field(..., gt=0)
    crew_size: int = Field(..., ge=0)
    vehicle_type: str = ""

    model_config = ConfigDict(frozen=True)
