"""Promotional code definitions."""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_FROZEN = ConfigDict(frozen=True)


class PromoKind(str, enum.Enum):
    """Kinds of discount a promo code can grant."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"
    FREE_SERVICE = "free_service"


class FirstTimeCustomerCondition(BaseModel):
    kind: Literal["first_time_customer"] = "first_time_customer"

    model_config = _FROZEN


class ServiceTypesCondition(BaseModel):
    kind: Literal["service_types"] = "service_types"
    service_types: tuple[str, ...] = Field(..., min_length=1)

    model_config = _FROZEN


class MinimumDistanceCondition(BaseModel):
    kind: Literal["minimum_distance"] = "minimum_distance"
    km: Decimal = Field(..., ge=0)

    model_config = _FROZEN


class MinimumVolumeCondition(BaseModel):
    kind: Literal["minimum_volume"] = "minimum_volume"
    cubic_meters: Decimal = Field(..., ge=0)

    model_config = _FROZEN


PromoCondition = Annotated[
    Union[
        FirstTimeCustomerCondition,
        ServiceTypesCondition,
        MinimumDistanceCondition,
        MinimumVolumeCondition,
    ],
    Field(discriminator="kind"),
]


class PromoCode(BaseModel):
    """A discount rule resolved by code."""

    code: str = Field(..., min_length=1)
    kind: PromoKind
    value: Decimal = Field(..., ge=0)
    description: str = ""
    min_order_value: Decimal | None = Field(default=None, ge=0)
    max_discount: Decimal | None = Field(default=None, ge=0)
    valid_until: datetime.datetime | None = None
    usage_limit: int | None = Field(default=None, ge=0)
    used_count: int = Field(default=0, ge=0)
    conditions: tuple[PromoCondition, ...] = ()

    model_config = _FROZEN

    @field_validator("code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("valid_until")
    @classmethod
    def _assume_utc(cls, value: datetime.datetime | None) -> datetime.datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=datetime.timezone.utc)
        return value

    @model_validator(mode="after")
    def _usage_within_limit(self) -> "PromoCode":
        if self.usage_limit is not None and self.used_count > self.usage_limit:
            raise ValueError("used_count cannot exceed usage_limit")
        return self
