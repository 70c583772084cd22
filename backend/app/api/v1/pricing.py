"""Pricing-related API endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api import deps
from app.models.pricing_config import PricingConfig
from app.schemas.pricing import (
    PricingBreakdownRead,
    PricingInput,
    PromoCodeValidateRequest,
    PromoCodeValidationRead,
    RecommendationRequest,
    ServiceRecommendationRead,
)
from app.services.pricing_engine import InvalidServiceTypeError, PricingEngine

router = APIRouter(prefix="/pricing", tags=["pricing"])

EngineDep = Annotated[PricingEngine, Depends(deps.get_pricing_engine)]


@router.post(
    "/quote",
    response_model=PricingBreakdownRead,
    summary="Quote a moving booking",
    dependencies=[deps.QUOTE_RATE_DEP],
)
def quote_booking(payload: PricingInput, engine: EngineDep) -> PricingBreakdownRead:
    try:
        breakdown = engine.calculate_pricing(payload)
    except InvalidServiceTypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unable to price service type {exc.service_type!r}",
        ) from exc
    return PricingBreakdownRead.model_validate(breakdown)


@router.post(
    "/promo-codes/validate",
    response_model=PromoCodeValidationRead,
    summary="Check a promo code against an order",
    dependencies=[deps.DEFAULT_RATE_DEP],
)
def validate_promo_code(
    payload: PromoCodeValidateRequest, engine: EngineDep
) -> PromoCodeValidationRead:
    result = engine.validate_promo_code(payload.code, payload.order_value, payload)
    promo = result.promo_code
    return PromoCodeValidationRead(
        valid=result.valid,
        discount=result.discount,
        error=result.error,
        code=promo.code if promo else None,
        description=promo.description if promo else None,
    )


@router.post(
    "/recommendations",
    response_model=list[ServiceRecommendationRead],
    summary="Rank service types for a booking profile",
    dependencies=[deps.DEFAULT_RATE_DEP],
)
def recommend_services(
    payload: RecommendationRequest, engine: EngineDep
) -> list[ServiceRecommendationRead]:
    ranked = engine.get_service_recommendations(
        payload.items, payload.distance, payload.requirements
    )
    return [ServiceRecommendationRead.model_validate(rec) for rec in ranked]


@router.get("/config", response_model=PricingConfig, summary="Current rate table")
def read_pricing_config(engine: EngineDep) -> PricingConfig:
    return engine.config
