"""Service catalog endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api import deps
from app.models.service_type import ServiceType
from app.services.pricing_engine import PricingEngine

router = APIRouter(prefix="/service-types")


@router.get("", response_model=list[ServiceType], summary="List service types")
def list_service_types(
    engine: Annotated[PricingEngine, Depends(deps.get_pricing_engine)],
) -> list[ServiceType]:
    return engine.catalog.all()


@router.get(
    "/{service_id}", response_model=ServiceType, summary="Get service type"
)
def get_service_type(
    service_id: str,
    engine: Annotated[PricingEngine, Depends(deps.get_pricing_engine)],
) -> ServiceType:
    service = engine.catalog.get(service_id)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Service type not found"
        )
    return service
