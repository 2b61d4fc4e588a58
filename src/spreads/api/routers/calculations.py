"""Saved compound interest calculation endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import get_calculations_service, get_identity
from spreads.api.schemas import (
    CalculationDeleted,
    CalculationPayload,
    CalculationSaved,
    CalculationsResponse,
)
from spreads.services import CalculationsService

router = APIRouter(prefix="/compound-calculations", tags=["calculations"])


@router.get("", response_model=CalculationsResponse)
def get_calculations(
    identity: str = Depends(get_identity),
    calculations: CalculationsService = Depends(get_calculations_service),
) -> dict:
    return calculations.get_calculations(identity)


@router.post("", response_model=CalculationSaved)
def save_calculation(
    data: CalculationPayload,
    identity: str = Depends(get_identity),
    calculations: CalculationsService = Depends(get_calculations_service),
) -> dict:
    """Save calculator inputs; at most 20 per user."""
    return calculations.save_calculation(identity, data.calculation)


@router.delete("", response_model=CalculationDeleted)
def delete_calculation(
    calculation_id: Optional[str] = Query(None, alias="id"),
    identity: str = Depends(get_identity),
    calculations: CalculationsService = Depends(get_calculations_service),
) -> dict:
    return calculations.delete_calculation(identity, calculation_id)
