"""Daily points endpoints."""

from fastapi import APIRouter, Depends

from spreads.api.deps import get_identity, get_points_service
from spreads.api.schemas import ClaimResult, PointsStatus
from spreads.services import PointsService

router = APIRouter(prefix="/points", tags=["points"])


@router.get("", response_model=PointsStatus)
def get_points(
    identity: str = Depends(get_identity),
    points: PointsService = Depends(get_points_service),
) -> dict:
    return points.status(identity)


@router.post("/claim", response_model=ClaimResult)
def claim_point(
    identity: str = Depends(get_identity),
    points: PointsService = Depends(get_points_service),
) -> dict:
    """Claim today's point; fails if already claimed this UTC day."""
    return points.claim(identity)
