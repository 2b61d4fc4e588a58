"""Profile and username endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import get_identity, get_profile_service
from spreads.api.schemas import ProfileUpdate, UserOut, UsernameCheckResponse
from spreads.services import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/check-username", response_model=UsernameCheckResponse, response_model_exclude_none=True)
def check_username(
    username: Optional[str] = Query(None),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.check_username(username)


@router.get("", response_model=UserOut)
def get_profile(
    identity: str = Depends(get_identity),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    return profiles.get_profile(identity).to_dict()


@router.put("", response_model=UserOut)
def update_profile(
    data: ProfileUpdate,
    identity: str = Depends(get_identity),
    profiles: ProfileService = Depends(get_profile_service),
) -> dict:
    """Change the caller's username."""
    return profiles.update_username(identity, data.username).to_dict()
