"""Pydantic schemas for profile and points API."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UsernameCheckResponse(BaseModel):
    available: bool
    reason: Optional[str] = None


class ProfileUpdate(BaseModel):
    username: Optional[str] = None


class UserOut(CamelModel):
    """Stored user record as returned to the client."""

    id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    created_at: str = Field(alias="createdAt")
    last_login_at: str = Field(alias="lastLoginAt")
    username: Optional[str] = None
    username_last_changed: Optional[str] = Field(default=None, alias="usernameLastChanged")
    total_points: int = Field(alias="totalPoints")
    last_claim_date: Optional[str] = Field(default=None, alias="lastClaimDate")
    streak_days: int = Field(alias="streakDays")
    grid_state: list[bool] = Field(alias="gridState")


class UsersResponse(BaseModel):
    users: list[UserOut]
    count: int


class PointsStatus(CamelModel):
    total_points: int = Field(alias="totalPoints")
    streak_days: int = Field(alias="streakDays")
    last_claim_date: Optional[str] = Field(default=None, alias="lastClaimDate")
    grid_state: list[bool] = Field(alias="gridState")
    can_claim_today: bool = Field(alias="canClaimToday")


class ClaimResult(CamelModel):
    success: bool
    total_points: int = Field(alias="totalPoints")
    streak_days: int = Field(alias="streakDays")
    last_claim_date: Optional[str] = Field(default=None, alias="lastClaimDate")
    grid_state: list[bool] = Field(alias="gridState")
    new_square_index: Optional[int] = Field(default=None, alias="newSquareIndex")
