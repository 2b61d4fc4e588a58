"""Pydantic schemas for API request/response."""

from spreads.api.schemas.portfolio import HoldingsPayload, HoldingOut, HoldingsResponse
from spreads.api.schemas.profile import (
    UsernameCheckResponse,
    ProfileUpdate,
    UserOut,
    UsersResponse,
    PointsStatus,
    ClaimResult,
)
from spreads.api.schemas.cron import BatchStats, RefreshResult, PurgeResult
from spreads.api.schemas.calculations import (
    CalculationPayload,
    CalculationOut,
    CalculationsResponse,
    CalculationSaved,
    CalculationDeleted,
)

__all__ = [
    "HoldingsPayload",
    "HoldingOut",
    "HoldingsResponse",
    "UsernameCheckResponse",
    "ProfileUpdate",
    "UserOut",
    "UsersResponse",
    "PointsStatus",
    "ClaimResult",
    "BatchStats",
    "RefreshResult",
    "PurgeResult",
    "CalculationPayload",
    "CalculationOut",
    "CalculationsResponse",
    "CalculationSaved",
    "CalculationDeleted",
]
