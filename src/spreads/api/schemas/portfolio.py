"""Pydantic schemas for portfolio API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HoldingsPayload(BaseModel):
    """Body of POST /portfolio. Holdings are validated field by field in the service."""

    holdings: list[Any] = Field(default_factory=list)


class HoldingOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    symbol: str
    name: str = ""
    shares: float
    purchase_price: float = Field(alias="purchasePrice")
    purchase_date: str = Field(alias="purchaseDate")
    total_cost: float = Field(alias="totalCost")


class HoldingsResponse(BaseModel):
    holdings: list[HoldingOut]
