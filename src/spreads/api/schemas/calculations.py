"""Pydantic schemas for saved compound interest calculations."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CalculationPayload(BaseModel):
    """Body of POST /compound-calculations. Fields are validated in the service."""

    calculation: Any = None


class CalculationOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    currency: str
    initial_balance: float = Field(alias="initialBalance")
    annual_return: float = Field(alias="annualReturn")
    compound_frequency: str = Field(alias="compoundFrequency")
    years: float
    months: float
    deposit_amount: float = Field(alias="depositAmount")
    deposit_frequency: str = Field(alias="depositFrequency")
    created_at: int = Field(alias="createdAt")


class CalculationsResponse(BaseModel):
    calculations: list[CalculationOut]
    total: int


class CalculationSaved(BaseModel):
    success: bool
    calculation: CalculationOut
    total: int


class CalculationDeleted(BaseModel):
    success: bool
    total: int
