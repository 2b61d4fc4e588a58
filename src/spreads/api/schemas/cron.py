"""Pydantic schemas for cache warmers and cache administration."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BatchStats(BaseModel):
    total: int
    success: int
    errors: int
    duration: str


class RefreshResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    stats: BatchStats
    errors: list[str]
    stock_count: Optional[int] = Field(default=None, alias="stockCount")


class PurgeResult(BaseModel):
    removed: int
    memory_removed: int = Field(serialization_alias="memoryRemoved")
