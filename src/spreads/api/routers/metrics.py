"""Derived financial metric endpoints."""

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import get_metrics_service
from spreads.services import MetricsService

router = APIRouter(prefix="/metrics", tags=["metrics"])


@router.get("/pe/{symbol}")
async def get_historical_pe(
    symbol: str,
    force_refresh: bool = Query(False),
    metrics: MetricsService = Depends(get_metrics_service),
) -> dict:
    """Quarterly P/E history with 1/3/5/10-year averages."""
    result = await metrics.get_historical_pe(symbol, force_refresh=force_refresh)
    return result.body()


@router.get("/dividends/{symbol}")
async def get_dividends(
    symbol: str,
    force_refresh: bool = Query(False),
    metrics: MetricsService = Depends(get_metrics_service),
) -> dict:
    """Estimated eleven-year dividend history."""
    result = await metrics.get_dividends(symbol, force_refresh=force_refresh)
    return result.body()


@router.get("/revenue/{symbol}")
async def get_revenue_growth(
    symbol: str,
    force_refresh: bool = Query(False),
    metrics: MetricsService = Depends(get_metrics_service),
) -> dict:
    result = await metrics.get_revenue_growth(symbol, force_refresh=force_refresh)
    return result.body()


@router.get("/sp500-pe")
async def get_sp500_pe(metrics: MetricsService = Depends(get_metrics_service)) -> dict:
    result = await metrics.get_sp500_pe()
    return result.body()
