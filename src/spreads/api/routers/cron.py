"""Scheduled cache warmers."""

from fastapi import APIRouter, Depends

from spreads.api.deps import get_market_service, get_reddit_service, require_cron
from spreads.api.schemas import RefreshResult
from spreads.services import MarketService, RedditService

router = APIRouter(prefix="/cron", tags=["cron"], dependencies=[Depends(require_cron)])


@router.post("/refresh-reddit", response_model=RefreshResult, response_model_exclude_none=True)
async def refresh_reddit(reddit: RedditService = Depends(get_reddit_service)) -> dict:
    """Recompute sentiment for every top symbol, then the trending list."""
    report = await reddit.refresh_all()
    return {"success": True, "stats": report.stats(), "errors": report.errors}


@router.post("/refresh-stocks", response_model=RefreshResult, response_model_exclude_none=True)
async def refresh_stocks(market: MarketService = Depends(get_market_service)) -> dict:
    report = await market.refresh_screener()
    return {
        "success": True,
        "stats": report.stats(),
        "errors": report.errors,
        "stockCount": report.success_count,
    }
