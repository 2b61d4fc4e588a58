"""Market overview endpoints: heatmap, screener list and StockTwits trending."""

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import get_market_service
from spreads.services import MarketService

router = APIRouter(tags=["market"])


@router.get("/stocks/heatmap")
async def get_heatmap(
    force_refresh: bool = Query(False),
    market: MarketService = Depends(get_market_service),
) -> dict:
    result = await market.get_heatmap(force_refresh=force_refresh)
    return result.body()


@router.get("/stocks")
def get_stocks(market: MarketService = Depends(get_market_service)) -> dict:
    """Screener list as last written by the stocks warmer."""
    return market.get_screener().body()


@router.get("/trending")
async def get_trending(market: MarketService = Depends(get_market_service)) -> dict:
    result = await market.get_trending()
    return result.body()
