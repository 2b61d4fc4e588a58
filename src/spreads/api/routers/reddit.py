"""Reddit sentiment endpoints."""

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import get_reddit_service
from spreads.services import RedditService

router = APIRouter(prefix="/reddit", tags=["reddit"])


@router.get("/sentiment/{symbol}")
async def get_sentiment(
    symbol: str,
    force_refresh: bool = Query(False),
    reddit: RedditService = Depends(get_reddit_service),
) -> dict:
    """24h and 7d Reddit sentiment for a symbol."""
    result = await reddit.get_sentiment(symbol, force_refresh=force_refresh)
    return result.body()


@router.get("/trending")
async def get_trending(reddit: RedditService = Depends(get_reddit_service)) -> dict:
    """Top symbols by Reddit Score over the last 24 hours."""
    result = await reddit.get_trending()
    return result.body()
