"""Portfolio holdings and history endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from spreads.api.deps import (
    get_identity,
    get_market_service,
    get_portfolio_history_engine,
    get_portfolio_service,
)
from spreads.api.schemas import HoldingsPayload, HoldingsResponse
from spreads.core.exceptions import ValidationError
from spreads.core.timezone import parse_date
from spreads.services import MarketService, PortfolioHistoryEngine, PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=HoldingsResponse)
def get_portfolio(
    identity: str = Depends(get_identity),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> dict:
    return {"holdings": [h.to_dict() for h in portfolio.get_holdings(identity)]}


@router.post("", response_model=HoldingsResponse)
def save_portfolio(
    data: HoldingsPayload,
    identity: str = Depends(get_identity),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> dict:
    """Replace the caller's holdings list."""
    holdings = portfolio.save_holdings(identity, data.holdings)
    return {"holdings": [h.to_dict() for h in holdings]}


@router.delete("", response_model=HoldingsResponse)
def delete_portfolio(
    id: Optional[str] = Query(None, description="Holding id (whole portfolio if omitted)"),
    identity: str = Depends(get_identity),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> dict:
    remaining = portfolio.delete(identity, id)
    return {"holdings": [h.to_dict() for h in remaining]}


@router.get("/history")
async def get_history(
    timeframe: Optional[str] = Query(None, description="1W, 1M, 3M, 1Y or All"),
    force_refresh: bool = Query(False),
    identity: str = Depends(get_identity),
    engine: PortfolioHistoryEngine = Depends(get_portfolio_history_engine),
) -> dict:
    """Portfolio value snapshots for a timeframe."""
    return await engine.get_history(identity, timeframe, force_refresh=force_refresh)


@router.get("/historical-price")
async def get_historical_price(
    symbol: Optional[str] = Query(None),
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    market: MarketService = Depends(get_market_service),
) -> dict:
    """Daily close for a symbol on a date."""
    if not symbol or not date:
        raise ValidationError("symbol and date are required")
    try:
        day = parse_date(date)
    except (ValueError, OverflowError):
        raise ValidationError(f"Invalid date: {date}")
    return await market.get_historical_price(symbol, day)
