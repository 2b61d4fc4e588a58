"""P/E, dividend, revenue and market P/E metrics behind the cache layers."""

import asyncio
import logging
import random
from datetime import timedelta
from typing import Optional

from spreads.calculators.dividends import estimate_dividend_history
from spreads.calculators.historical_pe import build_pe_history
from spreads.calculators.revenue import compute_revenue_growth
from spreads.config.universe import SP500_PROXY_SYMBOL
from spreads.core.clock import Clock
from spreads.core.exceptions import NotFoundError, UpstreamError
from spreads.domain.models import DataSource, MarketPE
from spreads.domain.views import CachedResult
from spreads.providers.protocols import FinancialDataProvider
from spreads.services.stale_responder import StaleOnErrorResponder

logger = logging.getLogger(__name__)

PE_HISTORY_YEARS = 11


class MetricsService:
    """Derived financial metrics, each cached under ``<kind>:<SYMBOL>``."""

    def __init__(
        self,
        provider: FinancialDataProvider,
        responder: StaleOnErrorResponder,
        clock: Clock,
        pe_ttl_seconds: int = 86400,
        dividends_ttl_seconds: int = 86400,
        revenue_ttl_seconds: int = 86400,
        sp500_pe_ttl_seconds: int = 3600,
        pe_max: float = 500.0,
        min_pe_points: int = 4,
        synthetic_pe_points: int = 20,
        dividend_growth_rate: float = 0.05,
        dividend_jitter: float = 0.02,
        fallback_sp500_pe: float = 24.5,
        sp500_pe_max: float = 100.0,
        rng: Optional[random.Random] = None,
    ):
        self._provider = provider
        self._responder = responder
        self._clock = clock
        self._pe_ttl = pe_ttl_seconds
        self._dividends_ttl = dividends_ttl_seconds
        self._revenue_ttl = revenue_ttl_seconds
        self._sp500_ttl = sp500_pe_ttl_seconds
        self._pe_max = pe_max
        self._min_pe_points = min_pe_points
        self._synthetic_pe_points = synthetic_pe_points
        self._growth_rate = dividend_growth_rate
        self._jitter = dividend_jitter
        self._fallback_sp500_pe = fallback_sp500_pe
        self._sp500_pe_max = sp500_pe_max
        self._rng = rng or random.Random()

    # Historical P/E

    async def get_historical_pe(self, symbol: str, force_refresh: bool = False) -> CachedResult:
        symbol = symbol.upper()
        return await self._responder.serve(
            f"pe:{symbol}",
            lambda: self._compute_historical_pe(symbol),
            self._pe_ttl,
            source=DataSource.FINNHUB,
            force_refresh=force_refresh,
        )

    async def _compute_historical_pe(self, symbol: str) -> dict:
        today = self._clock.today()
        start = today - timedelta(days=365 * PE_HISTORY_YEARS)
        quarterly, annual, prices, metrics = await asyncio.gather(
            self._provider.get_financials_reported(symbol, "quarterly"),
            self._provider.get_financials_reported(symbol, "annual"),
            self._provider.get_candles(symbol, start, today, resolution="M"),
            self._provider.get_metrics(symbol),
            return_exceptions=True,
        )

        reports = []
        for result in (quarterly, annual):
            if isinstance(result, Exception):
                logger.warning("Filings unavailable for %s: %s", symbol, result)
            else:
                reports.extend(result)
        current_pe = None if isinstance(metrics, Exception) else metrics.metric.pe
        if not reports and isinstance(metrics, Exception):
            raise metrics
        if isinstance(prices, Exception):
            logger.warning("Monthly prices unavailable for %s: %s", symbol, prices)
            prices = []

        history = build_pe_history(
            symbol,
            reports,
            prices,
            current_pe,
            today,
            min_points=self._min_pe_points,
            synthetic_points=self._synthetic_pe_points,
            pe_max=self._pe_max,
        )
        if not history.historical_data:
            raise NotFoundError("No historical P/E data available for this symbol")
        if history.source == DataSource.ESTIMATED:
            logger.info("Only estimated P/E history available for %s", symbol)
        return history.to_dict()

    # Dividends

    async def get_dividends(self, symbol: str, force_refresh: bool = False) -> CachedResult:
        symbol = symbol.upper()
        return await self._responder.serve(
            f"dividend:{symbol}",
            lambda: self._compute_dividends(symbol),
            self._dividends_ttl,
            source=DataSource.ESTIMATED,
            force_refresh=force_refresh,
        )

    async def _compute_dividends(self, symbol: str) -> dict:
        quote, metrics = await asyncio.gather(
            self._provider.get_quote(symbol),
            self._provider.get_metrics(symbol),
        )
        dividend_yield = metrics.metric.dividend_yield_indicated_annual
        if not dividend_yield or dividend_yield <= 0 or quote.price <= 0:
            raise NotFoundError("No dividend data available for this symbol")

        history = estimate_dividend_history(
            symbol,
            quote.price,
            dividend_yield,
            current_year=self._clock.today().year,
            rng=self._rng,
            growth_rate=self._growth_rate,
            jitter=self._jitter,
        )
        return history.to_dict()

    # Revenue growth

    async def get_revenue_growth(self, symbol: str, force_refresh: bool = False) -> CachedResult:
        symbol = symbol.upper()
        return await self._responder.serve(
            f"revenue:{symbol}",
            lambda: self._compute_revenue_growth(symbol),
            self._revenue_ttl,
            source=DataSource.FINNHUB,
            force_refresh=force_refresh,
        )

    async def _compute_revenue_growth(self, symbol: str) -> dict:
        reports = await self._provider.get_financials_reported(symbol, "quarterly")
        growth = compute_revenue_growth(symbol, reports)
        if not growth.historical_data:
            raise NotFoundError("No revenue data available for this symbol")
        return growth.to_dict()

    # S&P 500 P/E

    async def get_sp500_pe(self, force_refresh: bool = False) -> CachedResult:
        return await self._responder.serve(
            "sp500:pe",
            self._compute_sp500_pe,
            self._sp500_ttl,
            source=DataSource.FINNHUB,
            force_refresh=force_refresh,
            fallback=lambda: MarketPE(self._fallback_sp500_pe, DataSource.FALLBACK).to_dict(),
        )

    async def _compute_sp500_pe(self) -> dict:
        metrics = await self._provider.get_metrics(SP500_PROXY_SYMBOL)
        pe = metrics.metric.pe
        if pe is None or not 0 < pe < self._sp500_pe_max:
            raise UpstreamError("finnhub", f"implausible S&P 500 P/E: {pe}")
        return MarketPE(round(pe, 2), DataSource.FINNHUB).to_dict()
