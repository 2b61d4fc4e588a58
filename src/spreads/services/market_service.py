"""Heatmap, StockTwits trending, screener list and single-day prices."""

import asyncio
import logging
from datetime import date
from typing import Mapping, Optional, Sequence

from spreads.config.universe import (
    FALLBACK_SCREENER,
    FALLBACK_TRENDING,
    HEATMAP_REGIONS,
    SCREENER_SYMBOLS,
    STOCK_METADATA,
)
from spreads.core.clock import Clock
from spreads.core.exceptions import NotFoundError, UpstreamError
from spreads.domain.models import DataSource, HeatmapStock, ScreenerStock, TrendingStock
from spreads.domain.views import BatchReport, CachedResult
from spreads.providers.protocols import (
    FinancialDataProvider,
    QuoteBoardProvider,
    TrendingProvider,
)
from spreads.services.cache_envelope import CacheEnvelope
from spreads.services.fetch_orchestrator import FetchOrchestrator
from spreads.services.stale_responder import StaleOnErrorResponder

logger = logging.getLogger(__name__)

HEATMAP_KEY = "stocks:heatmap:global"
TRENDING_KEY = "stocktwits:trending"
SCREENER_KEY = "stocks:sp500-nasdaq"
TRENDING_LIMIT = 10


class MarketService:
    def __init__(
        self,
        financial: FinancialDataProvider,
        quote_board: QuoteBoardProvider,
        trending: TrendingProvider,
        responder: StaleOnErrorResponder,
        envelope: CacheEnvelope,
        clock: Clock,
        region_orchestrator: FetchOrchestrator,
        screener_orchestrator: FetchOrchestrator,
        heatmap_ttl_seconds: int = 600,
        trending_ttl_seconds: int = 300,
        screener_ttl_seconds: int = 3600,
        screener_max_symbols: int = 100,
        regions: Mapping[str, tuple] = HEATMAP_REGIONS,
        screener_symbols: Sequence[str] = SCREENER_SYMBOLS,
    ):
        self._financial = financial
        self._quote_board = quote_board
        self._trending = trending
        self._responder = responder
        self._envelope = envelope
        self._clock = clock
        self._region_orchestrator = region_orchestrator
        self._screener_orchestrator = screener_orchestrator
        self._heatmap_ttl = heatmap_ttl_seconds
        self._trending_ttl = trending_ttl_seconds
        self._screener_ttl = screener_ttl_seconds
        self._screener_max = screener_max_symbols
        self._regions = dict(regions)
        self._screener_symbols = tuple(screener_symbols)

    # Heatmap

    async def fetch_region(self, code: str) -> list[HeatmapStock]:
        _, exchange, symbols = self._regions[code]
        quotes = await self._quote_board.get_quotes(list(symbols))
        stocks = []
        for q in quotes:
            if not q.regular_market_price:
                continue
            stocks.append(
                HeatmapStock(
                    symbol=q.symbol,
                    name=q.short_name or q.long_name or q.symbol,
                    price=q.regular_market_price,
                    change=q.regular_market_change or 0.0,
                    changes_percentage=q.regular_market_change_percent or 0.0,
                    market_cap=q.market_cap or 0.0,
                    region=code,
                    exchange=q.exchange or exchange,
                    sector=q.sector or "Other",
                    industry=q.industry or "",
                )
            )
        return stocks

    async def compute_heatmap(self) -> dict:
        report = await self._region_orchestrator.run(self._regions, self.fetch_region)
        stocks = [s.to_dict() for r in report.results if r.success for s in r.value]
        if not stocks:
            raise UpstreamError("yahoo", "no heatmap quotes returned")
        return {
            "stocks": stocks,
            "regions": {code: name for code, (name, _, _) in self._regions.items()},
            "timestamp": self._clock.now().isoformat(),
        }

    async def get_heatmap(self, force_refresh: bool = False) -> CachedResult:
        return await self._responder.serve(
            HEATMAP_KEY,
            self.compute_heatmap,
            self._heatmap_ttl,
            source=DataSource.YAHOO,
            force_refresh=force_refresh,
            use_memory=True,
        )

    # StockTwits trending

    async def compute_trending(self) -> dict:
        symbols = await self._trending.get_trending()
        return {
            "trending": [
                TrendingStock(symbol=s.symbol, watchlist_count=s.watchlist_count).to_dict()
                for s in symbols[:TRENDING_LIMIT]
            ]
        }

    @staticmethod
    def fallback_trending() -> dict:
        return {
            "trending": [
                TrendingStock(symbol=sym, watchlist_count=count, sentiment=sentiment).to_dict()
                for sym, count, sentiment in FALLBACK_TRENDING
            ]
        }

    async def get_trending(self) -> CachedResult:
        return await self._responder.serve(
            TRENDING_KEY,
            self.compute_trending,
            self._trending_ttl,
            source=DataSource.STOCKTWITS,
            use_memory=True,
            fallback=self.fallback_trending,
            is_usable=lambda payload: bool(payload["trending"]),
        )

    # Screener

    @staticmethod
    def fallback_screener() -> dict:
        stocks = []
        for row in FALLBACK_SCREENER:
            symbol, price, change, percent, market_cap, pe, eps, dividend_yield, exchange = row[:9]
            day_high, day_low, year_high, year_low = row[9:]
            name, sector, industry = STOCK_METADATA.get(symbol, (symbol, "Other", ""))
            stocks.append(
                ScreenerStock(
                    symbol=symbol,
                    name=name,
                    price=price,
                    change=change,
                    changes_percentage=percent,
                    market_cap=market_cap,
                    pe=pe,
                    eps=eps,
                    dividend_yield=dividend_yield,
                    sector=sector,
                    industry=industry,
                    day_high=day_high,
                    day_low=day_low,
                    year_high=year_high,
                    year_low=year_low,
                    exchange=exchange,
                ).to_dict()
            )
        stocks.sort(key=lambda s: s["marketCap"], reverse=True)
        return {"stocks": stocks}

    def get_screener(self) -> CachedResult:
        """Serve the warmed screener list, else a static list; never calls upstream."""
        lookup = self._envelope.read(SCREENER_KEY)
        if lookup.is_present:
            return CachedResult(
                lookup.value,
                cached=True,
                source=DataSource.CACHE if lookup.is_fresh else DataSource.STALE_CACHE,
                cache_age=lookup.age_seconds,
            )
        return CachedResult(
            self.fallback_screener(),
            cached=False,
            source=DataSource.FALLBACK,
            error="stock list not warmed yet",
        )

    async def fetch_screener_stock(self, symbol: str) -> ScreenerStock:
        quote, metrics = await asyncio.gather(
            self._financial.get_quote(symbol),
            self._financial.get_metrics(symbol),
            return_exceptions=True,
        )
        if isinstance(quote, Exception):
            raise quote
        if not quote.price:
            raise NotFoundError("Quote", symbol)
        values = None if isinstance(metrics, Exception) else metrics.metric

        name, sector, industry = STOCK_METADATA.get(symbol, (symbol, "Other", ""))
        if values is not None and values.market_capitalization:
            market_cap = values.market_capitalization * 1e6
        else:
            market_cap = quote.price * 1e9
        return ScreenerStock(
            symbol=symbol,
            name=name,
            price=quote.price,
            change=quote.change,
            changes_percentage=quote.change_percent,
            market_cap=market_cap,
            pe=values.pe if values else None,
            eps=values.eps if values else None,
            dividend_yield=values.dividend_yield_indicated_annual if values else None,
            sector=sector,
            industry=industry,
            day_high=quote.high,
            day_low=quote.low,
            year_high=values.week_52_high if values else None,
            year_low=values.week_52_low if values else None,
        )

    async def refresh_screener(self, symbols: Optional[Sequence[str]] = None) -> BatchReport:
        """Fetch the screener universe and overwrite the cached list."""
        symbols = list(symbols or self._screener_symbols)[: self._screener_max]
        report = await self._screener_orchestrator.run(symbols, self.fetch_screener_stock)
        stocks = sorted(
            (r.value for r in report.results if r.success),
            key=lambda s: s.market_cap,
            reverse=True,
        )
        if stocks:
            self._envelope.write(
                SCREENER_KEY,
                {"stocks": [s.to_dict() for s in stocks], "timestamp": self._clock.now().isoformat()},
                self._screener_ttl,
            )
        else:
            logger.warning("Screener refresh produced no stocks; keeping previous list")
        return report

    # Single-day price

    async def get_historical_price(self, symbol: str, day: date) -> dict:
        symbol = symbol.upper()
        candles = await self._financial.get_candles(symbol, day, day)
        if not candles:
            raise NotFoundError(f"No price data for {symbol} on {day.isoformat()}")
        point = candles[-1]
        return {
            "symbol": symbol,
            "date": day.isoformat(),
            "price": point.close,
            "open": point.open,
            "high": point.high,
            "low": point.low,
            "available": True,
            "source": DataSource.FINNHUB.value,
        }
