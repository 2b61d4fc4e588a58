"""Provider protocols."""

from datetime import date
from typing import Protocol

from spreads.domain.models import HistoricalPricePoint, Quote
from spreads.providers.schemas import (
    FinancialReport,
    FinnhubMetrics,
    RedditPostData,
    StockTwitsSymbol,
    YahooQuote,
)


class FinancialDataProvider(Protocol):
    """
    Quotes, fundamentals and candles (Finnhub).

    Implementations raise ``UpstreamError`` on transport, HTTP or schema failures.
    """

    async def get_quote(self, symbol: str) -> Quote:
        ...

    async def get_metrics(self, symbol: str) -> FinnhubMetrics:
        ...

    async def get_candles(
        self, symbol: str, start: date, end: date, resolution: str = "D"
    ) -> list[HistoricalPricePoint]:
        """Candles in ascending date order; empty when the upstream has no data."""
        ...

    async def get_financials_reported(
        self, symbol: str, freq: str = "quarterly"
    ) -> list[FinancialReport]:
        ...


class SocialPostsProvider(Protocol):
    """Subreddit search (Reddit)."""

    async def search_posts(
        self, subreddit: str, symbol: str, time_filter: str
    ) -> list[RedditPostData]:
        """Posts in subreddit matching the symbol query, newest first."""
        ...

    async def count_recent_posts(self, subreddit: str, time_filter: str) -> int:
        """Size of the subreddit's newest listing, used as its activity level."""
        ...


class TrendingProvider(Protocol):
    """Trending symbol list (StockTwits)."""

    async def get_trending(self) -> list[StockTwitsSymbol]:
        ...


class QuoteBoardProvider(Protocol):
    """Bulk quotes across global exchanges (Yahoo Finance)."""

    async def get_quotes(self, symbols: list[str]) -> list[YahooQuote]:
        ...
