"""Domain models package."""

from spreads.domain.models.enums import (
    CacheStatus,
    Timeframe,
    Sentiment,
    DataSource,
    CompoundFrequency,
    Currency,
)
from spreads.domain.models.cache import CacheEntry, CacheLookup
from spreads.domain.models.portfolio import (
    PortfolioHolding,
    PortfolioSnapshot,
    PortfolioHistory,
    DateRange,
)
from spreads.domain.models.market import (
    HistoricalPricePoint,
    Quote,
    HeatmapStock,
    ScreenerStock,
    TrendingStock,
)
from spreads.domain.models.metrics import (
    PEPoint,
    PEHistory,
    DividendPoint,
    DividendHistory,
    RevenuePoint,
    RevenueGrowth,
    MarketPE,
)
from spreads.domain.models.reddit import (
    RedditPost,
    SubredditData,
    SubredditSentiment,
    RedditSentimentData,
    TrendingRedditStock,
)
from spreads.domain.models.user import CompoundCalculation, StoredUser

__all__ = [
    "CacheStatus",
    "Timeframe",
    "Sentiment",
    "DataSource",
    "CompoundFrequency",
    "Currency",
    "CacheEntry",
    "CacheLookup",
    "PortfolioHolding",
    "PortfolioSnapshot",
    "PortfolioHistory",
    "DateRange",
    "HistoricalPricePoint",
    "Quote",
    "HeatmapStock",
    "ScreenerStock",
    "TrendingStock",
    "PEPoint",
    "PEHistory",
    "DividendPoint",
    "DividendHistory",
    "RevenuePoint",
    "RevenueGrowth",
    "MarketPE",
    "RedditPost",
    "SubredditData",
    "SubredditSentiment",
    "RedditSentimentData",
    "TrendingRedditStock",
    "CompoundCalculation",
    "StoredUser",
]
