"""Enumerations for domain models."""

from enum import Enum


class CacheStatus(str, Enum):
    """Outcome of a cache lookup."""

    FRESH = "fresh"
    STALE = "stale"
    MISS = "miss"


class Timeframe(str, Enum):
    """Portfolio history windows."""

    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    ONE_YEAR = "1Y"
    ALL = "All"


class Sentiment(str, Enum):
    """Social sentiment label."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class DataSource(str, Enum):
    """Where a served value came from."""

    FINNHUB = "finnhub"
    ESTIMATED = "estimated"
    REDDIT = "reddit"
    YAHOO = "yahoo"
    STOCKTWITS = "stocktwits"
    CACHE = "cache"
    MEMORY_CACHE = "memory-cache"
    STALE_CACHE = "stale-cache"
    FALLBACK = "fallback"


class CompoundFrequency(str, Enum):
    """How often interest compounds, or deposits are made, per year."""

    DAILY = "daily"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi-annually"
    ANNUALLY = "annually"


class Currency(str, Enum):
    """Currencies offered by the compound interest calculator."""

    USD = "USD"
    GBP = "GBP"
    EUR = "EUR"
    BTC = "BTC"
