"""Market data domain models."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class HistoricalPricePoint:
    """One daily (or monthly) candle."""

    date: date
    close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None


@dataclass(frozen=True)
class Quote:
    """Real-time quote for a symbol."""

    symbol: str
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    high: Optional[float] = None
    low: Optional[float] = None
    open: Optional[float] = None
    prev_close: Optional[float] = None


@dataclass(frozen=True)
class HeatmapStock:
    """One tile on the global heatmap."""

    symbol: str
    name: str
    price: float
    change: float
    changes_percentage: float
    market_cap: float
    region: str
    exchange: str
    sector: str = "Other"
    industry: str = ""

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changesPercentage": self.changes_percentage,
            "marketCap": self.market_cap,
            "sector": self.sector,
            "industry": self.industry,
            "region": self.region,
            "exchange": self.exchange,
        }


@dataclass(frozen=True)
class ScreenerStock:
    """Row in the stock screener list."""

    symbol: str
    name: str
    price: float
    change: float
    changes_percentage: float
    market_cap: float
    pe: Optional[float]
    eps: Optional[float]
    dividend_yield: Optional[float]
    sector: str
    industry: str
    day_high: Optional[float] = None
    day_low: Optional[float] = None
    year_high: Optional[float] = None
    year_low: Optional[float] = None
    exchange: str = "US"

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": self.price,
            "change": self.change,
            "changesPercentage": self.changes_percentage,
            "marketCap": self.market_cap,
            "pe": self.pe,
            "eps": self.eps,
            "dividendYield": self.dividend_yield,
            "sector": self.sector,
            "industry": self.industry,
            "exchange": self.exchange,
            "dayHigh": self.day_high,
            "dayLow": self.day_low,
            "yearHigh": self.year_high,
            "yearLow": self.year_low,
        }


@dataclass(frozen=True)
class TrendingStock:
    """StockTwits trending symbol."""

    symbol: str
    watchlist_count: int
    sentiment: str = "trending"

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "watchlistCount": self.watchlist_count,
            "sentiment": self.sentiment,
        }
