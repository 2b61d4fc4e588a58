"""
Pytest configuration and fixtures for the Spreads backend tests.

This module provides:
- A controllable fake clock
- In-memory SQLite keyed store fixtures
- Deterministic fake upstream providers
- Cache layer and service fixtures
- A FastAPI test client wired to the fakes
"""

import asyncio
from datetime import date, datetime, timedelta
from typing import Optional

import pytest
import pytz
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker

from spreads.api import deps
from spreads.config.settings import Settings, reset_settings, set_settings
from spreads.core.clock import Clock
from spreads.core.exceptions import UpstreamError
from spreads.domain.models import HistoricalPricePoint, Quote
from spreads.main import app
from spreads.providers.schemas import (
    FinancialReport,
    FinnhubMetrics,
    RedditPostData,
    StockTwitsSymbol,
    YahooQuote,
)
from spreads.repositories.portfolio_repo import KeyedPortfolioRepository
from spreads.repositories.sqlalchemy import Base, SqlAlchemyKeyedStore
# Import ORM models to register them with Base before creating tables
from spreads.repositories.sqlalchemy import orm_models  # noqa: F401
from spreads.repositories.user_repo import KeyedUserRepository
from spreads.services import (
    CacheEnvelope,
    FetchOrchestrator,
    MemoryCache,
    StaleOnErrorResponder,
)


# =============================================================================
# TIME HELPERS
# =============================================================================


class FakeClock(Clock):
    """Clock frozen at a given UTC instant until advanced."""

    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0, days: int = 0) -> None:
        self._now = self._now + timedelta(seconds=seconds, days=days)

    def set(self, now: datetime) -> None:
        self._now = now


def utc_datetime(year: int, month: int, day: int, hour: int = 15, minute: int = 0) -> datetime:
    return pytz.utc.localize(datetime(year, month, day, hour, minute))


@pytest.fixture
def fixed_now() -> datetime:
    """Friday 2024-06-14, 11:00 US/Eastern."""
    return utc_datetime(2024, 6, 14, 15, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


def run(coro):
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run(coro)


async def no_sleep(seconds: float) -> None:
    return None


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(test_engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def store(session_factory, clock) -> SqlAlchemyKeyedStore:
    return SqlAlchemyKeyedStore(session_factory, clock=clock)


@pytest.fixture
def unavailable_store(session_factory, clock) -> SqlAlchemyKeyedStore:
    return SqlAlchemyKeyedStore(session_factory, clock=clock, available=False)


@pytest.fixture
def portfolio_repo(store) -> KeyedPortfolioRepository:
    return KeyedPortfolioRepository(store)


@pytest.fixture
def user_repo(store) -> KeyedUserRepository:
    return KeyedUserRepository(store)


# =============================================================================
# CACHE FIXTURES
# =============================================================================


@pytest.fixture
def envelope(store, clock) -> CacheEnvelope:
    return CacheEnvelope(store, clock)


@pytest.fixture
def memory(clock) -> MemoryCache:
    return MemoryCache(clock, ttl_seconds=300)


@pytest.fixture
def responder(envelope, memory) -> StaleOnErrorResponder:
    return StaleOnErrorResponder(envelope, memory)


def make_orchestrator(batch_size: int = 5, timeout_seconds: float = 5.0, name: str = "test"):
    """Orchestrator that never actually sleeps between batches."""
    return FetchOrchestrator(
        batch_size=batch_size,
        delay_seconds=0.0,
        timeout_seconds=timeout_seconds,
        sleep=no_sleep,
        name=name,
    )


# =============================================================================
# FAKE PROVIDERS
# =============================================================================


class FakeFinancialProvider:
    """
    Deterministic Finnhub stand-in.

    Every lookup is counted in ``calls``; symbols in ``failing`` raise
    UpstreamError from every method.
    """

    def __init__(
        self,
        quotes: Optional[dict[str, float]] = None,
        metrics: Optional[dict[str, dict]] = None,
        candles: Optional[dict[str, dict[date, float]]] = None,
        reports: Optional[dict[tuple[str, str], list[dict]]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.quotes = quotes or {}
        self.metrics = metrics or {}
        self.candles = candles or {}
        self.reports = reports or {}
        self.failing = failing or set()
        self.calls: list[tuple] = []

    def _check(self, method: str, symbol: str) -> None:
        self.calls.append((method, symbol))
        if symbol in self.failing:
            raise UpstreamError("finnhub", f"HTTP 503 for {symbol}")

    async def get_quote(self, symbol: str) -> Quote:
        self._check("quote", symbol)
        return Quote(symbol=symbol, price=self.quotes.get(symbol, 0.0), change=1.0, change_percent=0.5)

    async def get_metrics(self, symbol: str) -> FinnhubMetrics:
        self._check("metrics", symbol)
        return FinnhubMetrics.model_validate({"metric": self.metrics.get(symbol, {})})

    async def get_candles(
        self, symbol: str, start: date, end: date, resolution: str = "D"
    ) -> list[HistoricalPricePoint]:
        self._check("candles", symbol)
        closes = self.candles.get(symbol, {})
        return [
            HistoricalPricePoint(date=d, close=c, open=c, high=c, low=c)
            for d, c in sorted(closes.items())
            if start <= d <= end
        ]

    async def get_financials_reported(self, symbol: str, freq: str = "quarterly") -> list:
        self._check(f"financials-{freq}", symbol)
        return [FinancialReport.model_validate(r) for r in self.reports.get((symbol, freq), [])]

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.calls if m == method)


class FakeSocialProvider:
    """Subreddit search returning canned posts per subreddit."""

    def __init__(
        self,
        posts: Optional[dict[str, list[dict]]] = None,
        activity: Optional[dict[str, int]] = None,
        failing: Optional[set[str]] = None,
    ):
        self.posts = posts or {}
        self.activity = activity or {}
        self.failing = failing or set()
        self.searches: list[tuple[str, str, str]] = []

    async def search_posts(self, subreddit: str, symbol: str, time_filter: str) -> list:
        self.searches.append((subreddit, symbol, time_filter))
        if subreddit in self.failing or symbol in self.failing:
            raise UpstreamError("reddit", "HTTP 429")
        return [RedditPostData.model_validate(p) for p in self.posts.get(subreddit, [])]

    async def count_recent_posts(self, subreddit: str, time_filter: str) -> int:
        if subreddit not in self.activity:
            raise UpstreamError("reddit", "HTTP 429")
        return self.activity[subreddit]


class FakeTrendingProvider:
    def __init__(self, symbols: Optional[list[tuple[str, int]]] = None, fail: bool = False):
        self.symbols = symbols or []
        self.fail = fail

    async def get_trending(self) -> list[StockTwitsSymbol]:
        if self.fail:
            raise UpstreamError("stocktwits", "timed out")
        return [StockTwitsSymbol(symbol=s, watchlist_count=c) for s, c in self.symbols]


class FakeQuoteBoard:
    def __init__(self, prices: Optional[dict[str, float]] = None, fail: bool = False):
        self.prices = prices or {}
        self.fail = fail
        self.requests: list[list[str]] = []

    async def get_quotes(self, symbols: list[str]) -> list[YahooQuote]:
        self.requests.append(list(symbols))
        if self.fail:
            raise UpstreamError("yahoo", "connection reset")
        return [
            YahooQuote.model_validate(
                {"symbol": s, "shortName": f"{s} Corp", "regularMarketPrice": self.prices[s],
                 "regularMarketChange": 1.0, "regularMarketChangePercent": 0.5, "marketCap": 1e9}
            )
            for s in symbols
            if s in self.prices
        ]


def reddit_post(title: str, score: int = 10, comments: int = 2, subreddit: str = "stocks",
                selftext: str = "") -> dict:
    return {
        "title": title,
        "selftext": selftext,
        "score": score,
        "num_comments": comments,
        "subreddit": subreddit,
        "permalink": f"/r/{subreddit}/comments/{abs(hash(title)) % 100000}",
        "created_utc": 1718370000.0,
    }


def holding_dict(
    symbol: str = "AAPL",
    shares: float = 10,
    price: float = 100.0,
    purchase_date: str = "2024-01-01",
    holding_id: str = "h1",
) -> dict:
    return {
        "id": holding_id,
        "symbol": symbol,
        "name": f"{symbol} Inc.",
        "shares": shares,
        "purchasePrice": price,
        "purchaseDate": purchase_date,
        "totalCost": shares * price,
    }


def calculation_dict(name: str = "Retirement", **overrides) -> dict:
    data = {
        "name": name,
        "currency": "USD",
        "initialBalance": 10000,
        "annualReturn": 10,
        "compoundFrequency": "monthly",
        "years": 10,
        "months": 0,
        "depositAmount": 500,
        "depositFrequency": "monthly",
    }
    data.update(overrides)
    return data


@pytest.fixture
def financial() -> FakeFinancialProvider:
    return FakeFinancialProvider()


@pytest.fixture
def social() -> FakeSocialProvider:
    return FakeSocialProvider()


@pytest.fixture
def trending() -> FakeTrendingProvider:
    return FakeTrendingProvider()


@pytest.fixture
def quote_board() -> FakeQuoteBoard:
    return FakeQuoteBoard()


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no real store, no cron secret and no inter-batch delays."""
    return Settings(
        kv_url=None,
        kv_token=None,
        database_url=None,
        cron_secret=None,
        reddit_refresh_delay_seconds=0,
        reddit_trending_delay_seconds=0,
        subreddit_delay_seconds=0,
        stocks_refresh_delay_seconds=0,
        historical_price_delay_seconds=0,
    )


@pytest.fixture
def client(test_settings, store, clock, memory, financial, social, trending, quote_board):
    """Provide FastAPI test client wired to the in-memory store and fake providers."""
    set_settings(test_settings)
    deps.reset_state()

    app.dependency_overrides[deps.get_app_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_store] = lambda: store
    app.dependency_overrides[deps.get_app_clock] = lambda: clock
    app.dependency_overrides[deps.get_memory_cache] = lambda: memory
    app.dependency_overrides[deps.get_finnhub_provider] = lambda: financial
    app.dependency_overrides[deps.get_reddit_provider] = lambda: social
    app.dependency_overrides[deps.get_stocktwits_provider] = lambda: trending
    app.dependency_overrides[deps.get_quote_board_provider] = lambda: quote_board
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_settings()
