"""Dependency injection for FastAPI."""

import logging
import random
from typing import Optional

import httpx
from fastapi import Depends, Header

from spreads.config.settings import Settings, get_settings
from spreads.core.clock import Clock, get_clock
from spreads.core.exceptions import UnauthorizedError
from spreads.providers.finnhub_provider import FinnhubProvider
from spreads.providers.reddit_provider import RedditProvider
from spreads.providers.stocktwits_provider import StockTwitsProvider
from spreads.providers.yahoo_provider import YahooQuoteProvider
from spreads.repositories.null_store import NullKeyedStore
from spreads.repositories.portfolio_repo import KeyedPortfolioRepository
from spreads.repositories.protocols import KeyedStore
from spreads.repositories.redis import RedisKeyedStore
from spreads.repositories.sqlalchemy import SqlAlchemyKeyedStore, get_session_factory
from spreads.repositories.user_repo import KeyedUserRepository
from spreads.services import (
    CacheEnvelope,
    CalculationsService,
    FetchOrchestrator,
    MarketService,
    MemoryCache,
    MetricsService,
    PointsService,
    PortfolioHistoryEngine,
    PortfolioService,
    ProfileService,
    RedditService,
    StaleOnErrorResponder,
)

logger = logging.getLogger(__name__)

# Process-wide state (replaced via dependency_overrides in tests)
_store: Optional[KeyedStore] = None
_memory: Optional[MemoryCache] = None
_http_client: Optional[httpx.AsyncClient] = None


def build_store(settings: Settings, clock: Clock) -> KeyedStore:
    """Redis when a redis URL is configured, else a SQL database, else nothing."""
    redis_store = RedisKeyedStore(settings.kv_url, settings.kv_token)
    if redis_store.is_available():
        logger.info("Using Redis keyed store")
        return redis_store
    if settings.kv_url:
        logger.warning("Ignoring KV URL without a redis://, rediss:// or unix:// scheme")
    if settings.database_url:
        logger.info("Using SQL keyed store")
        return SqlAlchemyKeyedStore(get_session_factory(), clock=clock)
    logger.warning("No keyed store configured; caching is memory-only and user data is not kept")
    return NullKeyedStore()


def get_app_settings() -> Settings:
    return get_settings()


def get_app_clock() -> Clock:
    return get_clock()


def get_store() -> KeyedStore:
    global _store
    if _store is None:
        _store = build_store(get_settings(), get_clock())
    return _store


def get_memory_cache() -> MemoryCache:
    global _memory
    if _memory is None:
        _memory = MemoryCache(get_clock(), get_settings().memory_cache_ttl_seconds)
    return _memory


def get_http_client() -> httpx.AsyncClient:
    global _http_client
    if _http_client is None:
        _http_client = httpx.AsyncClient(follow_redirects=True)
    return _http_client


async def close_http_client() -> None:
    global _http_client
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None


def reset_state() -> None:
    """Drop process-wide singletons so the next request rebuilds them."""
    global _store, _memory
    _store = None
    _memory = None


# Providers


def get_finnhub_provider(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> FinnhubProvider:
    return FinnhubProvider(
        client,
        settings.finnhub_api_key,
        base_url=settings.finnhub_base_url,
        timeout=settings.upstream_timeout_seconds,
    )


def get_reddit_provider(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> RedditProvider:
    return RedditProvider(
        client,
        settings.reddit_user_agent,
        base_url=settings.reddit_base_url,
        timeout=settings.reddit_request_timeout_seconds,
    )


def get_stocktwits_provider(
    client: httpx.AsyncClient = Depends(get_http_client),
    settings: Settings = Depends(get_app_settings),
) -> StockTwitsProvider:
    return StockTwitsProvider(
        client, settings.stocktwits_url, timeout=settings.stocktwits_timeout_seconds
    )


def get_quote_board_provider(settings: Settings = Depends(get_app_settings)) -> YahooQuoteProvider:
    # matches the heatmap region timeout
    return YahooQuoteProvider(timeout_seconds=settings.upstream_timeout_seconds * 3)


# Cache layers


def get_envelope(
    store: KeyedStore = Depends(get_store),
    clock: Clock = Depends(get_app_clock),
    settings: Settings = Depends(get_app_settings),
) -> CacheEnvelope:
    return CacheEnvelope(store, clock, default_retention_seconds=settings.stale_retention_seconds)


def get_responder(
    envelope: CacheEnvelope = Depends(get_envelope),
    memory: MemoryCache = Depends(get_memory_cache),
) -> StaleOnErrorResponder:
    return StaleOnErrorResponder(envelope, memory)


# Services


def get_metrics_service(
    provider: FinnhubProvider = Depends(get_finnhub_provider),
    responder: StaleOnErrorResponder = Depends(get_responder),
    clock: Clock = Depends(get_app_clock),
    settings: Settings = Depends(get_app_settings),
) -> MetricsService:
    return MetricsService(
        provider,
        responder,
        clock,
        pe_ttl_seconds=settings.pe_ttl_seconds,
        dividends_ttl_seconds=settings.dividends_ttl_seconds,
        revenue_ttl_seconds=settings.revenue_ttl_seconds,
        sp500_pe_ttl_seconds=settings.sp500_pe_ttl_seconds,
        pe_max=settings.pe_max,
        min_pe_points=settings.min_pe_points,
        synthetic_pe_points=settings.synthetic_pe_points,
        dividend_growth_rate=settings.dividend_growth_rate,
        dividend_jitter=settings.dividend_jitter,
        fallback_sp500_pe=settings.fallback_sp500_pe,
        sp500_pe_max=settings.sp500_pe_max,
        rng=random.Random(),
    )


def get_reddit_service(
    provider: RedditProvider = Depends(get_reddit_provider),
    responder: StaleOnErrorResponder = Depends(get_responder),
    envelope: CacheEnvelope = Depends(get_envelope),
    clock: Clock = Depends(get_app_clock),
    settings: Settings = Depends(get_app_settings),
) -> RedditService:
    max_errors = settings.max_reported_errors
    return RedditService(
        provider,
        responder,
        envelope,
        clock,
        subreddit_orchestrator=FetchOrchestrator(
            batch_size=1,
            delay_seconds=settings.subreddit_delay_seconds,
            timeout_seconds=settings.reddit_request_timeout_seconds,
            max_errors=max_errors,
            name="subreddits",
        ),
        trending_orchestrator=FetchOrchestrator(
            batch_size=settings.batch_size,
            delay_seconds=settings.reddit_trending_delay_seconds,
            timeout_seconds=settings.reddit_trending_timeout_seconds,
            max_errors=max_errors,
            name="reddit-trending",
        ),
        refresh_orchestrator=FetchOrchestrator(
            batch_size=settings.batch_size,
            delay_seconds=settings.reddit_refresh_delay_seconds,
            timeout_seconds=settings.reddit_refresh_timeout_seconds,
            max_errors=max_errors,
            name="reddit-refresh",
        ),
        sentiment_ttl_seconds=settings.reddit_sentiment_ttl_seconds,
        sentiment_stale_seconds=settings.reddit_sentiment_stale_seconds,
        trending_ttl_seconds=settings.reddit_trending_ttl_seconds,
        trending_symbol_count=settings.reddit_trending_symbol_count,
    )


def get_market_service(
    financial: FinnhubProvider = Depends(get_finnhub_provider),
    quote_board: YahooQuoteProvider = Depends(get_quote_board_provider),
    trending: StockTwitsProvider = Depends(get_stocktwits_provider),
    responder: StaleOnErrorResponder = Depends(get_responder),
    envelope: CacheEnvelope = Depends(get_envelope),
    clock: Clock = Depends(get_app_clock),
    settings: Settings = Depends(get_app_settings),
) -> MarketService:
    return MarketService(
        financial,
        quote_board,
        trending,
        responder,
        envelope,
        clock,
        region_orchestrator=FetchOrchestrator(
            batch_size=settings.batch_size,
            timeout_seconds=settings.upstream_timeout_seconds * 3,
            max_errors=settings.max_reported_errors,
            name="heatmap",
        ),
        screener_orchestrator=FetchOrchestrator(
            batch_size=settings.batch_size,
            delay_seconds=settings.stocks_refresh_delay_seconds,
            timeout_seconds=settings.upstream_timeout_seconds,
            max_errors=settings.max_reported_errors,
            name="stocks-refresh",
        ),
        heatmap_ttl_seconds=settings.heatmap_ttl_seconds,
        trending_ttl_seconds=settings.trending_ttl_seconds,
        screener_ttl_seconds=settings.stocks_ttl_seconds,
        screener_max_symbols=settings.stocks_max_symbols,
    )


def get_portfolio_repo(store: KeyedStore = Depends(get_store)) -> KeyedPortfolioRepository:
    return KeyedPortfolioRepository(store)


def get_user_repo(store: KeyedStore = Depends(get_store)) -> KeyedUserRepository:
    return KeyedUserRepository(store)


def get_portfolio_service(
    repository: KeyedPortfolioRepository = Depends(get_portfolio_repo),
    envelope: CacheEnvelope = Depends(get_envelope),
) -> PortfolioService:
    return PortfolioService(repository, envelope)


def get_portfolio_history_engine(
    repository: KeyedPortfolioRepository = Depends(get_portfolio_repo),
    provider: FinnhubProvider = Depends(get_finnhub_provider),
    envelope: CacheEnvelope = Depends(get_envelope),
    clock: Clock = Depends(get_app_clock),
    settings: Settings = Depends(get_app_settings),
) -> PortfolioHistoryEngine:
    return PortfolioHistoryEngine(
        repository,
        provider,
        envelope,
        clock,
        quote_orchestrator=FetchOrchestrator(
            batch_size=settings.batch_size,
            timeout_seconds=settings.upstream_timeout_seconds,
            max_errors=settings.max_reported_errors,
            name="portfolio-quotes",
        ),
        price_orchestrator=FetchOrchestrator(
            batch_size=1,
            delay_seconds=settings.historical_price_delay_seconds,
            timeout_seconds=settings.upstream_timeout_seconds,
            max_errors=settings.max_reported_errors,
            name="portfolio-prices",
        ),
        ttl_seconds=settings.portfolio_history_ttl_seconds,
        candles_ttl_seconds=settings.candles_ttl_seconds,
    )


def get_profile_service(
    users: KeyedUserRepository = Depends(get_user_repo),
    clock: Clock = Depends(get_app_clock),
    settings: Settings = Depends(get_app_settings),
) -> ProfileService:
    return ProfileService(users, clock, username_change_days=settings.username_change_days)


def get_points_service(
    profiles: ProfileService = Depends(get_profile_service),
    users: KeyedUserRepository = Depends(get_user_repo),
    clock: Clock = Depends(get_app_clock),
) -> PointsService:
    return PointsService(profiles, users, clock)


def get_calculations_service(
    profiles: ProfileService = Depends(get_profile_service),
    users: KeyedUserRepository = Depends(get_user_repo),
    clock: Clock = Depends(get_app_clock),
) -> CalculationsService:
    return CalculationsService(profiles, users, clock)


# Caller identity


def get_identity(x_user_email: Optional[str] = Header(default=None)) -> str:
    """User identity established upstream by the session layer."""
    if not x_user_email or not x_user_email.strip():
        raise UnauthorizedError("Missing user identity")
    return x_user_email.strip()


def require_cron(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
) -> None:
    if settings.cron_secret and authorization != f"Bearer {settings.cron_secret}":
        raise UnauthorizedError()
