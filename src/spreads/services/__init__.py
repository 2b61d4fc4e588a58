"""Service layer - caching, orchestration and business rules."""

from spreads.services.cache_envelope import CacheEnvelope
from spreads.services.memory_cache import MemoryCache
from spreads.services.fetch_orchestrator import FetchOrchestrator
from spreads.services.stale_responder import StaleOnErrorResponder
from spreads.services.metrics_service import MetricsService
from spreads.services.reddit_service import RedditService
from spreads.services.market_service import MarketService
from spreads.services.portfolio_service import PortfolioService
from spreads.services.portfolio_history import PortfolioHistoryEngine
from spreads.services.profile_service import ProfileService
from spreads.services.points_service import PointsService
from spreads.services.calculations_service import CalculationsService

__all__ = [
    "CacheEnvelope",
    "MemoryCache",
    "FetchOrchestrator",
    "StaleOnErrorResponder",
    "MetricsService",
    "RedditService",
    "MarketService",
    "PortfolioService",
    "PortfolioHistoryEngine",
    "ProfileService",
    "PointsService",
    "CalculationsService",
]
