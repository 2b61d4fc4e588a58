"""API routers package."""

from spreads.api.routers.metrics import router as metrics_router
from spreads.api.routers.reddit import router as reddit_router
from spreads.api.routers.market import router as market_router
from spreads.api.routers.portfolio import router as portfolio_router
from spreads.api.routers.profile import router as profile_router
from spreads.api.routers.points import router as points_router
from spreads.api.routers.calculations import router as calculations_router
from spreads.api.routers.cron import router as cron_router
from spreads.api.routers.admin import router as admin_router

__all__ = [
    "metrics_router",
    "reddit_router",
    "market_router",
    "portfolio_router",
    "profile_router",
    "points_router",
    "calculations_router",
    "cron_router",
    "admin_router",
]
