"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from spreads import __version__
from spreads.api.deps import close_http_client, get_store
from spreads.api.routers import (
    admin_router,
    calculations_router,
    cron_router,
    market_router,
    metrics_router,
    points_router,
    portfolio_router,
    profile_router,
    reddit_router,
)
from spreads.config.logging_config import setup_logging
from spreads.config.settings import get_settings
from spreads.core.exceptions import AppError
from spreads.repositories.protocols import KeyedStore
from spreads.repositories.sqlalchemy.database import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    if get_settings().database_url:
        init_db()
    yield
    # Shutdown
    await close_http_client()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Cached market metrics, social sentiment and portfolio history",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(metrics_router)
app.include_router(reddit_router)
app.include_router(market_router)
app.include_router(portfolio_router)
app.include_router(profile_router)
app.include_router(points_router)
app.include_router(calculations_router)
app.include_router(cron_router)
app.include_router(admin_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    content = {"error": exc.code, "message": exc.message}
    days_remaining = getattr(exc, "days_remaining", None)
    if days_remaining:
        content["daysRemaining"] = days_remaining
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": "Internal server error"},
    )


@app.get("/health")
def health_check(store: KeyedStore = Depends(get_store)) -> dict:
    """Health check endpoint."""
    return {"status": "healthy", "store": store.is_available()}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
