"""Application settings and configuration."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", populate_by_name=True
    )

    app_name: str = "Spreads"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Keyed store (a redis://, rediss:// or unix:// URL, or a SQL database for local mode)
    kv_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("KV_URL", "REDIS_URL")
    )
    kv_token: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("KV_TOKEN", "REDIS_TOKEN")
    )
    database_url: Optional[str] = None

    # Upstream providers
    finnhub_api_key: Optional[str] = None
    finnhub_base_url: str = "https://finnhub.io/api/v1"
    reddit_base_url: str = "https://www.reddit.com"
    reddit_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    stocktwits_url: str = "https://api.stocktwits.com/api/2/trending/symbols.json"

    # Cache TTLs (seconds)
    heatmap_ttl_seconds: int = 600
    reddit_sentiment_ttl_seconds: int = 7200
    reddit_sentiment_stale_seconds: int = 14400
    reddit_trending_ttl_seconds: int = 7200
    dividends_ttl_seconds: int = 86400
    pe_ttl_seconds: int = 86400
    revenue_ttl_seconds: int = 86400
    sp500_pe_ttl_seconds: int = 3600
    portfolio_history_ttl_seconds: int = 3600
    trending_ttl_seconds: int = 300
    stocks_ttl_seconds: int = 3600
    candles_ttl_seconds: int = 604800
    memory_cache_ttl_seconds: int = 300
    stale_retention_seconds: int = 604800

    # Upstream orchestration
    batch_size: int = 5
    reddit_refresh_delay_seconds: float = 3.0
    reddit_refresh_timeout_seconds: float = 30.0
    reddit_trending_delay_seconds: float = 2.0
    reddit_trending_timeout_seconds: float = 8.0
    reddit_trending_symbol_count: int = 20
    subreddit_delay_seconds: float = 0.5
    reddit_request_timeout_seconds: float = 10.0
    stocks_refresh_delay_seconds: float = 12.0
    stocks_max_symbols: int = 100
    historical_price_delay_seconds: float = 1.0
    stocktwits_timeout_seconds: float = 5.0
    upstream_timeout_seconds: float = 10.0
    max_reported_errors: int = 10

    # Calculation constants and fallbacks
    fallback_sp500_pe: float = 24.5
    sp500_pe_max: float = 100.0
    pe_max: float = 500.0
    min_pe_points: int = 4
    synthetic_pe_points: int = 20
    dividend_growth_rate: float = 0.05
    dividend_jitter: float = 0.02
    username_change_days: int = 7

    # Cron warmers
    cron_secret: Optional[str] = None


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
