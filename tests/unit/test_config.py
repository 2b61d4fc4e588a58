"""
Unit tests for configuration, logging setup and store selection.

Tests cover:
- Environment variable aliases for the keyed store
- Store backend selection from settings
- Log level resolution and library logger levels
"""

import logging

from spreads.api.deps import build_store
from spreads.config.logging_config import resolve_level, setup_logging
from spreads.config.settings import Settings, reset_settings, set_settings
from spreads.repositories.null_store import NullKeyedStore
from spreads.repositories.redis import RedisKeyedStore
from spreads.repositories.sqlalchemy import SqlAlchemyKeyedStore, reset_database


class TestSettings:
    def test_kv_credentials_from_env(self, monkeypatch):
        monkeypatch.setenv("KV_URL", "rediss://kv.example.com:6379")
        monkeypatch.setenv("KV_TOKEN", "tok")

        settings = Settings()

        assert settings.kv_url == "rediss://kv.example.com:6379"
        assert settings.kv_token == "tok"

    def test_redis_alias(self, monkeypatch):
        monkeypatch.delenv("KV_URL", raising=False)
        monkeypatch.setenv("REDIS_URL", "redis://localhost:6379")

        assert Settings().kv_url == "redis://localhost:6379"

    def test_defaults(self):
        settings = Settings(kv_url=None, kv_token=None)

        assert settings.reddit_sentiment_ttl_seconds == 7200
        assert settings.username_change_days == 7
        assert settings.stale_retention_seconds == 604800


class TestBuildStore:
    def test_redis_when_credentials_present(self, clock):
        settings = Settings(kv_url="rediss://kv.example.com", kv_token="tok")

        assert isinstance(build_store(settings, clock), RedisKeyedStore)

    def test_rest_endpoint_url_is_not_used_as_redis(self, clock):
        settings = Settings(
            kv_url="https://example-kv.upstash.io", kv_token="tok", database_url=None
        )

        assert isinstance(build_store(settings, clock), NullKeyedStore)

    def test_sql_when_database_configured(self, clock, tmp_path):
        settings = Settings(
            kv_url=None, kv_token=None, database_url=f"sqlite:///{tmp_path / 'kv.db'}"
        )
        set_settings(settings)
        try:
            assert isinstance(build_store(settings, clock), SqlAlchemyKeyedStore)
        finally:
            reset_database()
            reset_settings()

    def test_null_store_otherwise(self, clock):
        settings = Settings(kv_url=None, kv_token=None, database_url=None)

        store = build_store(settings, clock)

        assert isinstance(store, NullKeyedStore)
        assert store.is_available() is False


class TestLogging:
    def test_resolve_level(self):
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level("WARNING") == logging.WARNING
        assert resolve_level("chatty") == logging.INFO

    def test_library_loggers_quieted(self):
        setup_logging(Settings(log_level="DEBUG"))

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
