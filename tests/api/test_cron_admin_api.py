"""
API tests for cache warmers and admin endpoints.

Tests cover:
- Cron secret enforcement
- Reddit and screener refresh results
- Admin user listing
- Cache key and prefix purges
"""

import pytest
from fastapi.testclient import TestClient

from spreads.config.settings import Settings

AUTH = {"Authorization": "Bearer s3cret"}


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        kv_url=None,
        kv_token=None,
        database_url=None,
        cron_secret="s3cret",
        reddit_refresh_delay_seconds=0,
        reddit_trending_delay_seconds=0,
        subreddit_delay_seconds=0,
        stocks_refresh_delay_seconds=0,
        historical_price_delay_seconds=0,
    )


# =============================================================================
# AUTH
# =============================================================================


class TestCronAuth:
    @pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer wrong"}, {"Authorization": "s3cret"}])
    def test_rejected_without_secret(self, client: TestClient, headers):
        assert client.post("/cron/refresh-stocks", headers=headers).status_code == 401
        assert client.get("/admin/users", headers=headers).status_code == 401

    def test_open_when_no_secret_configured(self, client: TestClient, test_settings):
        test_settings.cron_secret = None

        assert client.get("/admin/users").status_code == 200


# =============================================================================
# CRON
# =============================================================================


class TestRefreshStocks:
    def test_refresh_then_list(self, client: TestClient, financial):
        financial.quotes = {"AAPL": 190.0, "MSFT": 410.0}

        response = client.post("/cron/refresh-stocks", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["stockCount"] == 2
        assert data["stats"]["success"] == 2
        assert data["stats"]["errors"] == data["stats"]["total"] - 2
        assert len(data["errors"]) == 10

        stocks = client.get("/stocks").json()
        assert [s["symbol"] for s in stocks["stocks"]] == ["MSFT", "AAPL"]
        assert stocks["servedFrom"] == "cache"


class TestRefreshReddit:
    def test_refresh_all_symbols(self, client: TestClient, social):
        response = client.post("/cron/refresh-reddit", headers=AUTH)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["errors"] == []
        assert data["stats"]["total"] == data["stats"]["success"]
        assert "stockCount" not in data

        cached = client.get("/reddit/sentiment/NVDA").json()
        assert cached["cached"] is True


# =============================================================================
# ADMIN
# =============================================================================


class TestAdminUsers:
    def test_lists_known_users(self, client: TestClient):
        client.get("/profile", headers={"X-User-Email": "alice@example.com"})
        client.get("/profile", headers={"X-User-Email": "bob@example.com"})

        data = client.get("/admin/users", headers=AUTH).json()

        assert data["count"] == 2
        assert [u["email"] for u in data["users"]] == ["alice@example.com", "bob@example.com"]


class TestCachePurge:
    def test_delete_single_key(self, client: TestClient, financial):
        financial.metrics = {"SPY": {"peTTM": 22.0}}
        client.get("/metrics/sp500-pe")

        response = client.delete("/admin/cache/sp500:pe", headers=AUTH)

        assert response.json() == {"removed": 1, "memoryRemoved": 0}
        assert client.get("/metrics/sp500-pe").json()["cached"] is False

    def test_delete_missing_key(self, client: TestClient):
        response = client.delete("/admin/cache/nothing:here", headers=AUTH)

        assert response.json() == {"removed": 0, "memoryRemoved": 0}

    def test_purge_prefix_clears_store_and_memory(self, client: TestClient):
        client.get("/reddit/sentiment/GME")
        client.get("/reddit/sentiment/AMC")

        response = client.delete("/admin/cache", params={"prefix": "reddit:sentiment:"}, headers=AUTH)

        assert response.json() == {"removed": 2, "memoryRemoved": 2}
        assert client.get("/reddit/sentiment/GME").json()["cached"] is False

    def test_prefix_required(self, client: TestClient):
        response = client.delete("/admin/cache", headers=AUTH)

        assert response.status_code == 400
