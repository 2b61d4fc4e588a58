"""
API tests for Reddit and market overview endpoints.

Tests cover:
- Reddit sentiment and trending
- Global heatmap success and upstream failure
- Screener list read path
- StockTwits trending
"""

from fastapi.testclient import TestClient

from tests.conftest import reddit_post


# =============================================================================
# REDDIT
# =============================================================================


class TestRedditAPI:
    def test_sentiment(self, client: TestClient, social):
        social.posts = {"wallstreetbets": [reddit_post("GME calls printing", score=300, subreddit="wallstreetbets")]}

        response = client.get("/reddit/sentiment/gme")

        assert response.status_code == 200
        data = response.json()
        assert data["symbol"] == "GME"
        assert data["data24h"]["totalMentions"] == 1
        assert data["data7d"]["period"] == "7d"
        assert data["cached"] is False

    def test_sentiment_served_from_cache(self, client: TestClient, social):
        client.get("/reddit/sentiment/GME")
        searches = len(social.searches)

        data = client.get("/reddit/sentiment/GME").json()

        assert data["cached"] is True
        assert len(social.searches) == searches

    def test_trending_without_mentions_uses_static_list(self, client: TestClient):
        data = client.get("/reddit/trending").json()

        assert data["servedFrom"] == "fallback"
        assert data["fetchedAt"] is None
        assert len(data["trending"]) == 10


# =============================================================================
# MARKET
# =============================================================================


class TestHeatmapAPI:
    def test_heatmap(self, client: TestClient, quote_board):
        quote_board.prices = {"AAPL": 190.0, "MSFT": 410.0}

        data = client.get("/stocks/heatmap").json()

        assert {s["symbol"] for s in data["stocks"]} == {"AAPL", "MSFT"}
        assert data["stocks"][0]["region"] == "US"
        assert data["regions"]["US"] == "United States"
        assert data["source"] == "yahoo"

    def test_upstream_failure_is_502(self, client: TestClient, quote_board):
        quote_board.fail = True

        response = client.get("/stocks/heatmap")

        assert response.status_code == 502
        assert response.json()["error"] == "UPSTREAM_ERROR"


class TestStocksAPI:
    def test_cold_list(self, client: TestClient, financial):
        response = client.get("/stocks")

        assert response.status_code == 200
        data = response.json()
        assert len(data["stocks"]) == 10
        assert data["stocks"][0]["symbol"] == "MSFT"
        assert data["source"] == "fallback"
        assert data["servedFrom"] == "fallback"
        assert data["error"] == "stock list not warmed yet"
        assert financial.calls == []


class TestTrendingAPI:
    def test_stocktwits_symbols(self, client: TestClient, trending):
        trending.symbols = [("NVDA", 600000), ("PLTR", 300000)]

        data = client.get("/trending").json()

        assert data["trending"] == [
            {"symbol": "NVDA", "watchlistCount": 600000, "sentiment": "trending"},
            {"symbol": "PLTR", "watchlistCount": 300000, "sentiment": "trending"},
        ]

    def test_stocktwits_down(self, client: TestClient, trending):
        trending.fail = True

        data = client.get("/trending").json()

        assert data["servedFrom"] == "fallback"
        assert data["error"]
