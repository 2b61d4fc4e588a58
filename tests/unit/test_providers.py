"""
Unit tests for the upstream providers.

Tests cover:
- Finnhub request shape, parsing and error mapping
- Reddit search and activity listings
- StockTwits trending parsing
- Yahoo quote board over a patched yfinance
"""

from datetime import date
from unittest.mock import MagicMock, patch

import httpx
import pytest

from spreads.core.exceptions import UpstreamError
from spreads.core.timezone import epoch_seconds
from spreads.providers.finnhub_provider import FinnhubProvider
from spreads.providers.reddit_provider import RedditProvider
from spreads.providers.stocktwits_provider import StockTwitsProvider
from spreads.providers.yahoo_provider import YahooQuoteProvider, _fetch_quotes_impl

from tests.conftest import run


def call_with(handler, call):
    """Run ``call(client)`` against an AsyncClient backed by ``handler``."""

    async def go():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await call(client)

    return run(go())


def json_handler(payload, status=200, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload)

    return handler


# =============================================================================
# Finnhub
# =============================================================================


class TestFinnhubProvider:
    def test_quote(self):
        seen = []
        handler = json_handler(
            {"c": 190.5, "d": 1.2, "dp": 0.63, "h": 191.0, "l": 188.0, "o": 189.0, "pc": 189.3}, seen=seen
        )

        quote = call_with(handler, lambda c: FinnhubProvider(c, "k").get_quote("AAPL"))

        assert quote.price == 190.5
        assert quote.change_percent == 0.63
        assert quote.prev_close == 189.3
        assert seen[0].url.path == "/api/v1/quote"
        assert seen[0].url.params["symbol"] == "AAPL"
        assert seen[0].url.params["token"] == "k"

    def test_candles_sorted_and_bounded(self):
        seen = []
        day1, day2 = date(2024, 3, 1), date(2024, 3, 4)
        handler = json_handler(
            {
                "s": "ok",
                "t": [epoch_seconds(day2), epoch_seconds(day1)],
                "c": [181.0, 179.0],
                "o": [180.0, 178.0],
                "h": [182.0, 180.0],
                "l": [179.5, 177.5],
            },
            seen=seen,
        )

        points = call_with(handler, lambda c: FinnhubProvider(c, "k").get_candles("AAPL", day1, day2))

        assert [p.date for p in points] == [day1, day2]
        assert points[0].close == 179.0
        assert points[1].high == 182.0
        assert seen[0].url.params["from"] == str(epoch_seconds(day1))
        assert seen[0].url.params["to"] == str(epoch_seconds(date(2024, 3, 5)) - 1)

    def test_no_data_candles_are_empty(self):
        points = call_with(
            json_handler({"s": "no_data"}),
            lambda c: FinnhubProvider(c, "k").get_candles("AAPL", date(2024, 3, 2), date(2024, 3, 2)),
        )

        assert points == []

    def test_metrics_aliases(self):
        metrics = call_with(
            json_handler({"metric": {"peTTM": 28.4, "52WeekHigh": 199.6, "marketCapitalization": 2.9e6}}),
            lambda c: FinnhubProvider(c, "k").get_metrics("AAPL"),
        )

        assert metrics.metric.pe == 28.4
        assert metrics.metric.week_52_high == 199.6

    def test_missing_api_key_never_calls_out(self):
        seen = []

        with pytest.raises(UpstreamError) as exc_info:
            call_with(json_handler({}, seen=seen), lambda c: FinnhubProvider(c, None).get_quote("AAPL"))

        assert "FINNHUB_API_KEY" in exc_info.value.message
        assert seen == []

    def test_http_error_status(self):
        with pytest.raises(UpstreamError) as exc_info:
            call_with(json_handler({}, status=503), lambda c: FinnhubProvider(c, "k").get_quote("AAPL"))

        assert exc_info.value.message == "finnhub request failed: HTTP 503"
        assert exc_info.value.provider == "finnhub"

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(UpstreamError) as exc_info:
            call_with(handler, lambda c: FinnhubProvider(c, "k").get_quote("AAPL"))

        assert "timeout" in exc_info.value.message

    def test_unexpected_shape(self):
        with pytest.raises(UpstreamError) as exc_info:
            call_with(json_handler({"c": "n/a"}), lambda c: FinnhubProvider(c, "k").get_quote("AAPL"))

        assert exc_info.value.message.endswith("unexpected response shape")


# =============================================================================
# Reddit
# =============================================================================


def listing(*posts):
    return {"kind": "Listing", "data": {"children": [{"kind": "t3", "data": p} for p in posts]}}


class TestRedditProvider:
    def test_search_posts(self):
        seen = []
        handler = json_handler(
            listing({"title": "GME squeeze", "score": 12, "num_comments": 3, "subreddit": "stocks"}),
            seen=seen,
        )

        posts = call_with(handler, lambda c: RedditProvider(c, "spreads/1.0").search_posts("stocks", "GME", "week"))

        assert posts[0].title == "GME squeeze"
        assert posts[0].selftext == ""
        request = seen[0]
        assert request.url.path == "/r/stocks/search.json"
        assert request.url.params["q"] == "GME"
        assert request.url.params["t"] == "week"
        assert request.url.params["restrict_sr"] == "on"
        assert request.headers["User-Agent"] == "spreads/1.0"

    def test_count_recent_posts(self):
        handler = json_handler(listing({"title": "a"}, {"title": "b"}, {"title": "c"}))

        count = call_with(handler, lambda c: RedditProvider(c, "ua").count_recent_posts("options", "day"))

        assert count == 3

    def test_rate_limited(self):
        with pytest.raises(UpstreamError) as exc_info:
            call_with(
                json_handler({"message": "Too Many Requests"}, status=429),
                lambda c: RedditProvider(c, "ua").search_posts("stocks", "GME", "day"),
            )

        assert exc_info.value.message == "reddit request failed: HTTP 429"


# =============================================================================
# StockTwits
# =============================================================================


class TestStockTwitsProvider:
    def test_trending_symbols(self):
        handler = json_handler(
            {"symbols": [{"symbol": "NVDA", "title": "NVIDIA", "watchlist_count": 500000}, {"symbol": "PLTR"}]}
        )

        symbols = call_with(
            handler,
            lambda c: StockTwitsProvider(c, "https://api.stocktwits.test/trending.json").get_trending(),
        )

        assert [(s.symbol, s.watchlist_count) for s in symbols] == [("NVDA", 500000), ("PLTR", 0)]

    def test_non_json_body(self):
        def handler(request):
            return httpx.Response(200, text="<html>blocked</html>")

        with pytest.raises(UpstreamError):
            call_with(handler, lambda c: StockTwitsProvider(c, "https://api.stocktwits.test/t.json").get_trending())


# =============================================================================
# Yahoo
# =============================================================================


class BrokenTicker:
    @property
    def info(self):
        raise KeyError("regularMarketPrice")


class TestYahooQuoteProvider:
    @patch("spreads.providers.yahoo_provider._get_yf")
    def test_quotes_from_ticker_info(self, mock_get_yf):
        toyota = MagicMock()
        toyota.info = {
            "shortName": "TOYOTA MOTOR CORP",
            "currentPrice": 2800.0,
            "marketCap": float("nan"),
            "exchange": "JPX",
        }
        apple = MagicMock()
        apple.info = {"longName": "Apple Inc.", "regularMarketPrice": 190.0, "regularMarketChangePercent": 0.4}
        mock_get_yf.return_value.Tickers.return_value.tickers = {
            "7203.T": toyota,
            "AAPL": apple,
            "BAD": BrokenTicker(),
        }

        quotes = run(YahooQuoteProvider().get_quotes(["7203.T", "AAPL", "BAD"]))

        assert [q.symbol for q in quotes] == ["7203.T", "AAPL"]
        assert quotes[0].regular_market_price == 2800.0
        assert quotes[0].market_cap is None
        assert quotes[1].long_name == "Apple Inc."
        mock_get_yf.return_value.Tickers.assert_called_once_with("7203.T AAPL BAD")

    @patch("spreads.providers.yahoo_provider._get_yf")
    def test_library_failure_is_upstream_error(self, mock_get_yf):
        mock_get_yf.return_value.Tickers.side_effect = RuntimeError("rate limited")

        with pytest.raises(UpstreamError) as exc_info:
            run(YahooQuoteProvider().get_quotes(["AAPL"]))

        assert exc_info.value.message == "yahoo request failed: rate limited"

    def test_empty_symbol_list(self):
        assert run(YahooQuoteProvider().get_quotes([])) == []

    @patch("spreads.providers.yahoo_provider._get_yf")
    def test_deadline_drops_remaining_symbols(self, mock_get_yf):
        apple = MagicMock()
        apple.info = {"regularMarketPrice": 190.0}
        toyota = MagicMock()
        mock_get_yf.return_value.Tickers.return_value.tickers = {"AAPL": apple, "7203.T": toyota}
        ticks = iter([0.0, 1.0, 31.0])

        rows = _fetch_quotes_impl(["AAPL", "7203.T"], timeout_seconds=30, now=lambda: next(ticks))

        assert [r["symbol"] for r in rows] == ["AAPL"]

    @patch("spreads.providers.yahoo_provider._get_yf")
    def test_deadline_before_any_symbol_is_upstream_error(self, mock_get_yf):
        mock_get_yf.return_value.Tickers.return_value.tickers = {"AAPL": MagicMock()}

        with pytest.raises(UpstreamError) as exc_info:
            run(YahooQuoteProvider(timeout_seconds=0).get_quotes(["AAPL"]))

        assert exc_info.value.message == "yahoo request failed: timed out after 0s"
