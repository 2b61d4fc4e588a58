"""
Unit tests for MetricsService.

Tests cover:
- Historical P/E from filings, estimated fallback and error outcomes
- Dividend estimate and missing-yield handling
- Revenue growth
- S&P 500 P/E range check and configured fallback
- Cache reuse and stale serving across all metrics
"""

import random
from datetime import date

import pytest

from spreads.core.exceptions import NotFoundError, UpstreamError
from spreads.services import MetricsService

from tests.conftest import FakeFinancialProvider, run

QUARTER_ENDS = {1: "03-31", 2: "06-30", 3: "09-30"}


def eps_filings(years: range, eps: float = 1.0) -> list[dict]:
    filings = []
    for year in years:
        for quarter, end in QUARTER_ENDS.items():
            filings.append({
                "year": year, "quarter": quarter, "form": "10-Q",
                "filedDate": f"{year}-{end}", "endDate": f"{year}-{end}",
                "report": {"ic": [{"concept": "us-gaap_EarningsPerShareDiluted", "value": eps}]},
            })
        filings.append({
            "year": year, "quarter": 0, "form": "10-K",
            "filedDate": f"{year}-12-31", "endDate": f"{year}-12-31",
            "report": {"ic": [{"concept": "us-gaap_EarningsPerShareDiluted", "value": eps * 4}]},
        })
    return filings


def revenue_filings() -> list[dict]:
    return [
        {"year": y, "quarter": 1, "form": "10-Q",
         "report": {"ic": [{"concept": "us-gaap_Revenues", "value": v}]}}
        for y, v in ((2022, 100.0), (2023, 110.0))
    ]


@pytest.fixture
def financial() -> FakeFinancialProvider:
    month_ends = {
        date(y, m, d): 100.0
        for y in (2021, 2022, 2023)
        for m, d in ((3, 31), (6, 30), (9, 30), (12, 31))
    }
    return FakeFinancialProvider(
        quotes={"KO": 60.0, "AAPL": 190.0},
        metrics={
            "AAPL": {"peTTM": 26.0},
            "KO": {"dividendYieldIndicatedAnnual": 3.0, "peBasicExclExtraTTM": 24.0},
            "SPY": {"peTTM": 23.456},
            "NEWCO": {"peBasicExclExtraTTM": 30.0},
        },
        candles={"AAPL": month_ends},
        reports={
            ("AAPL", "quarterly"): eps_filings(range(2021, 2024)) + revenue_filings(),
        },
    )


@pytest.fixture
def metrics(financial, responder, clock) -> MetricsService:
    return MetricsService(financial, responder, clock, rng=random.Random(0))


class TestHistoricalPe:
    def test_real_series_from_filings(self, metrics):
        body = run(metrics.get_historical_pe("aapl")).body()

        assert body["symbol"] == "AAPL"
        assert body["source"] == "finnhub"
        assert body["currentPE"] == 26.0
        assert body["dataPoints"] == 9
        assert body["avgPE1Y"] == 25.0
        assert body["cached"] is False

    def test_second_read_served_from_cache(self, metrics, financial):
        run(metrics.get_historical_pe("AAPL"))
        calls = len(financial.calls)

        body = run(metrics.get_historical_pe("AAPL")).body()

        assert body["cached"] is True
        assert body["servedFrom"] == "cache"
        assert len(financial.calls) == calls

    def test_estimated_series_when_no_filings(self, metrics):
        body = run(metrics.get_historical_pe("NEWCO")).body()

        assert body["source"] == "estimated"
        assert body["dataPoints"] == 20
        assert body["currentPE"] == 30.0

    def test_no_pe_anywhere_is_not_found(self, metrics):
        with pytest.raises(NotFoundError):
            run(metrics.get_historical_pe("EMPTY"))

    def test_upstream_down_without_cache_raises(self, metrics, financial):
        financial.failing.add("AAPL")

        with pytest.raises(UpstreamError):
            run(metrics.get_historical_pe("AAPL"))

    def test_stale_value_served_when_upstream_down(self, metrics, financial, clock):
        run(metrics.get_historical_pe("AAPL"))
        clock.advance(days=2)
        financial.failing.add("AAPL")

        body = run(metrics.get_historical_pe("AAPL")).body()

        assert body["servedFrom"] == "stale-cache"
        assert body["cached"] is True
        assert body["currentPE"] == 26.0
        assert "finnhub request failed" in body["error"]


class TestDividends:
    def test_estimate_from_yield(self, metrics):
        body = run(metrics.get_dividends("KO")).body()

        assert body["source"] == "estimated"
        assert body["annualDividend"] == 1.8
        assert body["dataPoints"] == 11
        assert body["historicalData"][-1]["year"] == 2024

    def test_no_yield_is_not_found(self, metrics):
        with pytest.raises(NotFoundError):
            run(metrics.get_dividends("AAPL"))


class TestRevenue:
    def test_growth_from_filings(self, metrics):
        body = run(metrics.get_revenue_growth("AAPL")).body()

        assert body["source"] == "finnhub"
        assert body["historicalData"][0]["quarter"] == "Q1 2023"
        assert body["historicalData"][0]["yoyGrowth"] == 10.0
        assert body["avgGrowthRate"] == 10.0

    def test_no_revenue_is_not_found(self, metrics):
        with pytest.raises(NotFoundError):
            run(metrics.get_revenue_growth("KO"))


class TestSp500Pe:
    def test_plausible_value_is_rounded(self, metrics):
        body = run(metrics.get_sp500_pe()).body()

        assert body["pe"] == 23.46
        assert body["source"] == "finnhub"

    @pytest.mark.parametrize("spy_metrics", [{"peTTM": 150.0}, {"peTTM": -4.0}, {}])
    def test_implausible_value_uses_fallback(self, metrics, financial, spy_metrics):
        financial.metrics["SPY"] = spy_metrics

        body = run(metrics.get_sp500_pe()).body()

        assert body["pe"] == 24.5
        assert body["source"] == "fallback"
        assert body["cached"] is False

    def test_upstream_failure_uses_fallback(self, metrics, financial):
        financial.failing.add("SPY")

        assert run(metrics.get_sp500_pe()).body()["pe"] == 24.5
