"""
Upstream response schemas.

Every provider validates its JSON against these models at the fetch boundary,
so downstream code never inspects raw dicts for optional fields.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# Finnhub


class FinnhubQuote(UpstreamModel):
    c: float = 0.0
    d: Optional[float] = None
    dp: Optional[float] = None
    h: Optional[float] = None
    l: Optional[float] = None  # noqa: E741
    o: Optional[float] = None
    pc: Optional[float] = None


class FinnhubMetricValues(UpstreamModel):
    pe_ttm: Optional[float] = Field(default=None, alias="peTTM")
    pe_basic_excl_extra_ttm: Optional[float] = Field(default=None, alias="peBasicExclExtraTTM")
    eps_ttm: Optional[float] = Field(default=None, alias="epsTTM")
    eps_basic_excl_extra_ttm: Optional[float] = Field(
        default=None, alias="epsBasicExclExtraItemsTTM"
    )
    market_capitalization: Optional[float] = Field(default=None, alias="marketCapitalization")
    week_52_high: Optional[float] = Field(default=None, alias="52WeekHigh")
    week_52_low: Optional[float] = Field(default=None, alias="52WeekLow")
    dividend_yield_indicated_annual: Optional[float] = Field(
        default=None, alias="dividendYieldIndicatedAnnual"
    )

    @property
    def pe(self) -> Optional[float]:
        return self.pe_ttm if self.pe_ttm is not None else self.pe_basic_excl_extra_ttm

    @property
    def eps(self) -> Optional[float]:
        return self.eps_ttm if self.eps_ttm is not None else self.eps_basic_excl_extra_ttm


class FinnhubMetrics(UpstreamModel):
    metric: FinnhubMetricValues = Field(default_factory=FinnhubMetricValues)


class FinnhubCandles(UpstreamModel):
    s: Literal["ok", "no_data"]
    c: list[float] = Field(default_factory=list)
    o: list[float] = Field(default_factory=list)
    h: list[float] = Field(default_factory=list)
    l: list[float] = Field(default_factory=list)  # noqa: E741
    t: list[int] = Field(default_factory=list)


class ReportedConcept(UpstreamModel):
    concept: str = ""
    value: Optional[float] = None
    label: Optional[str] = None


class ReportSections(UpstreamModel):
    ic: list[ReportedConcept] = Field(default_factory=list)
    bs: list[ReportedConcept] = Field(default_factory=list)
    cf: list[ReportedConcept] = Field(default_factory=list)


class FinancialReport(UpstreamModel):
    """One filed report from ``/stock/financials-reported``."""

    year: int
    quarter: int = 0
    form: str = ""
    filed_date: Optional[str] = Field(default=None, alias="filedDate")
    start_date: Optional[str] = Field(default=None, alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    report: ReportSections = Field(default_factory=ReportSections)


class FinancialsReported(UpstreamModel):
    symbol: Optional[str] = None
    data: list[FinancialReport] = Field(default_factory=list)


# Reddit


class RedditPostData(UpstreamModel):
    title: str = ""
    selftext: str = ""
    score: int = 0
    num_comments: int = 0
    subreddit: str = ""
    permalink: str = ""
    created_utc: float = 0.0


class RedditChild(UpstreamModel):
    data: RedditPostData


class RedditListingData(UpstreamModel):
    children: list[RedditChild] = Field(default_factory=list)


class RedditListing(UpstreamModel):
    data: RedditListingData = Field(default_factory=RedditListingData)


# StockTwits


class StockTwitsSymbol(UpstreamModel):
    symbol: str
    title: Optional[str] = None
    watchlist_count: int = 0


class StockTwitsTrending(UpstreamModel):
    symbols: list[StockTwitsSymbol] = Field(default_factory=list)


# Yahoo Finance


class YahooQuote(UpstreamModel):
    symbol: str
    short_name: Optional[str] = Field(default=None, alias="shortName")
    long_name: Optional[str] = Field(default=None, alias="longName")
    regular_market_price: Optional[float] = Field(default=None, alias="regularMarketPrice")
    regular_market_change: Optional[float] = Field(default=None, alias="regularMarketChange")
    regular_market_change_percent: Optional[float] = Field(
        default=None, alias="regularMarketChangePercent"
    )
    market_cap: Optional[float] = Field(default=None, alias="marketCap")
    sector: Optional[str] = None
    industry: Optional[str] = None
    exchange: Optional[str] = None
