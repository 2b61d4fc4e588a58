"""Historical P/E from reported EPS and monthly prices."""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from spreads.core.timezone import parse_date
from spreads.domain.models import DataSource, HistoricalPricePoint, PEHistory, PEPoint
from spreads.providers.schemas import FinancialReport

EPS_CONCEPTS = (
    "us-gaap_EarningsPerShareDiluted",
    "us-gaap_EarningsPerShareBasic",
    "us-gaap_EarningsPerShareBasicAndDiluted",
)

# average windows in quarters
AVERAGE_WINDOWS = {"1y": 4, "3y": 12, "5y": 20, "10y": 40}


@dataclass(frozen=True)
class QuarterEps:
    year: int
    quarter: int
    end_date: date
    eps: float

    @property
    def index(self) -> int:
        return self.year * 4 + self.quarter


def extract_eps(report: FinancialReport) -> Optional[float]:
    by_concept = {c.concept: c.value for c in report.report.ic if c.value is not None}
    for concept in EPS_CONCEPTS:
        if concept in by_concept:
            return float(by_concept[concept])
    return None


def _quarter_of(report: FinancialReport) -> Optional[int]:
    form = report.form.upper()
    if form.startswith("10-K"):
        return 4
    if form.startswith("10-Q") and 1 <= report.quarter <= 3:
        return report.quarter
    return None


def quarterly_eps(reports: list[FinancialReport]) -> list[QuarterEps]:
    """
    One EPS value per fiscal quarter, oldest first.

    Filings are deduplicated by (year, quarter) with the latest filing winning.
    A 10-K reports full-year EPS, so Q4 is derived as annual minus Q1-Q3 and is
    dropped when any of those quarters is missing.
    """
    latest: dict[tuple[int, int], FinancialReport] = {}
    for report in sorted(reports, key=lambda r: r.filed_date or ""):
        quarter = _quarter_of(report)
        if quarter is None or extract_eps(report) is None or not report.end_date:
            continue
        latest[(report.year, quarter)] = report

    quarters = []
    for (year, quarter), report in sorted(latest.items()):
        eps = extract_eps(report)
        if quarter == 4:
            prior = [latest.get((year, q)) for q in (1, 2, 3)]
            if any(p is None for p in prior):
                continue
            eps -= sum(extract_eps(p) for p in prior)
        quarters.append(QuarterEps(year, quarter, parse_date(report.end_date), eps))
    return quarters


def ttm_eps_series(quarters: list[QuarterEps]) -> list[tuple[date, float]]:
    """Trailing-twelve-month EPS at each quarter end that closes four consecutive quarters."""
    series = []
    for i in range(3, len(quarters)):
        window = quarters[i - 3:i + 1]
        if window[-1].index - window[0].index != 3:
            continue
        series.append((window[-1].end_date, sum(q.eps for q in window)))
    return series


def closest_price(target: date, prices: list[HistoricalPricePoint]) -> Optional[float]:
    """Close of the price point nearest in time to target."""
    if not prices:
        return None
    best = min(prices, key=lambda p: abs((p.date - target).days))
    return best.close


def is_reasonable_pe(pe: Optional[float], pe_max: float = 500.0) -> bool:
    return pe is not None and math.isfinite(pe) and 0 < pe < pe_max


def compute_pe_series(
    reports: list[FinancialReport],
    monthly_prices: list[HistoricalPricePoint],
    pe_max: float = 500.0,
) -> list[PEPoint]:
    """Quarterly P/E, oldest first; unreasonable values are discarded."""
    points = []
    for end_date, ttm in ttm_eps_series(quarterly_eps(reports)):
        price = closest_price(end_date, monthly_prices)
        if price is None or ttm == 0:
            continue
        pe = price / ttm
        if is_reasonable_pe(pe, pe_max):
            points.append(PEPoint(date=end_date.isoformat(), pe=round(pe, 2)))
    return points


def synthetic_pe_series(
    current_pe: float,
    today: date,
    points: int = 20,
    pe_max: float = 500.0,
) -> list[PEPoint]:
    """
    Quarterly series around the current P/E as a damped sine.

    This is an estimate for display continuity, never real data; callers must
    mark it with ``DataSource.ESTIMATED``.
    """
    series = []
    for i in range(points):
        quarters_back = points - 1 - i
        deviation = 0.25 * math.exp(-0.12 * i) * math.sin(0.9 * i)
        pe = round(current_pe * (1 + deviation), 2)
        if not is_reasonable_pe(pe, pe_max):
            continue
        when = today - relativedelta(months=3 * quarters_back)
        series.append(PEPoint(date=when.isoformat(), pe=pe))
    return series


def _average(points: list[PEPoint], window: int) -> Optional[float]:
    recent = points[-window:]
    if not recent:
        return None
    return round(sum(p.pe for p in recent) / len(recent), 2)


def build_pe_history(
    symbol: str,
    reports: list[FinancialReport],
    monthly_prices: list[HistoricalPricePoint],
    current_pe: Optional[float],
    today: date,
    min_points: int = 4,
    synthetic_points: int = 20,
    pe_max: float = 500.0,
) -> PEHistory:
    """Real P/E history when enough quarters exist, else the flagged synthetic series."""
    points = compute_pe_series(reports, monthly_prices, pe_max)
    source = DataSource.FINNHUB
    if len(points) < min_points:
        source = DataSource.ESTIMATED
        points = (
            synthetic_pe_series(current_pe, today, synthetic_points, pe_max)
            if is_reasonable_pe(current_pe, pe_max)
            else []
        )

    if is_reasonable_pe(current_pe, pe_max):
        current = round(current_pe, 2)
    else:
        current = points[-1].pe if points else None

    return PEHistory(
        symbol=symbol,
        historical_data=points,
        source=source,
        current_pe=current,
        avg_pe_1y=_average(points, AVERAGE_WINDOWS["1y"]),
        avg_pe_3y=_average(points, AVERAGE_WINDOWS["3y"]),
        avg_pe_5y=_average(points, AVERAGE_WINDOWS["5y"]),
        avg_pe_10y=_average(points, AVERAGE_WINDOWS["10y"]),
    )
