"""Quarterly revenue and year-over-year growth from reported financials."""

from typing import Optional

from spreads.domain.models import DataSource, RevenueGrowth, RevenuePoint
from spreads.providers.schemas import FinancialReport

REVENUE_CONCEPTS = (
    "us-gaap_Revenues",
    "us-gaap_RevenueFromContractWithCustomerExcludingAssessedTax",
    "us-gaap_SalesRevenueNet",
    "us-gaap_NetRevenue",
    "us-gaap_TotalRevenue",
    "us-gaap_SalesRevenueServicesNet",
    "us-gaap_RevenueFromContractWithCustomerIncludingAssessedTax",
)

MAX_POINTS = 40


def extract_revenue(report: FinancialReport) -> Optional[float]:
    """First known revenue concept present, else any positive 'revenue' line that is not a cost."""
    by_concept = {c.concept: c.value for c in report.report.ic if c.value is not None}
    for concept in REVENUE_CONCEPTS:
        if concept in by_concept:
            return float(by_concept[concept])
    for concept, value in by_concept.items():
        name = concept.lower()
        if "revenue" in name and "cost" not in name and value > 0:
            return float(value)
    return None


def classify_quarter(report: FinancialReport) -> Optional[int]:
    """10-K filings count as Q4; 10-Q filings use their reported quarter."""
    form = report.form.upper()
    if form.startswith("10-K"):
        return 4
    if form.startswith("10-Q") and 1 <= report.quarter <= 4:
        return report.quarter
    return None


def compute_revenue_growth(
    symbol: str,
    reports: list[FinancialReport],
    max_points: int = MAX_POINTS,
) -> RevenueGrowth:
    """Newest-first quarterly revenue with YoY growth against the same quarter a year earlier."""
    rows: list[tuple[int, int, float]] = []
    for report in reports:
        quarter = classify_quarter(report)
        revenue = extract_revenue(report)
        if quarter is None or revenue is None:
            continue
        rows.append((report.year, quarter, revenue))

    rows.sort(key=lambda r: (r[0], r[1]), reverse=True)

    by_quarter: dict[tuple[int, int], float] = {}
    ordered: list[tuple[int, int]] = []
    for year, quarter, revenue in rows:
        if (year, quarter) in by_quarter:
            continue
        by_quarter[(year, quarter)] = revenue
        ordered.append((year, quarter))

    points = []
    for year, quarter in ordered:
        revenue = by_quarter[(year, quarter)]
        prior = by_quarter.get((year - 1, quarter))
        growth = round((revenue - prior) / prior * 100, 2) if prior and prior > 0 else None
        points.append(RevenuePoint(year=year, quarter_num=quarter, revenue=revenue, yoy_growth=growth))

    points = points[:max_points]
    growths = [p.yoy_growth for p in points if p.yoy_growth is not None]
    avg = round(sum(growths) / len(growths), 2) if growths else None

    return RevenueGrowth(
        symbol=symbol,
        historical_data=points,
        avg_growth_rate=avg,
        source=DataSource.FINNHUB,
        recent_quarters=points[:4],
    )
