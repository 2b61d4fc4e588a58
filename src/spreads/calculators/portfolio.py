"""Portfolio history primitives: holdings fingerprint, date sampling, price lookup, snapshots."""

import hashlib
from datetime import date, timedelta
from typing import Mapping, Optional

from dateutil.relativedelta import relativedelta

from spreads.domain.models import DateRange, PortfolioHolding, PortfolioSnapshot, Timeframe

LOOKBACK_DAYS = 7
LOOKAHEAD_DAYS = 3


def holdings_hash(holdings: list[PortfolioHolding]) -> str:
    """
    Order-independent digest of the value-relevant fields of every holding.

    Two lists with the same holdings in any order hash identically; changing
    the symbol, shares, price or date of any holding changes the digest.
    """
    lines = sorted(
        f"{h.symbol}:{h.shares!r}:{h.purchase_price!r}:{h.purchase_date.isoformat()}"
        for h in holdings
    )
    return hashlib.md5("|".join(lines).encode("utf-8")).hexdigest()


def earliest_purchase_date(holdings: list[PortfolioHolding], today: date) -> date:
    if not holdings:
        return today
    return min(h.purchase_date for h in holdings)


def business_days(start: date, end: date) -> list[date]:
    days = []
    current = start
    while current <= end:
        if current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def weekly_days(start: date, end: date) -> list[date]:
    """Every 7 days from start, always ending with end."""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=7)
    if not days or days[-1] != end:
        days.append(end)
    return days


def date_range_for_timeframe(timeframe: Timeframe, today: date, earliest: date) -> DateRange:
    """Sampled dates for a timeframe; the start never precedes the earliest purchase."""
    if timeframe == Timeframe.ONE_WEEK:
        start, interval = today - timedelta(days=7), "daily"
    elif timeframe == Timeframe.ONE_MONTH:
        start, interval = today - relativedelta(months=1), "daily"
    elif timeframe == Timeframe.THREE_MONTHS:
        start, interval = today - relativedelta(months=3), "daily"
    elif timeframe == Timeframe.ONE_YEAR:
        start, interval = today - relativedelta(years=1), "weekly"
    else:
        start, interval = earliest, "weekly"

    start = max(start, earliest)
    if interval == "daily":
        dates = business_days(start, today)
    else:
        dates = weekly_days(start, today)
    return DateRange(start=start, end=today, dates=tuple(dates), interval=interval)


def history_dates(today: date, earliest: date) -> list[date]:
    """Dates for the cached full series: every sampled date of every timeframe."""
    dates = set()
    for timeframe in Timeframe:
        dates.update(date_range_for_timeframe(timeframe, today, earliest).dates)
    return sorted(dates)


def find_closest_price(prices: Mapping[date, float], target: date) -> Optional[float]:
    """Close on target, else up to a week earlier, else up to three days later."""
    if target in prices:
        return prices[target]
    for back in range(1, LOOKBACK_DAYS + 1):
        price = prices.get(target - timedelta(days=back))
        if price is not None:
            return price
    for ahead in range(1, LOOKAHEAD_DAYS + 1):
        price = prices.get(target + timedelta(days=ahead))
        if price is not None:
            return price
    return None


def resolve_price(
    holding: PortfolioHolding,
    on: date,
    today: date,
    quotes: Mapping[str, float],
    history: Mapping[str, Mapping[date, float]],
) -> float:
    """Real-time quote for today, else nearest historical close, else the purchase price."""
    if on == today and holding.symbol in quotes:
        return quotes[holding.symbol]
    price = find_closest_price(history.get(holding.symbol, {}), on)
    return price if price is not None else holding.purchase_price


def compute_snapshots(
    holdings: list[PortfolioHolding],
    dates: list[date],
    today: date,
    quotes: Mapping[str, float],
    history: Mapping[str, Mapping[date, float]],
) -> list[PortfolioSnapshot]:
    """One snapshot per date; a holding counts only from its purchase date on."""
    snapshots = []
    for on in dates:
        total_value = 0.0
        total_cost = 0.0
        for holding in holdings:
            if holding.purchase_date > on:
                continue
            total_value += holding.shares * resolve_price(holding, on, today, quotes, history)
            total_cost += holding.total_cost

        gain_loss = total_value - total_cost
        percent = gain_loss / total_cost * 100 if total_cost > 0 else 0.0
        snapshots.append(
            PortfolioSnapshot(
                date=on,
                total_value=round(total_value, 2),
                total_cost=round(total_cost, 2),
                gain_loss=round(gain_loss, 2),
                gain_loss_percent=round(percent, 2),
            )
        )
    return snapshots


def filter_snapshots(
    snapshots: list[PortfolioSnapshot], date_range: DateRange
) -> list[PortfolioSnapshot]:
    """Snapshots on the sampled dates of a timeframe."""
    wanted = set(date_range.dates)
    return [s for s in snapshots if s.date in wanted]
