"""Dividend history estimate."""

import random
from typing import Optional

from spreads.domain.models import DataSource, DividendHistory, DividendPoint


def estimate_dividend_history(
    symbol: str,
    price: float,
    dividend_yield: float,
    current_year: int,
    rng: random.Random,
    growth_rate: float = 0.05,
    jitter: float = 0.02,
    years: int = 10,
) -> DividendHistory:
    """
    Back-project the current annual dividend over ``years`` prior years.

    Assumes constant ``growth_rate`` with uniform jitter of ``jitter`` total
    width. The whole series is synthetic, so the source is always ESTIMATED.
    """
    annual = price * dividend_yield / 100

    points: list[DividendPoint] = []
    for back in range(years, -1, -1):
        base = annual / (1 + growth_rate) ** back
        value = round(base * (1 + (rng.random() - 0.5) * jitter), 4)
        growth = None
        if points and points[-1].dividend > 0:
            growth = round((value - points[-1].dividend) / points[-1].dividend * 100, 2)
        points.append(DividendPoint(year=current_year - back, dividend=value, yoy_growth=growth))

    last5 = points[-5:]
    avg5: Optional[float] = round(sum(p.dividend for p in last5) / len(last5), 4) if last5 else None

    cagr5 = None
    if len(points) >= 6 and points[-6].dividend > 0:
        cagr5 = round(((points[-1].dividend / points[-6].dividend) ** (1 / 5) - 1) * 100, 2)

    return DividendHistory(
        symbol=symbol,
        current_price=price,
        dividend_yield=dividend_yield,
        annual_dividend=round(annual, 4),
        historical_data=points,
        avg_dividend_5y=avg5,
        dividend_cagr_5y=cagr5,
        source=DataSource.ESTIMATED,
    )
