"""Derived financial metric models."""

from dataclasses import dataclass, field
from typing import Optional

from spreads.domain.models.enums import DataSource


@dataclass(frozen=True)
class PEPoint:
    date: str
    pe: float

    def to_dict(self) -> dict:
        return {"date": self.date, "pe": self.pe}


@dataclass
class PEHistory:
    """Quarterly P/E series, oldest first, with rolling averages."""

    symbol: str
    historical_data: list[PEPoint]
    source: DataSource
    current_pe: Optional[float] = None
    avg_pe_1y: Optional[float] = None
    avg_pe_3y: Optional[float] = None
    avg_pe_5y: Optional[float] = None
    avg_pe_10y: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "currentPE": self.current_pe,
            "avgPE1Y": self.avg_pe_1y,
            "avgPE3Y": self.avg_pe_3y,
            "avgPE5Y": self.avg_pe_5y,
            "avgPE10Y": self.avg_pe_10y,
            "historicalData": [p.to_dict() for p in self.historical_data],
            "dataPoints": len(self.historical_data),
            "source": self.source.value,
        }


@dataclass(frozen=True)
class DividendPoint:
    year: int
    dividend: float
    yoy_growth: Optional[float] = None

    def to_dict(self) -> dict:
        return {"year": self.year, "dividend": self.dividend, "yoyGrowth": self.yoy_growth}


@dataclass
class DividendHistory:
    """Back-projected dividend series. Always an estimate."""

    symbol: str
    current_price: float
    dividend_yield: float
    annual_dividend: float
    historical_data: list[DividendPoint]
    avg_dividend_5y: Optional[float]
    dividend_cagr_5y: Optional[float]
    source: DataSource = DataSource.ESTIMATED

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "currentPrice": self.current_price,
            "dividendYield": self.dividend_yield,
            "annualDividend": self.annual_dividend,
            "historicalData": [p.to_dict() for p in self.historical_data],
            "avgDividend5Y": self.avg_dividend_5y,
            "dividendCAGR5Y": self.dividend_cagr_5y,
            "dataPoints": len(self.historical_data),
            "source": self.source.value,
        }


@dataclass(frozen=True)
class RevenuePoint:
    year: int
    quarter_num: int
    revenue: float
    yoy_growth: Optional[float] = None

    @property
    def quarter(self) -> str:
        return f"Q{self.quarter_num} {self.year}"

    def to_dict(self) -> dict:
        return {
            "quarter": self.quarter,
            "year": self.year,
            "quarterNum": self.quarter_num,
            "revenue": self.revenue,
            "yoyGrowth": self.yoy_growth,
        }


@dataclass
class RevenueGrowth:
    """Quarterly revenue with year-over-year growth, newest first."""

    symbol: str
    historical_data: list[RevenuePoint]
    avg_growth_rate: Optional[float]
    source: DataSource = DataSource.FINNHUB
    recent_quarters: list[RevenuePoint] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "recent4Quarters": [p.to_dict() for p in self.recent_quarters],
            "historicalData": [p.to_dict() for p in self.historical_data],
            "avgGrowthRate": self.avg_growth_rate,
            "dataPoints": len(self.historical_data),
            "source": self.source.value,
        }


@dataclass(frozen=True)
class MarketPE:
    """S&P 500 P/E reading."""

    pe: float
    source: DataSource

    def to_dict(self) -> dict:
        return {"pe": self.pe, "source": self.source.value}
