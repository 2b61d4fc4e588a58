"""Portfolio domain models."""

from dataclasses import dataclass, field
from datetime import date

from spreads.core.timezone import parse_date


@dataclass(frozen=True)
class PortfolioHolding:
    """A single purchase lot owned by a user."""

    id: str
    symbol: str
    shares: float
    purchase_price: float
    purchase_date: date
    total_cost: float
    name: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "symbol", self.symbol.upper())
        if not isinstance(self.purchase_date, date):
            object.__setattr__(self, "purchase_date", parse_date(self.purchase_date))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "symbol": self.symbol,
            "name": self.name,
            "shares": self.shares,
            "purchasePrice": self.purchase_price,
            "purchaseDate": self.purchase_date.isoformat(),
            "totalCost": self.total_cost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PortfolioHolding":
        return cls(
            id=str(data["id"]),
            symbol=str(data["symbol"]),
            name=str(data.get("name") or ""),
            shares=float(data["shares"]),
            purchase_price=float(data["purchasePrice"]),
            purchase_date=parse_date(data["purchaseDate"]),
            total_cost=float(data["totalCost"]),
        )


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Portfolio value on one date."""

    date: date
    total_value: float
    total_cost: float
    gain_loss: float
    gain_loss_percent: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "totalValue": self.total_value,
            "totalCost": self.total_cost,
            "gainLoss": self.gain_loss,
            "gainLossPercent": self.gain_loss_percent,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PortfolioSnapshot":
        return cls(
            date=parse_date(data["date"]),
            total_value=float(data["totalValue"]),
            total_cost=float(data["totalCost"]),
            gain_loss=float(data["gainLoss"]),
            gain_loss_percent=float(data["gainLossPercent"]),
        )


@dataclass
class PortfolioHistory:
    """Cached snapshot series for one user, fingerprinted by the holdings it was built from."""

    user_identity: str
    holdings_hash: str
    last_calculated: str
    snapshots: list[PortfolioSnapshot] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "userIdentity": self.user_identity,
            "holdingsHash": self.holdings_hash,
            "lastCalculated": self.last_calculated,
            "snapshots": [s.to_dict() for s in self.snapshots],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PortfolioHistory":
        return cls(
            user_identity=data["userIdentity"],
            holdings_hash=data["holdingsHash"],
            last_calculated=data["lastCalculated"],
            snapshots=[PortfolioSnapshot.from_dict(s) for s in data.get("snapshots", [])],
        )


@dataclass(frozen=True)
class DateRange:
    """Sampled dates for a timeframe."""

    start: date
    end: date
    dates: tuple[date, ...]
    interval: str = "daily"
