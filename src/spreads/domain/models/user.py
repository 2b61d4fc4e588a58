"""Stored user record."""

from dataclasses import dataclass, field
from typing import Optional

from spreads.config.universe import GRID_SIZE
from spreads.domain.models.enums import CompoundFrequency, Currency


def empty_grid() -> list[bool]:
    return [False] * GRID_SIZE


@dataclass(frozen=True)
class CompoundCalculation:
    """A saved set of compound interest calculator inputs."""

    id: str
    name: str
    currency: Currency
    initial_balance: float
    annual_return: float
    compound_frequency: CompoundFrequency
    years: float
    months: float
    deposit_amount: float
    deposit_frequency: CompoundFrequency
    created_at: int

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "currency": self.currency.value,
            "initialBalance": self.initial_balance,
            "annualReturn": self.annual_return,
            "compoundFrequency": self.compound_frequency.value,
            "years": self.years,
            "months": self.months,
            "depositAmount": self.deposit_amount,
            "depositFrequency": self.deposit_frequency.value,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CompoundCalculation":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            currency=Currency(data["currency"]),
            initial_balance=float(data["initialBalance"]),
            annual_return=float(data["annualReturn"]),
            compound_frequency=CompoundFrequency(data["compoundFrequency"]),
            years=float(data["years"]),
            months=float(data["months"]),
            deposit_amount=float(data["depositAmount"]),
            deposit_frequency=CompoundFrequency(data["depositFrequency"]),
            created_at=int(data["createdAt"]),
        )


@dataclass
class StoredUser:
    """
    Per-user profile, points and saved calculations, persisted as one hash field
    keyed by email.

    Mutated in place by the profile and points services, then written back whole.
    """

    id: str
    email: str
    created_at: str
    last_login_at: str
    name: Optional[str] = None
    image: Optional[str] = None
    username: Optional[str] = None
    username_last_changed: Optional[str] = None
    total_points: int = 0
    last_claim_date: Optional[str] = None
    streak_days: int = 0
    grid_state: list[bool] = field(default_factory=empty_grid)
    compound_calculations: list[CompoundCalculation] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "image": self.image,
            "createdAt": self.created_at,
            "lastLoginAt": self.last_login_at,
            "username": self.username,
            "usernameLastChanged": self.username_last_changed,
            "totalPoints": self.total_points,
            "lastClaimDate": self.last_claim_date,
            "streakDays": self.streak_days,
            "gridState": list(self.grid_state),
            "compoundCalculations": [c.to_dict() for c in self.compound_calculations],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StoredUser":
        grid = list(data.get("gridState") or empty_grid())
        if len(grid) < GRID_SIZE:
            grid.extend([False] * (GRID_SIZE - len(grid)))
        return cls(
            id=data["id"],
            email=data["email"],
            name=data.get("name"),
            image=data.get("image"),
            created_at=data["createdAt"],
            last_login_at=data.get("lastLoginAt") or data["createdAt"],
            username=data.get("username"),
            username_last_changed=data.get("usernameLastChanged"),
            total_points=int(data.get("totalPoints") or 0),
            last_claim_date=data.get("lastClaimDate"),
            streak_days=int(data.get("streakDays") or 0),
            grid_state=grid[:GRID_SIZE],
            compound_calculations=[
                CompoundCalculation.from_dict(c) for c in data.get("compoundCalculations") or []
            ],
        )
