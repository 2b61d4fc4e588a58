"""Saved compound interest calculations on the user record."""

import logging
import math
import uuid
from typing import Any, Optional

from spreads.core.clock import Clock
from spreads.core.exceptions import ValidationError
from spreads.domain.models import CompoundCalculation, CompoundFrequency, Currency
from spreads.repositories.user_repo import KeyedUserRepository
from spreads.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

MAX_CALCULATIONS = 20
MAX_NAME = 100
INVALID_CALCULATION = "Invalid calculation data"
NON_NEGATIVE_FIELDS = ("initialBalance", "years", "months", "depositAmount")


def _number(raw: dict, name: str) -> float:
    value = raw.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValidationError(INVALID_CALCULATION)
    return float(value)


def parse_calculation(raw: Any, calculation_id: str, created_at: int) -> CompoundCalculation:
    """Validate client-supplied calculator inputs; the server assigns id and createdAt."""
    if not isinstance(raw, dict):
        raise ValidationError(INVALID_CALCULATION)
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip() or len(name.strip()) > MAX_NAME:
        raise ValidationError(INVALID_CALCULATION)

    numbers = {field: _number(raw, field) for field in NON_NEGATIVE_FIELDS + ("annualReturn",)}
    if any(numbers[field] < 0 for field in NON_NEGATIVE_FIELDS):
        raise ValidationError(INVALID_CALCULATION)

    try:
        currency = Currency(raw.get("currency"))
        compound_frequency = CompoundFrequency(raw.get("compoundFrequency"))
        deposit_frequency = CompoundFrequency(raw.get("depositFrequency"))
    except ValueError as e:
        raise ValidationError(INVALID_CALCULATION) from e
    if deposit_frequency == CompoundFrequency.DAILY:
        raise ValidationError(INVALID_CALCULATION)

    return CompoundCalculation(
        id=calculation_id,
        name=name.strip(),
        currency=currency,
        initial_balance=numbers["initialBalance"],
        annual_return=numbers["annualReturn"],
        compound_frequency=compound_frequency,
        years=numbers["years"],
        months=numbers["months"],
        deposit_amount=numbers["depositAmount"],
        deposit_frequency=deposit_frequency,
        created_at=created_at,
    )


class CalculationsService:
    """Up to MAX_CALCULATIONS saved calculator inputs per user."""

    def __init__(self, profiles: ProfileService, users: KeyedUserRepository, clock: Clock):
        self._profiles = profiles
        self._users = users
        self._clock = clock

    def get_calculations(self, email: str) -> dict:
        calculations = self._profiles.get_or_create_user(email).compound_calculations
        return {
            "calculations": [c.to_dict() for c in calculations],
            "total": len(calculations),
        }

    def save_calculation(self, email: str, raw: Any) -> dict:
        user = self._profiles.get_or_create_user(email)
        calculation = parse_calculation(raw, uuid.uuid4().hex, self._clock.now_ms())
        if len(user.compound_calculations) >= MAX_CALCULATIONS:
            raise ValidationError(f"Maximum {MAX_CALCULATIONS} calculations allowed")

        user.compound_calculations.append(calculation)
        self._users.save(user)
        logger.info("Saved calculation %r for %s", calculation.name, email)
        return {
            "success": True,
            "calculation": calculation.to_dict(),
            "total": len(user.compound_calculations),
        }

    def delete_calculation(self, email: str, calculation_id: Optional[str]) -> dict:
        """Remove one calculation; an unknown id leaves the list unchanged."""
        if not calculation_id:
            raise ValidationError("Calculation ID required")
        user = self._profiles.get_or_create_user(email)
        user.compound_calculations = [
            c for c in user.compound_calculations if c.id != calculation_id
        ]
        self._users.save(user)
        return {"success": True, "total": len(user.compound_calculations)}
