"""Holdings CRUD with history-cache invalidation."""

import logging
from typing import Optional

from spreads.core.exceptions import NotFoundError, ValidationError
from spreads.domain.models import PortfolioHolding
from spreads.repositories.portfolio_repo import KeyedPortfolioRepository
from spreads.services.cache_envelope import CacheEnvelope

logger = logging.getLogger(__name__)

INVALID_HOLDING = "Invalid holding data format"
NUMERIC_FIELDS = ("shares", "purchasePrice", "totalCost")


def history_key(identity: str) -> str:
    return f"portfolio_history:{identity}"


def parse_holding(raw: dict) -> PortfolioHolding:
    """Validate one client-supplied holding; raises ValidationError on any bad field."""
    if not isinstance(raw, dict):
        raise ValidationError(INVALID_HOLDING)
    for name in ("id", "symbol", "name", "purchaseDate"):
        if not isinstance(raw.get(name), str) or (name != "name" and not raw[name].strip()):
            raise ValidationError(INVALID_HOLDING)
    for name in NUMERIC_FIELDS:
        value = raw.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValidationError(INVALID_HOLDING)
    try:
        return PortfolioHolding.from_dict(raw)
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise ValidationError(INVALID_HOLDING) from e


class PortfolioService:
    def __init__(self, repository: KeyedPortfolioRepository, envelope: CacheEnvelope):
        self._repository = repository
        self._envelope = envelope

    def get_holdings(self, identity: str) -> list[PortfolioHolding]:
        return self._repository.get(identity) or []

    def save_holdings(self, identity: str, raw_holdings: list) -> list[PortfolioHolding]:
        """Replace the whole holdings list. Nothing is stored if any holding is invalid."""
        if not isinstance(raw_holdings, list):
            raise ValidationError(INVALID_HOLDING)
        holdings = [parse_holding(raw) for raw in raw_holdings]
        self._repository.save(identity, holdings)
        self._envelope.invalidate(history_key(identity))
        logger.info("Saved %d holdings for %s", len(holdings), identity)
        return holdings

    def delete(self, identity: str, holding_id: Optional[str] = None) -> list[PortfolioHolding]:
        """Remove one holding by id, or the whole portfolio when no id is given."""
        holdings = self._repository.get(identity)
        if holdings is None:
            raise NotFoundError("Portfolio", identity)

        if holding_id is None:
            self._repository.delete(identity)
            remaining = []
        else:
            remaining = [h for h in holdings if h.id != holding_id]
            if len(remaining) == len(holdings):
                raise NotFoundError("Holding", holding_id)
            self._repository.save(identity, remaining)
        self._envelope.invalidate(history_key(identity))
        return remaining
