"""Holdings persistence on top of a KeyedStore."""

from typing import Optional

from spreads.domain.models import PortfolioHolding
from spreads.repositories.protocols import KeyedStore

PORTFOLIOS_HASH = "portfolios"


class KeyedPortfolioRepository:
    """One holdings list per user identity, stored as a field of the portfolios hash."""

    def __init__(self, store: KeyedStore):
        self._store = store

    def get(self, identity: str) -> Optional[list[PortfolioHolding]]:
        """Return the user's holdings, or None if no portfolio was ever saved."""
        raw = self._store.hget(PORTFOLIOS_HASH, identity)
        if raw is None:
            return None
        return [PortfolioHolding.from_dict(h) for h in raw]

    def save(self, identity: str, holdings: list[PortfolioHolding]) -> None:
        self._store.hset(PORTFOLIOS_HASH, identity, [h.to_dict() for h in holdings])

    def delete(self, identity: str) -> None:
        self._store.hdel(PORTFOLIOS_HASH, identity)
