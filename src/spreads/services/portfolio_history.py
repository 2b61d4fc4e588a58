"""Portfolio value history: hash-checked cache over a full snapshot series."""

import logging
from datetime import date
from typing import Optional

from spreads.calculators.portfolio import (
    compute_snapshots,
    date_range_for_timeframe,
    earliest_purchase_date,
    filter_snapshots,
    history_dates,
    holdings_hash,
)
from spreads.core.clock import Clock
from spreads.core.exceptions import AppError, NotFoundError, UpstreamError, ValidationError
from spreads.core.timezone import parse_date
from spreads.domain.models import CacheLookup, DateRange, PortfolioHistory, Timeframe
from spreads.providers.protocols import FinancialDataProvider
from spreads.repositories.portfolio_repo import KeyedPortfolioRepository
from spreads.services.cache_envelope import CacheEnvelope
from spreads.services.fetch_orchestrator import FetchOrchestrator
from spreads.services.portfolio_service import history_key

logger = logging.getLogger(__name__)

INVALID_TIMEFRAME = "Invalid timeframe. Must be one of: " + ", ".join(t.value for t in Timeframe)


def parse_timeframe(value: Optional[str]) -> Timeframe:
    if value is None:
        return Timeframe.ONE_MONTH
    try:
        return Timeframe(value)
    except ValueError:
        raise ValidationError(INVALID_TIMEFRAME)


def prices_key(symbol: str, start: date, end: date) -> str:
    return f"stock_prices:{symbol}:{start.isoformat()}:{end.isoformat()}"


class PortfolioHistoryEngine:
    """
    Serves timeframe slices of a user's portfolio value series.

    The full series (the union of every timeframe's sampled dates) is
    cached per user together with the holdings hash it was built from. A
    cached series is reused only while the hash still matches;
    any other request recomputes it from quotes and daily closes.
    """

    def __init__(
        self,
        repository: KeyedPortfolioRepository,
        provider: FinancialDataProvider,
        envelope: CacheEnvelope,
        clock: Clock,
        quote_orchestrator: FetchOrchestrator,
        price_orchestrator: FetchOrchestrator,
        ttl_seconds: int = 3600,
        candles_ttl_seconds: int = 604800,
    ):
        self._repository = repository
        self._provider = provider
        self._envelope = envelope
        self._clock = clock
        self._quote_orchestrator = quote_orchestrator
        self._price_orchestrator = price_orchestrator
        self._ttl = ttl_seconds
        self._candles_ttl = candles_ttl_seconds

    async def get_history(
        self,
        identity: str,
        timeframe: Optional[str] = None,
        force_refresh: bool = False,
    ) -> dict:
        frame = parse_timeframe(timeframe)
        holdings = self._repository.get(identity) or []
        if not holdings:
            raise NotFoundError("No holdings found")

        today = self._clock.today()
        digest = holdings_hash(holdings)
        date_range = date_range_for_timeframe(
            frame, today, earliest_purchase_date(holdings, today)
        )

        key = history_key(identity)
        lookup = self._envelope.read(key)
        cached = self._matching(lookup, digest)
        if cached is not None and lookup.is_fresh and not force_refresh:
            logger.debug("Portfolio history cache hit for %s", identity)
            return self._respond(frame, cached, date_range, cached=True)

        try:
            history = await self.compute(identity, holdings, digest, today)
        except (ValidationError, NotFoundError):
            raise
        except Exception as e:
            if cached is None:
                if isinstance(e, AppError):
                    raise
                raise UpstreamError("portfolio history", str(e) or type(e).__name__) from e
            message = getattr(e, "message", None) or str(e)
            logger.warning("Serving stale portfolio history for %s: %s", identity, message)
            body = self._respond(frame, cached, date_range, cached=True)
            body["error"] = message
            return body

        self._envelope.write(key, history.to_dict(), self._ttl)
        return self._respond(frame, history, date_range, cached=False)

    @staticmethod
    def _matching(lookup: CacheLookup, digest: str) -> Optional[PortfolioHistory]:
        if not lookup.is_present:
            return None
        try:
            history = PortfolioHistory.from_dict(lookup.value)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed portfolio history entry")
            return None
        return history if history.holdings_hash == digest else None

    @staticmethod
    def _respond(
        frame: Timeframe, history: PortfolioHistory, date_range: DateRange, cached: bool
    ) -> dict:
        return {
            "timeframe": frame.value,
            "snapshots": [s.to_dict() for s in filter_snapshots(history.snapshots, date_range)],
            "dateRange": {"from": date_range.start.isoformat(), "to": date_range.end.isoformat()},
            "cached": cached,
            "calculatedAt": history.last_calculated,
        }

    async def compute(
        self, identity: str, holdings: list, digest: str, today: date
    ) -> PortfolioHistory:
        symbols = sorted({h.symbol for h in holdings})
        earliest = earliest_purchase_date(holdings, today)

        quote_report = await self._quote_orchestrator.run(symbols, self._provider.get_quote)
        quotes = {
            sym: q.price for sym, q in quote_report.values().items() if q.price and q.price > 0
        }

        price_report = await self._price_orchestrator.run(
            symbols, lambda sym: self.load_prices(sym, earliest, today)
        )
        prices = {sym: price_report.values().get(sym, {}) for sym in symbols}

        snapshots = compute_snapshots(
            holdings, history_dates(today, earliest), today, quotes, prices
        )
        logger.info(
            "Computed %d portfolio snapshots for %s (%d/%d quotes)",
            len(snapshots), identity, len(quotes), len(symbols),
        )
        return PortfolioHistory(
            user_identity=identity,
            holdings_hash=digest,
            last_calculated=self._clock.now().isoformat(),
            snapshots=snapshots,
        )

    async def load_prices(self, symbol: str, start: date, end: date) -> dict[date, float]:
        """Daily closes for a symbol over [start, end], cached per exact range."""
        key = prices_key(symbol, start, end)
        lookup = self._envelope.read(key)
        if lookup.is_fresh:
            return {parse_date(d): close for d, close in lookup.value.items()}

        candles = await self._provider.get_candles(symbol, start, end)
        closes = {p.date: p.close for p in candles}
        self._envelope.write(
            key, {d.isoformat(): close for d, close in closes.items()}, self._candles_ttl
        )
        return closes
