"""
Yahoo Finance quotes via yfinance.

yfinance is synchronous, so lookups run in a worker thread. Cancelling the
awaiting task does not stop that thread, so the worker carries its own
deadline and stops starting new ticker lookups once it passes.
"""

import asyncio
import logging
import time
from typing import Any, Callable, Optional

import pandas as pd

from spreads.core.exceptions import UpstreamError
from spreads.providers.http import parse
from spreads.providers.schemas import YahooQuote

logger = logging.getLogger(__name__)

PROVIDER = "yahoo"

_INFO_FIELDS = (
    "shortName",
    "longName",
    "regularMarketPrice",
    "regularMarketChange",
    "regularMarketChangePercent",
    "marketCap",
    "sector",
    "industry",
    "exchange",
)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _clean(value: Any) -> Optional[Any]:
    """Drop NaN/None values yfinance leaves in info dicts."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def _fetch_quotes_impl(
    symbols: list[str],
    timeout_seconds: Optional[float] = None,
    now: Callable[[], float] = time.monotonic,
) -> list[dict]:
    """
    Blocking yfinance lookup; symbols that fail individually are skipped.

    Past the deadline the remaining symbols are dropped. Running out of time
    before any symbol resolved is a TimeoutError.
    """
    deadline = now() + timeout_seconds if timeout_seconds is not None else None
    yf = _get_yf()
    tickers = yf.Tickers(" ".join(symbols))
    rows = []
    for index, sym in enumerate(symbols):
        if deadline is not None and now() >= deadline:
            if not rows:
                raise TimeoutError(f"timed out after {timeout_seconds:g}s")
            logger.warning(
                "yfinance deadline reached; dropping %d of %d symbols",
                len(symbols) - index, len(symbols),
            )
            break
        try:
            ticker = tickers.tickers.get(sym)
            info = ticker.info if ticker is not None else None
        except Exception as e:  # yfinance raises assorted errors per ticker
            logger.debug("yfinance info failed for %s: %s", sym, e)
            continue
        if not isinstance(info, dict):
            continue
        row = {"symbol": sym}
        for name in _INFO_FIELDS:
            row[name] = _clean(info.get(name))
        if row["regularMarketPrice"] is None:
            row["regularMarketPrice"] = _clean(info.get("currentPrice"))
        rows.append(row)
    return rows


class YahooQuoteProvider:
    """Bulk quote board for global exchanges."""

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._timeout = timeout_seconds

    async def get_quotes(self, symbols: list[str]) -> list[YahooQuote]:
        if not symbols:
            return []
        try:
            rows = await asyncio.to_thread(_fetch_quotes_impl, list(symbols), self._timeout)
        except Exception as e:
            raise UpstreamError(PROVIDER, str(e) or type(e).__name__) from e
        return [parse(PROVIDER, YahooQuote, row) for row in rows]
