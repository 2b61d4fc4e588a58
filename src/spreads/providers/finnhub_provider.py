"""Finnhub REST client."""

import logging
from datetime import date, timedelta
from typing import Optional

import httpx

from spreads.core.exceptions import UpstreamError
from spreads.core.timezone import date_from_epoch, epoch_seconds
from spreads.domain.models import HistoricalPricePoint, Quote
from spreads.providers.http import get_json, parse
from spreads.providers.schemas import (
    FinancialReport,
    FinancialsReported,
    FinnhubCandles,
    FinnhubMetrics,
    FinnhubQuote,
)

logger = logging.getLogger(__name__)

PROVIDER = "finnhub"


class FinnhubProvider:
    """Async Finnhub client over a shared httpx.AsyncClient."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        base_url: str = "https://finnhub.io/api/v1",
        timeout: float = 10.0,
    ):
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _get(self, path: str, **params) -> dict:
        if not self._api_key:
            raise UpstreamError(PROVIDER, "FINNHUB_API_KEY is not configured")
        params["token"] = self._api_key
        return await get_json(
            self._client, PROVIDER, f"{self._base_url}{path}", params=params, timeout=self._timeout
        )

    async def get_quote(self, symbol: str) -> Quote:
        q = parse(PROVIDER, FinnhubQuote, await self._get("/quote", symbol=symbol))
        return Quote(
            symbol=symbol,
            price=q.c,
            change=q.d or 0.0,
            change_percent=q.dp or 0.0,
            high=q.h,
            low=q.l,
            open=q.o,
            prev_close=q.pc,
        )

    async def get_metrics(self, symbol: str) -> FinnhubMetrics:
        payload = await self._get("/stock/metric", symbol=symbol, metric="all")
        return parse(PROVIDER, FinnhubMetrics, payload)

    async def get_candles(
        self, symbol: str, start: date, end: date, resolution: str = "D"
    ) -> list[HistoricalPricePoint]:
        payload = await self._get(
            "/stock/candle",
            symbol=symbol,
            resolution=resolution,
            # the "to" bound is exclusive at midnight, so extend it by one day
            **{"from": epoch_seconds(start), "to": epoch_seconds(end + timedelta(days=1)) - 1},
        )
        candles = parse(PROVIDER, FinnhubCandles, payload)
        if candles.s != "ok":
            return []

        points = []
        for i, ts in enumerate(candles.t):
            if i >= len(candles.c):
                break
            points.append(
                HistoricalPricePoint(
                    date=date_from_epoch(ts),
                    close=candles.c[i],
                    open=candles.o[i] if i < len(candles.o) else None,
                    high=candles.h[i] if i < len(candles.h) else None,
                    low=candles.l[i] if i < len(candles.l) else None,
                )
            )
        points.sort(key=lambda p: p.date)
        return points

    async def get_financials_reported(
        self, symbol: str, freq: str = "quarterly"
    ) -> list[FinancialReport]:
        payload = await self._get("/stock/financials-reported", symbol=symbol, freq=freq)
        return parse(PROVIDER, FinancialsReported, payload).data
