"""Batched upstream fetches with per-item timeout and failure accounting."""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Iterable, Optional, TypeVar

from spreads.domain.views import BatchReport, FetchOutcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


class FetchOrchestrator:
    """
    Runs one fetch per symbol in fixed-size batches.

    Items in a batch run concurrently; batches run sequentially with a delay
    between them. Each item gets its own timeout. A failure or timeout is
    recorded on that item only, so ``run`` never raises for upstream errors
    and always returns one outcome per input symbol, in input order.
    """

    def __init__(
        self,
        batch_size: int = 5,
        delay_seconds: float = 0.0,
        timeout_seconds: float = 10.0,
        max_errors: int = 10,
        sleep: Optional[Sleep] = None,
        name: str = "batch",
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.batch_size = batch_size
        self.delay_seconds = delay_seconds
        self.timeout_seconds = timeout_seconds
        self.max_errors = max_errors
        self._sleep = sleep or asyncio.sleep
        self._name = name

    async def run(
        self,
        symbols: Iterable[str],
        fetch: Callable[[str], Awaitable[T]],
    ) -> BatchReport[T]:
        items = list(symbols)
        started = time.monotonic()
        report: BatchReport[T] = BatchReport()

        for start in range(0, len(items), self.batch_size):
            batch = items[start:start + self.batch_size]
            outcomes = await asyncio.gather(*(self._fetch_one(s, fetch) for s in batch))
            report.results.extend(outcomes)

            done = start + len(batch)
            logger.info(
                "[%s] processed %d/%d (%d ok)", self._name, done, len(items), report.success_count
            )
            if done < len(items) and self.delay_seconds > 0:
                await self._sleep(self.delay_seconds)

        report.errors = [
            f"{r.symbol}: {r.error}" for r in report.results if not r.success
        ][: self.max_errors]
        report.duration_seconds = time.monotonic() - started
        if report.error_count:
            logger.warning(
                "[%s] %d of %d items failed", self._name, report.error_count, report.total
            )
        return report

    async def _fetch_one(
        self,
        symbol: str,
        fetch: Callable[[str], Awaitable[T]],
    ) -> FetchOutcome[T]:
        try:
            value = await asyncio.wait_for(fetch(symbol), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            return FetchOutcome(
                symbol=symbol, success=False, error=f"timed out after {self.timeout_seconds:g}s"
            )
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or type(e).__name__
            return FetchOutcome(symbol=symbol, success=False, error=message.strip())
        return FetchOutcome(symbol=symbol, success=True, value=value)
