"""Fresh -> compute -> stale -> static fallback resolution for cached reads."""

import logging
from typing import Any, Awaitable, Callable, Optional

from spreads.core.exceptions import AppError, NotFoundError, UpstreamError, ValidationError
from spreads.domain.models import CacheLookup, DataSource
from spreads.domain.views import CachedResult
from spreads.services.cache_envelope import CacheEnvelope
from spreads.services.memory_cache import MemoryCache

logger = logging.getLogger(__name__)


class StaleOnErrorResponder:
    """
    Serves a cached value, recomputing on miss and degrading on failure.

    Preference order: fresh store entry, fresh memory entry, freshly computed
    value, stale store entry, stale memory entry, static fallback, error.
    Validation and not-found outcomes are answers rather than failures and
    always propagate.
    """

    def __init__(self, envelope: CacheEnvelope, memory: Optional[MemoryCache] = None):
        self._envelope = envelope
        self._memory = memory

    async def serve(
        self,
        key: str,
        compute: Callable[[], Awaitable[Any]],
        ttl_seconds: int,
        *,
        source: DataSource,
        retain_seconds: Optional[int] = None,
        force_refresh: bool = False,
        use_memory: bool = False,
        fallback: Optional[Callable[[], Any]] = None,
        is_usable: Optional[Callable[[Any], bool]] = None,
    ) -> CachedResult:
        memory = self._memory if use_memory else None
        lookup = self._envelope.read(key)

        if not force_refresh:
            if lookup.is_fresh:
                return CachedResult(
                    lookup.value, cached=True, source=DataSource.CACHE, cache_age=lookup.age_seconds
                )
            if memory is not None and memory.get(key) is not None:
                value, age = memory.get_with_age(key)
                return CachedResult(value, cached=True, source=DataSource.MEMORY_CACHE, cache_age=age)

        try:
            value = await compute()
            if is_usable is not None and not is_usable(value):
                raise UpstreamError(source.value, "no usable data returned")
        except (ValidationError, NotFoundError):
            raise
        except Exception as e:
            return self._degrade(key, lookup, memory, fallback, e)

        self._envelope.write(key, value, ttl_seconds, retain_seconds)
        if memory is not None:
            memory.set(key, value)
        return CachedResult(value, cached=False, source=source)

    def _degrade(
        self,
        key: str,
        lookup: CacheLookup,
        memory: Optional[MemoryCache],
        fallback: Optional[Callable[[], Any]],
        error: Exception,
    ) -> CachedResult:
        message = getattr(error, "message", None) or str(error) or type(error).__name__

        if lookup.is_present:
            logger.warning("Serving stale %s (%.0fs old): %s", key, lookup.age_seconds, message)
            return CachedResult(
                lookup.value,
                cached=True,
                source=DataSource.STALE_CACHE,
                cache_age=lookup.age_seconds,
                error=message,
            )

        if memory is not None:
            hit = memory.get_with_age(key)
            if hit is not None:
                logger.warning("Serving stale in-memory %s: %s", key, message)
                return CachedResult(
                    hit[0], cached=True, source=DataSource.STALE_CACHE, cache_age=hit[1], error=message
                )

        if fallback is not None:
            logger.warning("Serving static fallback for %s: %s", key, message)
            return CachedResult(fallback(), cached=False, source=DataSource.FALLBACK, error=message)

        logger.error("No cached value for %s after failure: %s", key, message)
        if isinstance(error, AppError):
            raise error
        raise UpstreamError("upstream", message) from error
