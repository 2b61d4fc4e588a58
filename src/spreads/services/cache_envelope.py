"""Cache envelope: timestamped entries with per-kind freshness over a KeyedStore."""

import logging
from typing import Any, Optional

from spreads.core.clock import Clock
from spreads.domain.models import CacheEntry, CacheLookup, CacheStatus
from spreads.repositories.protocols import KeyedStore

logger = logging.getLogger(__name__)


class CacheEnvelope:
    """
    Wraps payloads in a CacheEntry and classifies reads as fresh, stale or miss.

    The store keeps an entry for ``retain_seconds`` (at least its TTL), so an
    expired-but-present entry can still be served by the stale-on-error path.
    Store failures never reach the caller: reads degrade to a miss and writes
    are dropped.
    """

    def __init__(
        self,
        store: KeyedStore,
        clock: Clock,
        default_retention_seconds: int = 604800,
    ):
        self._store = store
        self._clock = clock
        self._default_retention = default_retention_seconds

    @property
    def available(self) -> bool:
        return self._store.is_available()

    def read(self, key: str) -> CacheLookup:
        """Look up key; a present entry older than its TTL is reported stale."""
        if not self.available:
            return CacheLookup.miss()
        try:
            raw = self._store.get(key)
        except Exception as e:
            logger.warning("Cache read failed for %s: %s", key, e)
            return CacheLookup.miss()
        if raw is None:
            return CacheLookup.miss()

        try:
            entry = CacheEntry.from_dict(raw)
        except (KeyError, TypeError, ValueError):
            logger.warning("Discarding malformed cache entry %s", key)
            return CacheLookup.miss()

        now_ms = self._clock.now_ms()
        status = CacheStatus.FRESH if entry.is_fresh(now_ms) else CacheStatus.STALE
        return CacheLookup(status=status, value=entry.payload, age_seconds=entry.age_seconds(now_ms))

    def write(
        self,
        key: str,
        value: Any,
        ttl_seconds: int,
        retain_seconds: Optional[int] = None,
    ) -> None:
        entry = CacheEntry(payload=value, stored_at_ms=self._clock.now_ms(), ttl_seconds=ttl_seconds)
        if not self.available:
            return
        retain = max(ttl_seconds, retain_seconds or self._default_retention)
        try:
            self._store.set(key, entry.to_dict(), retain)
        except Exception as e:
            logger.warning("Cache write failed for %s: %s", key, e)

    def invalidate(self, key: str) -> None:
        if not self.available:
            return
        try:
            self._store.delete(key)
        except Exception as e:
            logger.warning("Cache invalidation failed for %s: %s", key, e)

    def purge(self, prefix: str) -> int:
        """Delete every entry whose key starts with prefix. Returns the count removed."""
        if not self.available:
            return 0
        removed = 0
        try:
            for key in self._store.keys(prefix):
                self._store.delete(key)
                removed += 1
        except Exception as e:
            logger.warning("Cache purge of %r stopped after %d keys: %s", prefix, removed, e)
        return removed
