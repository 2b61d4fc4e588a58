"""Cache envelope domain models."""

from dataclasses import dataclass
from typing import Any, Optional

from spreads.domain.models.enums import CacheStatus


@dataclass(frozen=True)
class CacheEntry:
    """
    A cached payload stamped with its write time and freshness policy.

    Entries are immutable: a newer write under the same key supersedes the old one.
    """

    payload: Any
    stored_at_ms: int
    ttl_seconds: int

    def __post_init__(self) -> None:
        if self.ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")

    def age_seconds(self, now_ms: int) -> float:
        return max(0, now_ms - self.stored_at_ms) / 1000

    def is_fresh(self, now_ms: int) -> bool:
        return now_ms - self.stored_at_ms < self.ttl_seconds * 1000

    def to_dict(self) -> dict:
        return {
            "payload": self.payload,
            "storedAtEpochMs": self.stored_at_ms,
            "ttlSeconds": self.ttl_seconds,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CacheEntry":
        return cls(
            payload=data["payload"],
            stored_at_ms=int(data["storedAtEpochMs"]),
            ttl_seconds=int(data["ttlSeconds"]),
        )


@dataclass(frozen=True)
class CacheLookup:
    """Result of reading a key through the cache envelope."""

    status: CacheStatus
    value: Any = None
    age_seconds: Optional[float] = None

    @property
    def is_fresh(self) -> bool:
        return self.status == CacheStatus.FRESH

    @property
    def is_present(self) -> bool:
        return self.status != CacheStatus.MISS

    @classmethod
    def miss(cls) -> "CacheLookup":
        return cls(status=CacheStatus.MISS)
