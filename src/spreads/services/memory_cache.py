"""Process-local short-TTL cache."""

from typing import Any, Optional

from spreads.core.clock import Clock


class MemoryCache:
    """
    Process-wide key -> (value, stored_at) map.

    Starts empty and is filled on first miss. Not shared between processes;
    writes are last-write-wins assignments of immutable snapshots.
    """

    def __init__(self, clock: Clock, ttl_seconds: int = 300):
        self._clock = clock
        self._ttl_ms = ttl_seconds * 1000
        self._entries: dict[str, tuple[Any, int]] = {}

    def get(self, key: str) -> Optional[Any]:
        """Value stored under key if it is still within the TTL."""
        hit = self.get_with_age(key)
        if hit is None:
            return None
        value, age = hit
        return value if age * 1000 < self._ttl_ms else None

    def get_with_age(self, key: str) -> Optional[tuple[Any, float]]:
        """Value and its age in seconds, regardless of TTL."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, stored_at = entry
        return value, max(0, self._clock.now_ms() - stored_at) / 1000

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (value, self._clock.now_ms())

    def delete(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def clear(self, prefix: str = "") -> int:
        doomed = [k for k in self._entries if k.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)
