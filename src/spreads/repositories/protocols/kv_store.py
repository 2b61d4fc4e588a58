"""Keyed store protocol."""

from typing import Any, Optional, Protocol, Set


class KeyedStore(Protocol):
    """
    Uniform key-value store interface.

    Values are JSON-serialisable. Single-key operations are atomic at the store
    level; sequences across keys are not transactional.
    """

    def is_available(self) -> bool:
        """True iff a usable connection is configured."""
        ...

    def get(self, key: str) -> Optional[Any]:
        """Return the value under key, or None if absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """Store value under key, expiring after ttl_seconds if given."""
        ...

    def delete(self, key: str) -> None:
        ...

    def keys(self, prefix: str = "") -> list[str]:
        """Flat keys starting with prefix."""
        ...

    # Hash operations
    def hget(self, name: str, field: str) -> Optional[Any]:
        ...

    def hset(self, name: str, field: str, value: Any) -> None:
        ...

    def hdel(self, name: str, field: str) -> None:
        ...

    def hgetall(self, name: str) -> dict[str, Any]:
        ...

    # Set operations
    def sadd(self, name: str, member: str) -> None:
        ...

    def smembers(self, name: str) -> Set[str]:
        ...

    def srem(self, name: str, member: str) -> None:
        ...
