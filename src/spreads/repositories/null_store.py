"""Keyed store used when no persistent store is configured."""

from typing import Any, Optional, Set


class NullKeyedStore:
    """Never available; reads miss and writes are dropped."""

    def is_available(self) -> bool:
        return False

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        return None

    def delete(self, key: str) -> None:
        return None

    def keys(self, prefix: str = "") -> list[str]:
        return []

    def hget(self, name: str, field: str) -> Optional[Any]:
        return None

    def hset(self, name: str, field: str, value: Any) -> None:
        return None

    def hdel(self, name: str, field: str) -> None:
        return None

    def hgetall(self, name: str) -> dict[str, Any]:
        return {}

    def sadd(self, name: str, member: str) -> None:
        return None

    def smembers(self, name: str) -> Set[str]:
        return set()

    def srem(self, name: str, member: str) -> None:
        return None
