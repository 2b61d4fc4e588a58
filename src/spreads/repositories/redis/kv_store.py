"""Redis implementation of KeyedStore."""

import json
from typing import Any, Optional, Set

import redis

URL_SCHEMES = ("redis", "rediss", "unix")


def is_redis_url(url: Optional[str]) -> bool:
    """True for URLs redis-py can connect to; HTTP(S) REST endpoints are not."""
    if not url or "://" not in url:
        return False
    return url.split("://", 1)[0].lower() in URL_SCHEMES


class RedisKeyedStore:
    """
    KeyedStore over redis-py.

    Values are JSON encoded. The client is created lazily so an unconfigured
    store can be constructed and checked without a connection. The token is
    sent as the password unless the URL carries one.
    """

    def __init__(
        self,
        url: Optional[str],
        token: Optional[str] = None,
        client: Optional[redis.Redis] = None,
    ):
        self._url = url
        self._token = token
        self._client = client

    def is_available(self) -> bool:
        return self._client is not None or is_redis_url(self._url)

    @property
    def client(self) -> redis.Redis:
        if self._client is None:
            self._client = redis.from_url(
                self._url,
                password=self._token,
                decode_responses=True,
                socket_timeout=5,
            )
        return self._client

    def get(self, key: str) -> Optional[Any]:
        raw = self.client.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        self.client.set(key, json.dumps(value), ex=ttl_seconds)

    def delete(self, key: str) -> None:
        self.client.delete(key)

    def keys(self, prefix: str = "") -> list[str]:
        return sorted(self.client.scan_iter(match=f"{prefix}*"))

    def hget(self, name: str, field: str) -> Optional[Any]:
        raw = self.client.hget(name, field)
        return json.loads(raw) if raw is not None else None

    def hset(self, name: str, field: str, value: Any) -> None:
        self.client.hset(name, field, json.dumps(value))

    def hdel(self, name: str, field: str) -> None:
        self.client.hdel(name, field)

    def hgetall(self, name: str) -> dict[str, Any]:
        return {k: json.loads(v) for k, v in self.client.hgetall(name).items()}

    def sadd(self, name: str, member: str) -> None:
        self.client.sadd(name, member)

    def smembers(self, name: str) -> Set[str]:
        return set(self.client.smembers(name))

    def srem(self, name: str, member: str) -> None:
        self.client.srem(name, member)
