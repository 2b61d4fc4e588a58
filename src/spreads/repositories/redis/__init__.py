"""Redis-backed keyed store."""

from spreads.repositories.redis.kv_store import RedisKeyedStore

__all__ = ["RedisKeyedStore"]
