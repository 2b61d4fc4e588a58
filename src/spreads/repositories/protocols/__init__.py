"""Repository protocol definitions (interfaces)."""

from spreads.repositories.protocols.kv_store import KeyedStore

__all__ = ["KeyedStore"]
