"""SQLAlchemy repository implementations."""

from spreads.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    init_db,
    reset_database,
    Base,
)
from spreads.repositories.sqlalchemy.kv_store import SqlAlchemyKeyedStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyKeyedStore",
]
