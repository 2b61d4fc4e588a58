"""SQLAlchemy implementation of KeyedStore."""

import json
from typing import Any, Optional, Set

from sqlalchemy.orm import sessionmaker

from spreads.core.clock import Clock, get_clock
from spreads.repositories.sqlalchemy.orm_models import (
    KvEntryORM,
    KvHashFieldORM,
    KvSetMemberORM,
)


class SqlAlchemyKeyedStore:
    """
    SQL-backed keyed store for single-node deployments and tests.

    Each operation runs in its own short session, so a single call is atomic
    but a sequence of calls is not.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Optional[Clock] = None,
        available: bool = True,
    ):
        self._session_factory = session_factory
        self._clock = clock or get_clock()
        self._available = available

    def is_available(self) -> bool:
        return self._available

    # Flat keys

    def get(self, key: str) -> Optional[Any]:
        with self._session_factory() as db:
            row = db.get(KvEntryORM, key)
            if row is None:
                return None
            if row.expires_at_ms is not None and row.expires_at_ms <= self._clock.now_ms():
                db.delete(row)
                db.commit()
                return None
            return json.loads(row.value_json)

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        expires = self._clock.now_ms() + ttl_seconds * 1000 if ttl_seconds else None
        with self._session_factory() as db:
            row = db.get(KvEntryORM, key)
            if row is None:
                row = KvEntryORM(key=key)
                db.add(row)
            row.value_json = json.dumps(value)
            row.expires_at_ms = expires
            db.commit()

    def delete(self, key: str) -> None:
        with self._session_factory() as db:
            db.query(KvEntryORM).filter(KvEntryORM.key == key).delete()
            db.commit()

    def keys(self, prefix: str = "") -> list[str]:
        now_ms = self._clock.now_ms()
        with self._session_factory() as db:
            rows = (
                db.query(KvEntryORM)
                .filter(KvEntryORM.key.startswith(prefix, autoescape=True))
                .order_by(KvEntryORM.key)
                .all()
            )
            return [
                r.key for r in rows if r.expires_at_ms is None or r.expires_at_ms > now_ms
            ]

    # Hashes

    def hget(self, name: str, field: str) -> Optional[Any]:
        with self._session_factory() as db:
            row = db.get(KvHashFieldORM, (name, field))
            return json.loads(row.value_json) if row else None

    def hset(self, name: str, field: str, value: Any) -> None:
        with self._session_factory() as db:
            row = db.get(KvHashFieldORM, (name, field))
            if row is None:
                row = KvHashFieldORM(name=name, field=field)
                db.add(row)
            row.value_json = json.dumps(value)
            db.commit()

    def hdel(self, name: str, field: str) -> None:
        with self._session_factory() as db:
            db.query(KvHashFieldORM).filter(
                KvHashFieldORM.name == name,
                KvHashFieldORM.field == field,
            ).delete()
            db.commit()

    def hgetall(self, name: str) -> dict[str, Any]:
        with self._session_factory() as db:
            rows = db.query(KvHashFieldORM).filter(KvHashFieldORM.name == name).all()
            return {r.field: json.loads(r.value_json) for r in rows}

    # Sets

    def sadd(self, name: str, member: str) -> None:
        with self._session_factory() as db:
            if db.get(KvSetMemberORM, (name, member)) is None:
                db.add(KvSetMemberORM(name=name, member=member))
                db.commit()

    def smembers(self, name: str) -> Set[str]:
        with self._session_factory() as db:
            rows = db.query(KvSetMemberORM).filter(KvSetMemberORM.name == name).all()
            return {r.member for r in rows}

    def srem(self, name: str, member: str) -> None:
        with self._session_factory() as db:
            db.query(KvSetMemberORM).filter(
                KvSetMemberORM.name == name,
                KvSetMemberORM.member == member,
            ).delete()
            db.commit()
