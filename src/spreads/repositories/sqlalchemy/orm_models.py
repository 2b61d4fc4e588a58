"""SQLAlchemy ORM model definitions."""

from sqlalchemy import BigInteger, Column, String, Text

from spreads.repositories.sqlalchemy.database import Base


class KvEntryORM(Base):
    """Flat key -> JSON value, with optional expiry."""

    __tablename__ = "kv_entries"

    key = Column(String(512), primary_key=True)
    value_json = Column(Text, nullable=False)
    expires_at_ms = Column(BigInteger, nullable=True)


class KvHashFieldORM(Base):
    """One field of a hash-style record."""

    __tablename__ = "kv_hash_fields"

    name = Column(String(255), primary_key=True)
    field = Column(String(255), primary_key=True)
    value_json = Column(Text, nullable=False)


class KvSetMemberORM(Base):
    """One member of a set-style index."""

    __tablename__ = "kv_set_members"

    name = Column(String(255), primary_key=True)
    member = Column(String(255), primary_key=True)
