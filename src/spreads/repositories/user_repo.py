"""User records and their membership indexes on top of a KeyedStore."""

from typing import Optional

from spreads.domain.models import StoredUser
from spreads.repositories.protocols import KeyedStore

USERS_HASH = "users"
USERNAME_INDEX_HASH = "username_to_email"
REGISTERED_USERS_SET = "registered_users"


class KeyedUserRepository:
    """
    Users live in the ``users`` hash keyed by email.

    The ``username_to_email`` hash maps lowercase usernames to emails and the
    ``registered_users`` set enumerates known identities. Updates across these
    keys are ordered but not atomic.
    """

    def __init__(self, store: KeyedStore):
        self._store = store

    def get(self, email: str) -> Optional[StoredUser]:
        raw = self._store.hget(USERS_HASH, email)
        return StoredUser.from_dict(raw) if raw else None

    def save(self, user: StoredUser) -> None:
        self._store.hset(USERS_HASH, user.email, user.to_dict())
        self._store.sadd(REGISTERED_USERS_SET, user.email)

    def list_all(self) -> list[StoredUser]:
        users = []
        for email in sorted(self._store.smembers(REGISTERED_USERS_SET)):
            user = self.get(email)
            if user is not None:
                users.append(user)
        return users

    def delete(self, email: str) -> None:
        user = self.get(email)
        self._store.hdel(USERS_HASH, email)
        self._store.srem(REGISTERED_USERS_SET, email)
        if user and user.username:
            self.unindex_username(user.username)

    # Username index

    def email_for_username(self, username: str) -> Optional[str]:
        return self._store.hget(USERNAME_INDEX_HASH, username.lower())

    def index_username(self, username: str, email: str) -> None:
        self._store.hset(USERNAME_INDEX_HASH, username.lower(), email)

    def unindex_username(self, username: str) -> None:
        self._store.hdel(USERNAME_INDEX_HASH, username.lower())
