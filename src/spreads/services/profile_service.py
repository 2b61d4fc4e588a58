"""User records, username rules and the username index."""

import logging
import math
import re
import uuid
from datetime import datetime
from typing import Optional

from spreads.config.universe import RESERVED_USERNAMES
from spreads.core.clock import Clock
from spreads.core.exceptions import NotFoundError, RateLimitedError, ValidationError
from spreads.domain.models import StoredUser
from spreads.repositories.user_repo import KeyedUserRepository

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")
MIN_USERNAME = 3
MAX_USERNAME = 20


def username_problem(username: str) -> Optional[str]:
    """Reason a username is malformed or reserved, or None if its shape is acceptable."""
    if not MIN_USERNAME <= len(username) <= MAX_USERNAME:
        return f"Username must be {MIN_USERNAME}-{MAX_USERNAME} characters"
    if not USERNAME_PATTERN.match(username):
        return "Only letters, numbers, and underscores allowed"
    if username.startswith("_") or username.endswith("_"):
        return "Cannot start or end with underscore"
    if username.lower() in RESERVED_USERNAMES:
        return "This username is reserved"
    return None


class ProfileService:
    def __init__(
        self,
        users: KeyedUserRepository,
        clock: Clock,
        username_change_days: int = 7,
    ):
        self._users = users
        self._clock = clock
        self._change_days = username_change_days

    def check_username(self, username: Optional[str], email: Optional[str] = None) -> dict:
        """
        Availability of a username.

        A name already indexed to ``email`` itself counts as available, so a
        user can re-submit their own name with different casing.
        """
        if not username:
            raise ValidationError("Username is required")
        reason = username_problem(username)
        if reason is None:
            owner = self._users.email_for_username(username)
            if owner is not None and owner != email:
                reason = "Username is already taken"
        if reason:
            return {"available": False, "reason": reason}
        return {"available": True}

    def get_or_create_user(
        self, email: str, name: Optional[str] = None, image: Optional[str] = None
    ) -> StoredUser:
        user = self._users.get(email)
        if user is not None:
            return user
        now = self._clock.now().isoformat()
        user = StoredUser(
            id=str(uuid.uuid4()),
            email=email,
            name=name,
            image=image,
            created_at=now,
            last_login_at=now,
        )
        self._users.save(user)
        logger.info("Created user record for %s", email)
        return user

    def get_profile(self, email: str) -> StoredUser:
        return self.get_or_create_user(email)

    def update_username(self, email: str, username: Optional[str]) -> StoredUser:
        """
        Change a user's username, at most once per ``username_change_days``.

        Writes the user record first, then indexes the new name, then drops
        the old index entry.
        """
        user = self.get_or_create_user(email)
        if not username:
            raise ValidationError("Username is required")
        if user.username == username:
            return user

        check = self.check_username(username, email=email)
        if not check["available"]:
            raise ValidationError(check["reason"])

        now = self._clock.now()
        if user.username and user.username_last_changed:
            elapsed = now - datetime.fromisoformat(user.username_last_changed)
            remaining_seconds = self._change_days * 86400 - elapsed.total_seconds()
            if remaining_seconds > 0:
                days = math.ceil(remaining_seconds / 86400)
                raise RateLimitedError(
                    f"You can change your username again in {days} day{'s' if days != 1 else ''}",
                    days_remaining=days,
                )

        old = user.username
        user.username = username
        user.username_last_changed = now.isoformat()
        self._users.save(user)
        self._users.index_username(username, email)
        if old and old.lower() != username.lower():
            self._users.unindex_username(old)
        logger.info("Username for %s changed from %s to %s", email, old, username)
        return user

    def list_users(self) -> list[StoredUser]:
        return self._users.list_all()

    def require_user(self, email: str) -> StoredUser:
        user = self._users.get(email)
        if user is None:
            raise NotFoundError("User", email)
        return user
