"""Daily point claims, streaks and the reward grid."""

import logging
from datetime import date, timedelta
from typing import Optional

from spreads.core.clock import Clock
from spreads.core.exceptions import AlreadyClaimedError
from spreads.core.timezone import parse_date
from spreads.domain.models import StoredUser
from spreads.repositories.user_repo import KeyedUserRepository
from spreads.services.profile_service import ProfileService

logger = logging.getLogger(__name__)


def _last_claim(user: StoredUser) -> Optional[date]:
    return parse_date(user.last_claim_date) if user.last_claim_date else None


class PointsService:
    """One point per UTC day; consecutive days extend the streak."""

    def __init__(self, profiles: ProfileService, users: KeyedUserRepository, clock: Clock):
        self._profiles = profiles
        self._users = users
        self._clock = clock

    def status(self, email: str) -> dict:
        user = self._profiles.get_or_create_user(email)
        return {
            "totalPoints": user.total_points,
            "streakDays": user.streak_days,
            "lastClaimDate": user.last_claim_date,
            "gridState": list(user.grid_state),
            "canClaimToday": _last_claim(user) != self._clock.utc_today(),
        }

    def claim(self, email: str) -> dict:
        user = self._profiles.get_or_create_user(email)
        today = self._clock.utc_today()
        last = _last_claim(user)
        if last == today:
            raise AlreadyClaimedError()

        user.streak_days = user.streak_days + 1 if last == today - timedelta(days=1) else 1
        user.total_points += 1
        user.last_claim_date = today.isoformat()
        new_square = next((i for i, filled in enumerate(user.grid_state) if not filled), None)
        if new_square is not None:
            user.grid_state[new_square] = True
        self._users.save(user)

        logger.info("%s claimed a point (streak %d)", email, user.streak_days)
        return {
            "success": True,
            "totalPoints": user.total_points,
            "streakDays": user.streak_days,
            "lastClaimDate": user.last_claim_date,
            "gridState": list(user.grid_state),
            "newSquareIndex": new_square,
        }
