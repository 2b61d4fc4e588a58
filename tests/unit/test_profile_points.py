"""
Unit tests for ProfileService and PointsService.

Tests cover:
- Username shape rules and availability
- Username changes, index maintenance and the change rate limit
- Daily claims, streak continuation and reset, grid filling
"""

import pytest

from spreads.core.exceptions import (
    AlreadyClaimedError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)
from spreads.services import PointsService, ProfileService
from spreads.services.profile_service import username_problem

ALICE = "alice@example.com"
BOB = "bob@example.com"


@pytest.fixture
def profiles(user_repo, clock) -> ProfileService:
    return ProfileService(user_repo, clock)


@pytest.fixture
def points(profiles, user_repo, clock) -> PointsService:
    return PointsService(profiles, user_repo, clock)


# =============================================================================
# Username rules
# =============================================================================


class TestUsernameProblem:
    @pytest.mark.parametrize(
        "username, reason",
        [
            ("ab", "Username must be 3-20 characters"),
            ("a" * 21, "Username must be 3-20 characters"),
            ("bad-name", "Only letters, numbers, and underscores allowed"),
            ("_abc", "Cannot start or end with underscore"),
            ("abc_", "Cannot start or end with underscore"),
            ("admin", "This username is reserved"),
            ("Admin", "This username is reserved"),
        ],
    )
    def test_rejections(self, username, reason):
        assert username_problem(username) == reason

    def test_accepts_plain_name(self):
        assert username_problem("trader_42") is None


class TestCheckUsername:
    def test_available(self, profiles):
        assert profiles.check_username("bulls") == {"available": True}

    def test_reserved(self, profiles):
        assert profiles.check_username("admin") == {
            "available": False,
            "reason": "This username is reserved",
        }

    def test_required(self, profiles):
        with pytest.raises(ValidationError):
            profiles.check_username("")

    def test_taken_is_case_insensitive(self, profiles):
        profiles.update_username(BOB, "Bulls")

        assert profiles.check_username("bulls") == {
            "available": False,
            "reason": "Username is already taken",
        }

    def test_own_name_counts_as_available(self, profiles):
        profiles.update_username(ALICE, "bulls")

        assert profiles.check_username("BULLS", email=ALICE) == {"available": True}


# =============================================================================
# Profile
# =============================================================================


class TestProfile:
    def test_first_read_creates_record(self, profiles, user_repo, fixed_now):
        user = profiles.get_profile(ALICE)

        assert user.email == ALICE
        assert user.created_at == fixed_now.isoformat()
        assert user.total_points == 0
        assert user_repo.get(ALICE) == user

    def test_second_read_returns_same_record(self, profiles):
        first = profiles.get_profile(ALICE)

        assert profiles.get_profile(ALICE).id == first.id

    def test_list_users(self, profiles):
        profiles.get_profile(BOB)
        profiles.get_profile(ALICE)

        assert [u.email for u in profiles.list_users()] == [ALICE, BOB]

    def test_require_unknown_user(self, profiles):
        with pytest.raises(NotFoundError):
            profiles.require_user("ghost@example.com")


class TestUpdateUsername:
    def test_first_username_is_indexed(self, profiles, user_repo, fixed_now):
        user = profiles.update_username(ALICE, "Bulls")

        assert user.username == "Bulls"
        assert user.username_last_changed == fixed_now.isoformat()
        assert user_repo.email_for_username("bulls") == ALICE

    def test_taken_name_rejected(self, profiles):
        profiles.update_username(BOB, "bulls")

        with pytest.raises(ValidationError) as exc_info:
            profiles.update_username(ALICE, "bulls")

        assert exc_info.value.message == "Username is already taken"

    def test_malformed_name_rejected(self, profiles):
        with pytest.raises(ValidationError):
            profiles.update_username(ALICE, "_abc")

    def test_same_name_is_a_no_op(self, profiles, clock):
        profiles.update_username(ALICE, "bulls")
        clock.advance(days=1)

        user = profiles.update_username(ALICE, "bulls")

        assert user.username == "bulls"

    def test_change_within_window_is_rate_limited(self, profiles, clock):
        """
        GIVEN a username set two days ago
        WHEN the user tries to change it
        THEN the change is refused with five days remaining
        """
        profiles.update_username(ALICE, "alpha")
        clock.advance(days=2)

        with pytest.raises(RateLimitedError) as exc_info:
            profiles.update_username(ALICE, "beta")

        assert exc_info.value.days_remaining == 5
        assert exc_info.value.message == "You can change your username again in 5 days"

    def test_partial_day_rounds_up(self, profiles, clock):
        profiles.update_username(ALICE, "alpha")
        clock.advance(days=6, seconds=3600)

        with pytest.raises(RateLimitedError) as exc_info:
            profiles.update_username(ALICE, "beta")

        assert exc_info.value.days_remaining == 1
        assert exc_info.value.message.endswith("in 1 day")

    def test_change_after_window_moves_index(self, profiles, user_repo, clock):
        profiles.update_username(ALICE, "alpha")
        clock.advance(days=7)

        profiles.update_username(ALICE, "beta")

        assert user_repo.email_for_username("beta") == ALICE
        assert user_repo.email_for_username("alpha") is None
        assert profiles.check_username("alpha", email=BOB) == {"available": True}


# =============================================================================
# Points
# =============================================================================


class TestPoints:
    def test_status_for_new_user(self, points):
        status = points.status(ALICE)

        assert status["totalPoints"] == 0
        assert status["streakDays"] == 0
        assert status["canClaimToday"] is True
        assert len(status["gridState"]) == 49

    def test_first_claim(self, points):
        result = points.claim(ALICE)

        assert result["success"] is True
        assert result["totalPoints"] == 1
        assert result["streakDays"] == 1
        assert result["lastClaimDate"] == "2024-06-14"
        assert result["newSquareIndex"] == 0
        assert result["gridState"][0] is True

    def test_claim_after_yesterday_extends_streak(self, points, profiles, user_repo):
        user = profiles.get_profile(ALICE)
        user.last_claim_date = "2024-06-13"
        user.streak_days = 4
        user.total_points = 4
        user_repo.save(user)

        result = points.claim(ALICE)

        assert result["streakDays"] == 5
        assert result["totalPoints"] == 5

    def test_gap_resets_streak(self, points, profiles, user_repo):
        user = profiles.get_profile(ALICE)
        user.last_claim_date = "2024-06-11"
        user.streak_days = 9
        user.total_points = 9
        user_repo.save(user)

        result = points.claim(ALICE)

        assert result["streakDays"] == 1
        assert result["totalPoints"] == 10

    def test_second_claim_same_day_rejected(self, points):
        points.claim(ALICE)

        with pytest.raises(AlreadyClaimedError):
            points.claim(ALICE)

        status = points.status(ALICE)
        assert status["totalPoints"] == 1
        assert status["canClaimToday"] is False

    def test_consecutive_days_fill_grid_in_order(self, points, clock):
        for _ in range(3):
            points.claim(ALICE)
            clock.advance(days=1)

        status = points.status(ALICE)
        assert status["streakDays"] == 3
        assert status["gridState"][:4] == [True, True, True, False]

    def test_full_grid_still_counts_points(self, points, profiles, user_repo):
        user = profiles.get_profile(ALICE)
        user.grid_state = [True] * 49
        user_repo.save(user)

        result = points.claim(ALICE)

        assert result["newSquareIndex"] is None
        assert result["totalPoints"] == 1
