"""Injectable wall clock."""

from datetime import date, datetime

import pytz

from spreads.core.timezone import to_eastern


class Clock:
    """
    Source of the current time.

    Services read time only through a Clock so tests can substitute a fake one.
    """

    def now(self) -> datetime:
        """Current time as an aware UTC datetime."""
        return datetime.now(pytz.utc)

    def now_ms(self) -> int:
        """Current time as unix epoch milliseconds."""
        return int(self.now().timestamp() * 1000)

    def today(self) -> date:
        """Current US/Eastern market date."""
        return to_eastern(self.now()).date()

    def utc_today(self) -> date:
        """Current UTC calendar date."""
        return self.now().date()


_clock = Clock()


def get_clock() -> Clock:
    """Return the process-wide clock."""
    return _clock
