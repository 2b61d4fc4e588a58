"""Timezone utilities for US/Eastern market time."""

from datetime import date, datetime

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_date(value) -> date:
    """Parse an ISO date (or datetime) string, or pass a date through."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(str(value)).date()


def epoch_seconds(d: date) -> int:
    """UTC midnight of a calendar date as unix seconds."""
    return int(pytz.utc.localize(datetime(d.year, d.month, d.day)).timestamp())


def date_from_epoch(seconds: float) -> date:
    """Calendar date (UTC) of a unix timestamp."""
    return datetime.fromtimestamp(seconds, tz=pytz.utc).date()
