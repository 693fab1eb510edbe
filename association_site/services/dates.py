"""
Date Helpers

Event dates carry date-only semantics: they are persisted as naive
datetimes at 00:00 UTC and exposed publicly as 'YYYY-MM-DD'.
"""

import re
from datetime import date, datetime, time, timezone

_DATE_PREFIX = re.compile(r'^(\d{4}-\d{2}-\d{2})')


def utcnow():
    """Current UTC time as a naive datetime (the database stores naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def ensure_date_only(value):
    """Truncate an ISO string carrying a time part to its 'YYYY-MM-DD' prefix."""
    if not value:
        return value
    match = _DATE_PREFIX.match(value.strip())
    return match.group(1) if match else value


def parse_date_only(value):
    """Parse a date-only value into a naive datetime at UTC midnight.

    Accepts 'YYYY-MM-DD', longer ISO strings (the time part is dropped),
    date and datetime objects. Raises ValueError on anything else.
    """
    if isinstance(value, datetime):
        return datetime.combine(value.date(), time.min)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str) or not value.strip():
        raise ValueError('date is required')
    parsed = date.fromisoformat(ensure_date_only(value))
    return datetime.combine(parsed, time.min)


def to_date_only_string(value):
    """Render a stored date as 'YYYY-MM-DD'."""
    if value is None:
        return None
    if isinstance(value, str):
        return ensure_date_only(value)
    return value.strftime('%Y-%m-%d')


def today_utc():
    """UTC midnight of the current day."""
    return datetime.combine(utcnow().date(), time.min)
