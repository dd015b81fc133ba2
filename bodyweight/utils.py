"""
Utility functions for the body weight tracker.
Date-key handling and small formatting helpers.
"""

import calendar
import re
from datetime import date, datetime
from typing import Union

from bodyweight.constants import DATE_KEY_FORMAT, DATE_KEY_PATTERN

DateLike = Union[date, datetime, str]

_KEY_RE = re.compile(DATE_KEY_PATTERN)


# ============================================================================
# Date keys
# ============================================================================

def to_local_date(value: DateLike) -> date:
    """
    Resolve a date-like value to a calendar date in the local timezone.

    Aware datetimes are converted to local time first, so an instant late
    in the evening never lands on the next UTC day. Naive datetimes are
    taken as local already.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_date_key(value)
    raise TypeError(f"Expected date, datetime or date key, got {type(value).__name__}")


def canonical_date_key(value: DateLike) -> str:
    """Zero-padded YYYY-MM-DD key from the value's local year/month/day."""
    d = to_local_date(value)
    # strftime does not pad years below 1000 on every platform
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def is_canonical_key(key: str) -> bool:
    """True for fixed-width keys that name a real calendar day."""
    if not isinstance(key, str) or not _KEY_RE.match(key):
        return False
    try:
        datetime.strptime(key, DATE_KEY_FORMAT)
    except ValueError:
        return False
    return True


def parse_date_key(key: str) -> date:
    """
    Parse a canonical key as a local calendar date.

    Raises:
        ValueError: key is not zero-padded YYYY-MM-DD
    """
    if not is_canonical_key(key):
        raise ValueError(f"Not a canonical date key: {key!r}")
    return datetime.strptime(key, DATE_KEY_FORMAT).date()


def days_in_month(year: int, month: int) -> int:
    """Number of days in a month, leap years included."""
    return calendar.monthrange(year, month)[1]


# ============================================================================
# Timestamps
# ============================================================================

def epoch_millis(moment: datetime) -> int:
    """Epoch milliseconds for a datetime (naive values are local time)."""
    return int(round(moment.timestamp() * 1000))


def from_epoch_millis(millis: int) -> datetime:
    """Naive local datetime for an epoch-millisecond timestamp."""
    return datetime.fromtimestamp(millis / 1000)


# ============================================================================
# Formatting
# ============================================================================

def format_signed(value: float, decimals: int = 1) -> str:
    """Format with an explicit '+' for positive values."""
    text = f"{value:.{decimals}f}"
    return f"+{text}" if value > 0 else text


def format_coord(value: float) -> str:
    """Compact pixel coordinate for path strings."""
    rounded = round(float(value), 2)
    if rounded == 0:
        rounded = 0.0
    return f"{rounded:g}"


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning `default` when the denominator is zero."""
    if denominator == 0:
        return default
    return numerator / denominator
