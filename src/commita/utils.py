"""
General utilities used by the package.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from hashlib import sha256

from dateutil.parser import isoparse

from .consts import ENCODING


def from_iso_z(s: str) -> datetime:
    """
    Parse an ISO8601 string into a UTC-aware datetime.

    Naive timestamps are taken to be UTC already.

    Args:
        s: String to be converted to a `datetime` object.

    Return:
        datetime: Object corresponding to the ISO8601 string, in UTC.

    Raises:
        ValueError: When `s` is not ISO8601.

    """

    dt: datetime = isoparse(s)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_iso_z(dt: datetime | None = None) -> str:
    """
    Serialize a datetime to an ISO8601 Z string.

    Args:
        dt: `datetime` object to be converted to a string.
            Defaults to current UTC time if not provided.

    Return:
        str: ISO8601 Z string corresponding to `datetime` given.

    """

    if dt is None:
        dt = datetime.now(tz=UTC)
    elif dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def to_date_str(d: date) -> str:
    return d.strftime("%Y-%m-%d")


def utc_today() -> date:
    return datetime.now(tz=UTC).date()


def group_thousands(v: int) -> str:
    """
    Group digits in threes with commas, whatever the process locale is.

    Args:
        v: Number to format.

    Return:
        str: Formatted number (`1234567` -> `"1,234,567"`).

    """

    return f"{v:,}"


def format_hour(hour: int) -> str:
    """
    Format a 24-hour clock hour as a 12-hour label.

    Args:
        hour: Hour in `0..23`.

    Return:
        str: Label such as `"12 AM"`, `"6 AM"` or `"2 PM"`.

    """

    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"

    return f"{hour} AM" if hour < 12 else f"{hour - 12} PM"


def hash_key(key: str) -> str:
    """
    Hash a cache key so it can be used as a file name.

    Args:
        key: Cache key to hash.

    Return:
        str: Hex SHA-256 digest.

    """

    return sha256(key.encode(ENCODING)).hexdigest()
