"""
Epoch Conversions

TLE epochs are a two-digit year plus a fractional day of year. They are
decoded to a continuous Julian Date counted from 1900 January 0.0, with the
two-digit year cycled at 57 (57..99 are 19xx, 00..56 are 20xx).
"""

from datetime import datetime, timedelta, timezone
from typing import Tuple

from orbit_engine.constants import J1900, JD_J2000_NOON, Y2K_PIVOT
from orbit_engine.fields import get_eight_places, parse_int

J2000_DATETIME = datetime(2000, 1, 1, 12, tzinfo=timezone.utc)


def _year_start(year_offset: int) -> int:
    """Days from 1900 Jan 0.0 to Jan 0.0 of ``1900 + year_offset``."""
    return year_offset * 365 + (year_offset - 1) // 4


def decode_epoch(year_field: str, day_field: str) -> float:
    """
    Convert the epoch fields of line 1 to a Julian Date.

    Args:
        year_field: Two-digit year (columns 19-20)
        day_field: Day of year with eight decimals (columns 21-32)

    Returns:
        Julian Date of the epoch
    """
    year = parse_int(year_field)
    if year < Y2K_PIVOT:
        year += 100
    return get_eight_places(day_field) + J1900 + float(_year_start(year))


def encode_epoch(jd: float) -> Tuple[str, str]:
    """Inverse of :func:`decode_epoch`: returns ``(year_field, day_field)``."""
    days = jd - J1900
    year = int(days // 365.25)
    while _year_start(year) > days:
        year -= 1
    while _year_start(year + 1) <= days:
        year += 1
    if not Y2K_PIVOT <= year < Y2K_PIVOT + 100:
        raise ValueError(f"Epoch JD {jd!r} is outside the two-digit year window 1957-2056")
    day_of_year = days - _year_start(year)
    return f"{year % 100:02d}", f"{day_of_year:012.8f}"


def jd_to_datetime(jd: float) -> datetime:
    """Convert a Julian Date to an aware UTC datetime."""
    return J2000_DATETIME + timedelta(days=jd - JD_J2000_NOON)


def datetime_to_jd(dt: datetime) -> float:
    """
    Convert a datetime to a Julian Date.

    Naive datetimes are taken to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = dt - J2000_DATETIME
    return JD_J2000_NOON + delta.days + (delta.seconds + delta.microseconds * 1e-6) / 86400.0
