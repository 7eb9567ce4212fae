"""
Proleptic Gregorian Calendar Arithmetic

All functions work on plain Python integers, so years far outside the range
of :class:`datetime.datetime` (including the exponential years of EDTF
Level 2) are handled exactly. Year numbering is astronomical: 1 BC is year 0,
2 BC is year -1.

Day counts follow Howard Hinnant's ``days_from_civil`` / ``civil_from_days``
algorithms, which rely on floor division and therefore work unchanged for
negative years in Python.
"""

from datetime import datetime, timedelta
from typing import Optional, Tuple

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

DAYS_PER_ERA = 146097
# Days from 0000-03-01 to 1970-01-01
EPOCH_SHIFT = 719468

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

_EPOCH = datetime(1970, 1, 1)


# =============================================================================
# Calendar rules
# =============================================================================

def is_leap_year(year: int) -> bool:
    """Gregorian leap year rule, extended backwards through year 0."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


# =============================================================================
# Day counts
# =============================================================================

def days_since_epoch(year: int, month: int, day: int) -> int:
    """
    Count days from 1970-01-01 to the given civil date.

    Args:
        year: Astronomical year (any integer)
        month: 1-12
        day: 1 to the length of the month

    Returns:
        Negative for dates before the epoch.
    """
    if not 1 <= day <= days_in_month(year, month):
        raise ValueError(f"Invalid day: {day} for {year}-{month:02d}")

    y = year - 1 if month <= 2 else year
    era = y // 400
    year_of_era = y - era * 400
    day_of_year = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    day_of_era = year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    return era * DAYS_PER_ERA + day_of_era - EPOCH_SHIFT


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Inverse of :func:`days_since_epoch`."""
    z = days + EPOCH_SHIFT
    era = z // DAYS_PER_ERA
    day_of_era = z - era * DAYS_PER_ERA
    year_of_era = (
        day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096
    ) // 365
    day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
    mp = (5 * day_of_year + 2) // 153
    day = day_of_year - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = year_of_era + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


# =============================================================================
# Epoch milliseconds
# =============================================================================

def to_epoch_ms(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> int:
    """Convert a UTC wall-clock instant to milliseconds since the epoch."""
    if not 0 <= hour <= 23:
        raise ValueError(f"Invalid hour: {hour}")
    if not 0 <= minute <= 59:
        raise ValueError(f"Invalid minute: {minute}")
    if not 0 <= second <= 59:
        raise ValueError(f"Invalid second: {second}")
    if not 0 <= millisecond <= 999:
        raise ValueError(f"Invalid millisecond: {millisecond}")

    return (
        days_since_epoch(year, month, day) * MS_PER_DAY
        + hour * MS_PER_HOUR
        + minute * MS_PER_MINUTE
        + second * MS_PER_SECOND
        + millisecond
    )


def start_of_period(year: int, month: Optional[int] = None, day: Optional[int] = None) -> int:
    """First millisecond of the year, month or day."""
    return days_since_epoch(year, month or 1, day or 1) * MS_PER_DAY


def end_of_period(year: int, month: Optional[int] = None, day: Optional[int] = None) -> int:
    """Last millisecond (23:59:59.999) of the year, month or day."""
    if month is None:
        month = 12
    if day is None:
        day = days_in_month(year, month)
    return days_since_epoch(year, month, day) * MS_PER_DAY + MS_PER_DAY - 1


def astronomical_to_historical(year: int) -> Tuple[int, str]:
    """Return ``(year, era)``, e.g. ``0 -> (1, 'BC')``."""
    if year <= 0:
        return 1 - year, "BC"
    return year, "AD"


def historical_to_astronomical(year: int, era: str = "AD") -> int:
    if year < 1:
        raise ValueError(f"Historical years start at 1, got {year}")
    era = era.upper()
    if era in ("BC", "BCE"):
        return 1 - year
    if era in ("AD", "CE"):
        return year
    raise ValueError(f"Unknown era: {era}")


DATETIME_MIN_MS = to_epoch_ms(1, 1, 1)
DATETIME_MAX_MS = to_epoch_ms(9999, 12, 31, 23, 59, 59, 999)


def epoch_ms_to_datetime(ms: int) -> Optional[datetime]:
    """Naive UTC datetime for ``ms``, or None when it does not fit a datetime."""
    if not DATETIME_MIN_MS <= ms <= DATETIME_MAX_MS:
        return None
    return _EPOCH + timedelta(milliseconds=ms)
