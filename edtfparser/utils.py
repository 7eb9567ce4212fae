from typing import Iterable, Iterator, Optional, Tuple

from edtfparser.calendars import civil_from_days, days_since_epoch

_RANGE_UNITS = ("year", "month", "day")


def min_bound(values: Iterable[Optional[int]]) -> Optional[int]:
    """Smallest non-null value, or None when every value is null."""
    present = [value for value in values if value is not None]
    return min(present) if present else None


def max_bound(values: Iterable[Optional[int]]) -> Optional[int]:
    """Largest non-null value, or None when every value is null."""
    present = [value for value in values if value is not None]
    return max(present) if present else None


def clamp(value: int, low: int, high: int) -> int:
    if low > high:
        raise ValueError(f"Invalid clamp range: {low} > {high}")
    return max(low, min(value, high))


def date_range(begin: Tuple[int, ...], end: Tuple[int, ...], unit: str) -> Iterator[Tuple[int, ...]]:
    """
    Step inclusively from ``begin`` to ``end`` one ``unit`` at a time.

    ``begin`` and ``end`` are ``(year,)``, ``(year, month)`` or
    ``(year, month, day)`` tuples matching ``unit``; the values yielded have
    the same shape.
    """
    if unit not in _RANGE_UNITS:
        raise ValueError("Invalid argument: %s" % unit)
    size = _RANGE_UNITS.index(unit) + 1
    if len(begin) != size or len(end) != size:
        raise ValueError(f"Range endpoints must be {unit} tuples")

    if unit == "year":
        for year in range(begin[0], end[0] + 1):
            yield (year,)
    elif unit == "month":
        first = begin[0] * 12 + begin[1] - 1
        last = end[0] * 12 + end[1] - 1
        for index in range(first, last + 1):
            yield (index // 12, index % 12 + 1)
    else:
        for days in range(days_since_epoch(*begin), days_since_epoch(*end) + 1):
            yield civil_from_days(days)


def range_length(begin: Tuple[int, ...], end: Tuple[int, ...], unit: str) -> int:
    """Number of items :func:`date_range` would yield, without iterating."""
    if unit == "year":
        return end[0] - begin[0] + 1
    if unit == "month":
        return (end[0] * 12 + end[1]) - (begin[0] * 12 + begin[1]) + 1
    if unit == "day":
        return days_since_epoch(*end) - days_since_epoch(*begin) + 1
    raise ValueError("Invalid argument: %s" % unit)
