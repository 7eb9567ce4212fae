"""
Naive ordering helpers.

These order and group values by their convex-hull bounds (``min_ms`` and
``max_ms``) and ignore uncertainty entirely. Use the relation evaluator when
the difference between MAYBE and YES matters.

Unbounded sides (``..`` endpoints, open-ended sets) order as -inf and +inf.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Tuple

from dateutil.relativedelta import relativedelta

from edtfparser.calendars import MS_PER_DAY, civil_from_days, epoch_ms_to_datetime

_MODES = ("min", "max", "midpoint")
_DURATION_UNITS = {
    "ms": 1,
    "days": MS_PER_DAY,
    "years": MS_PER_DAY * 365.2425,
}
_INFINITY = float("inf")


def _lower(node):
    value = node.min_ms
    return -_INFINITY if value is None else value


def _upper(node):
    value = node.max_ms
    return _INFINITY if value is None else value


def _sort_key(node, mode: str):
    if mode == "min":
        return _lower(node)
    if mode == "max":
        return _upper(node)
    if mode == "midpoint":
        low, high = node.min_ms, node.max_ms
        if low is None and high is None:
            return 0
        if low is None:
            return -_INFINITY
        if high is None:
            return _INFINITY
        return (low + high) // 2
    raise ValueError("Invalid argument: %s" % mode)


def compare(a, b, mode: str = "min") -> int:
    """Return -1, 0 or 1 as ``a`` orders before, with or after ``b``."""
    key_a, key_b = _sort_key(a, mode), _sort_key(b, mode)
    return (key_a > key_b) - (key_a < key_b)


def sort_dates(values: Iterable, reverse: bool = False, mode: str = "min") -> List:
    """A new sorted list; ties keep their input order."""
    if mode not in _MODES:
        raise ValueError("Invalid argument: %s" % mode)
    return sorted(values, key=lambda node: _sort_key(node, mode), reverse=reverse)


def earliest(values: Iterable):
    """Value with the smallest ``min_ms``, or None for no values."""
    values = list(values)
    return min(values, key=_lower) if values else None


def latest(values: Iterable):
    """Value with the largest ``max_ms``, or None for no values."""
    values = list(values)
    return max(values, key=_upper) if values else None


def unique(values: Iterable) -> List:
    """Drop values whose canonical string was already seen, keeping order."""
    seen = set()
    result = []
    for value in values:
        text = str(value)
        if text not in seen:
            seen.add(text)
            result.append(value)
    return result


def group_by(values: Iterable, unit: str = "year") -> Dict:
    """
    Group values by the calendar year or month of their earliest instant.

    Keys are ints for ``year`` and ``"YYYY-MM"`` strings for ``month``;
    values without a lower bound are grouped under None.
    """
    if unit not in ("year", "month"):
        raise ValueError("Invalid argument: %s" % unit)

    groups = OrderedDict()
    for value in values:
        key = None
        if value.min_ms is not None:
            year, month, _ = civil_from_days(value.min_ms // MS_PER_DAY)
            key = year if unit == "year" else f"{year:04d}-{month:02d}"
        groups.setdefault(key, []).append(value)
    return groups


def find_overlaps(values: Iterable) -> List[Tuple]:
    """Every pair ``(a, b)``, in input order, whose naive ranges share an instant."""
    values = list(values)
    pairs = []
    for index, first in enumerate(values):
        for second in values[index + 1:]:
            if _lower(first) <= _upper(second) and _lower(second) <= _upper(first):
                pairs.append((first, second))
    return pairs


def duration(node, unit: str = "ms"):
    """
    Length of the span a value covers, from ``min_ms`` to ``max_ms`` inclusive.

    ``ms`` gives an int; ``days`` and ``years`` (of 365.2425 days) give floats.
    """
    if unit not in _DURATION_UNITS:
        raise ValueError("Invalid argument: %s" % unit)
    low, high = node.min_ms, node.max_ms
    if low is None or high is None:
        raise ValueError(f"{node} is unbounded and has no duration")
    length = high - low + 1
    return length if unit == "ms" else length / _DURATION_UNITS[unit]


def calendar_duration(node) -> relativedelta:
    """Span of a value in calendar units, e.g. ``relativedelta(years=+5)`` for ``2000/2004``."""
    low, high = node.min_ms, node.max_ms
    if low is None or high is None:
        raise ValueError(f"{node} is unbounded and has no duration")
    start = epoch_ms_to_datetime(low)
    stop = epoch_ms_to_datetime(high + 1)
    if start is None or stop is None:
        raise ValueError(f"{node} lies outside the range of datetime")
    return relativedelta(stop, start)
