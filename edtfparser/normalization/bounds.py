"""
Widening of unspecified digits.

A masked component such as ``19XX`` or ``1X`` stands for every value its
digits could take. The bounds of a masked date come from the earliest and the
latest *valid* calendar combination of its components, so impossible
candidates (month 13, February 30th, February 29th in a common year) never
widen a range.
"""

from itertools import product
from typing import Iterator, Optional, Tuple, Union

from edtfparser.calendars import days_in_month, end_of_period, start_of_period

Component = Union[int, str]

_DIGITS = "0123456789"


def candidates(token: Component, descending: bool = False) -> Iterator[int]:
    """
    Every integer a (possibly masked) component can stand for, in order.

    >>> list(candidates("1X"))[:3]
    [10, 11, 12]
    """
    if isinstance(token, int):
        yield token
        return

    negative = token.startswith("-")
    digits = token.lstrip("-")
    # Larger magnitudes come first when ascending through negative values
    reverse = descending != negative
    choices = [
        sorted(_DIGITS if char == "X" else char, reverse=reverse)
        for char in digits
    ]
    for combo in product(*choices):
        value = int("".join(combo))
        if negative and value == 0:
            # there is no year -0; a negative mask stops at -1
            continue
        yield -value if negative else value


def _resolve(year: Component, month: Optional[Component], day: Optional[Component],
             descending: bool) -> Optional[Tuple[int, ...]]:
    for y in candidates(year, descending):
        if month is None:
            return (y,)
        for m in candidates(month, descending):
            if not 1 <= m <= 12:
                continue
            if day is None:
                return (y, m)
            last_day = days_in_month(y, m)
            for d in candidates(day, descending):
                if 1 <= d <= last_day:
                    return (y, m, d)
    return None


def earliest(year: Component, month: Optional[Component] = None,
             day: Optional[Component] = None) -> Optional[Tuple[int, ...]]:
    """Earliest valid ``(year[, month[, day]])`` combination, or None."""
    return _resolve(year, month, day, descending=False)


def latest(year: Component, month: Optional[Component] = None,
           day: Optional[Component] = None) -> Optional[Tuple[int, ...]]:
    """Latest valid ``(year[, month[, day]])`` combination, or None."""
    return _resolve(year, month, day, descending=True)


def date_bounds(year: Component, month: Optional[Component] = None,
                day: Optional[Component] = None) -> Tuple[int, int, int, int]:
    """
    Four bounds ``(s_min, s_max, e_min, e_max)`` of a date.

    ``s_min``/``e_min`` are the start and end of the earliest possible unit,
    ``s_max``/``e_max`` those of the latest one. For an unmasked date both
    units are the same.
    """
    first = earliest(year, month, day)
    last = latest(year, month, day)
    if first is None or last is None:
        raise ValueError(f"No calendar date matches year={year!r} month={month!r} day={day!r}")
    return (
        start_of_period(*first),
        start_of_period(*last),
        end_of_period(*first),
        end_of_period(*last),
    )
