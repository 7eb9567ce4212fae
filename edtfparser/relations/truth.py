"""
Four-valued truth.

    YES      the relation holds under every resolution of both values
    NO       it holds under none
    MAYBE    some resolutions satisfy it; the doubt comes from range width
    UNKNOWN  a bound the relation needs is missing

``combine_with_any`` and ``combine_with_all`` are the only ways values are
combined. Their precedence orders are not De Morgan duals:

    ANY:  YES > UNKNOWN > MAYBE > NO
    ALL:  NO  > UNKNOWN > MAYBE > YES
"""

from enum import Enum
from typing import Iterable, Union


class Truth(Enum):
    YES = "YES"
    NO = "NO"
    MAYBE = "MAYBE"
    UNKNOWN = "UNKNOWN"

    def __str__(self):
        return self.value


class Quantifier(Enum):
    ANY = "ANY"
    ALL = "ALL"

    @classmethod
    def coerce(cls, value: Union["Quantifier", str]) -> "Quantifier":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(f"Invalid quantifier: {value!r}. Expected ANY or ALL") from None


_ANY_ORDER = (Truth.YES, Truth.UNKNOWN, Truth.MAYBE)
_ALL_ORDER = (Truth.NO, Truth.UNKNOWN, Truth.MAYBE)


def combine_with_any(values: Iterable[Truth]) -> Truth:
    """Existential combination. Empty input is NO."""
    seen = set(values)
    for truth in _ANY_ORDER:
        if truth in seen:
            return truth
    return Truth.NO


def combine_with_all(values: Iterable[Truth]) -> Truth:
    """Universal combination. Empty input is YES."""
    seen = set(values)
    for truth in _ALL_ORDER:
        if truth in seen:
            return truth
    return Truth.YES


def negate(value: Truth) -> Truth:
    if value is Truth.YES:
        return Truth.NO
    if value is Truth.NO:
        return Truth.YES
    return value


def and_(a: Truth, b: Truth) -> Truth:
    return combine_with_all([a, b])


def or_(a: Truth, b: Truth) -> Truth:
    return combine_with_any([a, b])


COMBINERS = {
    Quantifier.ANY: combine_with_any,
    Quantifier.ALL: combine_with_all,
}
