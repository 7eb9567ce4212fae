"""
EDTF Abstract Syntax Tree

Every successful parse produces one of six immutable node types: Date,
DateTime, Interval, Season, Set and List. Nodes are frozen dataclasses with a
class-level ``type`` discriminant, the conformance ``level`` they require, a
``precision`` tag and the canonical ``edtf`` string they were parsed from.

Nodes do not store their bounds. ``min_ms``/``max_ms`` and the ``min``/``max``
datetimes are derived on demand from the normalization engine, so the two
views of a value can never disagree.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, tzinfo as TZInfo
from enum import Enum
from typing import Any, ClassVar, Dict, List as ListType, Optional, Tuple, Union

from dateutil import tz

from edtfparser.calendars import DATETIME_MAX_MS, DATETIME_MIN_MS, epoch_ms_to_datetime
from edtfparser.seasons import SEASON_NAMES


# =============================================================================
# Enums
# =============================================================================

class EDTFType(Enum):
    """Discriminant of an EDTF AST node."""
    DATE = "Date"
    DATE_TIME = "DateTime"
    INTERVAL = "Interval"
    SEASON = "Season"
    SET = "Set"
    LIST = "List"
    # Reserved, no node produces these at Level 0-2
    YEAR = "Year"
    DECADE = "Decade"
    CENTURY = "Century"


class Precision(Enum):
    """Granularity of a value, shared by AST nodes and normalized members."""
    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    SUBYEAR = "subyear"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class ErrorCode:
    """Machine-readable parse error codes."""
    INVALID_FORMAT = "INVALID_FORMAT"
    INVALID_INTERVAL = "INVALID_INTERVAL"
    EMPTY_SET = "EMPTY_SET"
    EMPTY_LIST = "EMPTY_LIST"
    INVALID_MONTH = "INVALID_MONTH"
    INVALID_DAY = "INVALID_DAY"
    INVALID_DATE = "INVALID_DATE"
    INVALID_HOUR = "INVALID_HOUR"
    INVALID_MINUTE = "INVALID_MINUTE"
    INVALID_SECOND = "INVALID_SECOND"
    INVALID_TIMEZONE = "INVALID_TIMEZONE"
    INVALID_SEASON = "INVALID_SEASON"
    INVALID_INTERVAL_ORDER = "INVALID_INTERVAL_ORDER"
    INVALID_RANGE = "INVALID_RANGE"
    RANGE_TOO_LARGE = "RANGE_TOO_LARGE"
    INVALID_SIGNIFICANT_DIGITS = "INVALID_SIGNIFICANT_DIGITS"


# =============================================================================
# Qualification and unspecified digits
# =============================================================================

@dataclass(frozen=True)
class Qualification:
    """Uncertain (``?``), approximate (``~``) or both (``%``)."""
    uncertain: bool = False
    approximate: bool = False
    uncertain_approximate: bool = False

    _SYMBOLS: ClassVar[Dict[str, Tuple[bool, bool, bool]]] = {
        "?": (True, False, False),
        "~": (False, True, False),
        "%": (False, False, True),
    }

    @classmethod
    def from_symbol(cls, symbol: Optional[str]) -> Optional[Qualification]:
        if not symbol:
            return None
        try:
            return cls(*cls._SYMBOLS[symbol])
        except KeyError:
            raise ValueError(f"Unknown qualifier: {symbol!r}")

    @property
    def is_uncertain(self) -> bool:
        return self.uncertain or self.uncertain_approximate

    @property
    def is_approximate(self) -> bool:
        return self.approximate or self.uncertain_approximate

    @property
    def symbol(self) -> str:
        if self.uncertain_approximate or (self.uncertain and self.approximate):
            return "%"
        return "?" if self.uncertain else "~"

    def merge(self, other: Optional[Qualification]) -> Qualification:
        """Combine two qualifications; uncertain plus approximate collapses to ``%``."""
        if other is None:
            return self
        uncertain = self.is_uncertain or other.is_uncertain
        approximate = self.is_approximate or other.is_approximate
        if uncertain and approximate:
            return Qualification(uncertain_approximate=True)
        return Qualification(uncertain=uncertain, approximate=approximate)

    def to_dict(self) -> Dict[str, bool]:
        return {
            "uncertain": self.uncertain,
            "approximate": self.approximate,
            "uncertain_approximate": self.uncertain_approximate,
        }


@dataclass(frozen=True)
class UnspecifiedDigits:
    """Positions (0-based, sign excluded) of ``X`` placeholders per component."""
    year: Optional[Tuple[int, ...]] = None
    month: Optional[Tuple[int, ...]] = None
    day: Optional[Tuple[int, ...]] = None

    def to_dict(self) -> Dict[str, Optional[ListType[int]]]:
        return {
            "year": list(self.year) if self.year else None,
            "month": list(self.month) if self.month else None,
            "day": list(self.day) if self.day else None,
        }


# =============================================================================
# Errors and results
# =============================================================================

@dataclass(frozen=True)
class ErrorPosition:
    start: int
    end: int


@dataclass(frozen=True)
class ParseError:
    """A structured, recoverable parse failure."""
    code: str
    message: str
    position: Optional[ErrorPosition] = None
    suggestion: Optional[str] = None

    def shifted(self, offset: int, prefix: str = "") -> ParseError:
        """Same error reported inside a larger string."""
        position = self.position
        if position is not None:
            position = ErrorPosition(position.start + offset, position.end + offset)
        return ParseError(self.code, prefix + self.message, position, self.suggestion)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.position is not None:
            data["position"] = {"start": self.position.start, "end": self.position.end}
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse: either a value and its level, or a list of errors."""
    success: bool
    value: Optional[EDTFNode] = None
    level: Optional[int] = None
    errors: Tuple[ParseError, ...] = ()

    @classmethod
    def ok(cls, value: EDTFNode) -> ParseResult:
        return cls(success=True, value=value, level=value.level)

    @classmethod
    def fail(cls, errors) -> ParseResult:
        return cls(success=False, errors=tuple(errors))

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "level": self.level, "value": self.value.to_dict()}
        return {"success": False, "errors": [error.to_dict() for error in self.errors]}


# =============================================================================
# AST nodes
# =============================================================================

Component = Union[int, str]


def _qualification_dict(qualification: Optional[Qualification]) -> Optional[Dict[str, bool]]:
    return qualification.to_dict() if qualification is not None else None


@dataclass(frozen=True)
class EDTFNode:
    """Fields and derived bounds shared by every AST node."""
    edtf: str
    level: int
    precision: Precision

    type: ClassVar[EDTFType]

    def __str__(self) -> str:
        return self.edtf

    @property
    def min_ms(self) -> Optional[int]:
        """Earliest instant covered, in epoch milliseconds (None if unbounded)."""
        from edtfparser.normalization import normalize_to_convex_hull
        return normalize_to_convex_hull(self).s_min

    @property
    def max_ms(self) -> Optional[int]:
        """Latest instant covered, in epoch milliseconds (None if unbounded)."""
        from edtfparser.normalization import normalize_to_convex_hull
        return normalize_to_convex_hull(self).e_max

    @property
    def min(self) -> datetime:
        value = self.min_ms
        if value is None or value < DATETIME_MIN_MS:
            return datetime.min
        if value > DATETIME_MAX_MS:
            return datetime.max
        return epoch_ms_to_datetime(value)

    @property
    def max(self) -> datetime:
        value = self.max_ms
        if value is None or value > DATETIME_MAX_MS:
            return datetime.max
        if value < DATETIME_MIN_MS:
            return datetime.min
        return epoch_ms_to_datetime(value)

    @property
    def is_bounds_clamped(self) -> bool:
        """True when ``min``/``max`` had to clamp a bound to the datetime range."""
        return any(
            value is not None and not DATETIME_MIN_MS <= value <= DATETIME_MAX_MS
            for value in (self.min_ms, self.max_ms)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "edtf": self.edtf,
            "level": self.level,
            "precision": self.precision.value,
        }


@dataclass(frozen=True)
class Date(EDTFNode):
    """A calendar date at year, month or day precision (e.g. ``1985-04-XX~``)."""
    year: Component
    month: Optional[Component] = None
    day: Optional[Component] = None
    qualification: Optional[Qualification] = None
    year_qualification: Optional[Qualification] = None
    month_qualification: Optional[Qualification] = None
    day_qualification: Optional[Qualification] = None
    unspecified: Optional[UnspecifiedDigits] = None
    exponential: Optional[int] = None
    significant_digits: Optional[int] = None

    type: ClassVar[EDTFType] = EDTFType.DATE

    @property
    def component_qualifications(self) -> Tuple[Optional[Qualification], ...]:
        return self.year_qualification, self.month_qualification, self.day_qualification

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "qualification": _qualification_dict(self.qualification),
            "year_qualification": _qualification_dict(self.year_qualification),
            "month_qualification": _qualification_dict(self.month_qualification),
            "day_qualification": _qualification_dict(self.day_qualification),
            "unspecified": self.unspecified.to_dict() if self.unspecified else None,
            "exponential": self.exponential,
            "significant_digits": self.significant_digits,
        })
        return data


@dataclass(frozen=True)
class DateTime(EDTFNode):
    """A date with a time of day and an optional UTC offset tag."""
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: Optional[int] = None
    timezone: Optional[str] = None

    type: ClassVar[EDTFType] = EDTFType.DATE_TIME

    @property
    def tzinfo(self) -> Optional[TZInfo]:
        """The offset as a tzinfo object. Bounds themselves ignore it."""
        if self.timezone is None:
            return None
        if self.timezone == "Z":
            return tz.tzutc()
        sign = -1 if self.timezone[0] == "-" else 1
        digits = self.timezone[1:].replace(":", "")
        hours, minutes = int(digits[:2]), int(digits[2:] or 0)
        return tz.tzoffset(None, sign * (hours * 3600 + minutes * 60))

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "year": self.year,
            "month": self.month,
            "day": self.day,
            "hour": self.hour,
            "minute": self.minute,
            "second": self.second,
            "timezone": self.timezone,
        })
        return data


@dataclass(frozen=True)
class Season(EDTFNode):
    """A year plus a season code (21-24 at Level 1, up to 41 at Level 2)."""
    year: int
    season: int
    qualification: Optional[Qualification] = None

    type: ClassVar[EDTFType] = EDTFType.SEASON

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "year": self.year,
            "season": self.season,
            "name": SEASON_NAMES.get(self.season),
            "qualification": _qualification_dict(self.qualification),
        })
        return data


Endpoint = Union[Date, DateTime, Season]


@dataclass(frozen=True)
class Interval(EDTFNode):
    """
    Two endpoints joined by ``/``.

    A missing endpoint is ``None``; it means "unknown" unless the matching
    ``open_start``/``open_end`` flag marks it as unbounded (``..``).
    """
    start: Optional[Endpoint] = None
    end: Optional[Endpoint] = None
    open_start: bool = False
    open_end: bool = False
    qualification: Optional[Qualification] = None

    type: ClassVar[EDTFType] = EDTFType.INTERVAL

    @property
    def unknown_start(self) -> bool:
        return self.start is None and not self.open_start

    @property
    def unknown_end(self) -> bool:
        return self.end is None and not self.open_end

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "start": self.start.to_dict() if self.start is not None else None,
            "end": self.end.to_dict() if self.end is not None else None,
            "open_start": self.open_start,
            "open_end": self.open_end,
            "qualification": _qualification_dict(self.qualification),
        })
        return data


@dataclass(frozen=True)
class _Collection(EDTFNode):
    values: Tuple[Endpoint, ...] = field(default_factory=tuple)
    earlier: bool = False
    later: bool = False

    @property
    def min_ms(self) -> Optional[int]:
        if self.earlier:
            return None
        return super().min_ms

    @property
    def max_ms(self) -> Optional[int]:
        if self.later:
            return None
        return super().max_ms

    def __iter__(self):
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update({
            "values": [value.to_dict() for value in self.values],
            "earlier": self.earlier,
            "later": self.later,
        })
        return data


@dataclass(frozen=True)
class Set(_Collection):
    """``[a, b, c]``: exactly one of the values applies."""
    type: ClassVar[EDTFType] = EDTFType.SET


@dataclass(frozen=True)
class List(_Collection):
    """``{a, b, c}``: every value applies."""
    type: ClassVar[EDTFType] = EDTFType.LIST


NODE_TYPES = (Date, DateTime, Interval, Season, Set, List)
