"""
Building blocks shared by the Level 0, 1 and 2 grammars: error helpers,
calendar validation, unspecified-digit bookkeeping, date-time parsing and
interval assembly.
"""

from typing import Callable, Dict, List, Optional, Tuple, Union

import regex as re

from edtfparser.calendars import days_in_month
from edtfparser.normalization import bounds
from edtfparser.seasons import LEVEL2_SEASONS, season_level
from edtfparser.types import (
    Date,
    DateTime,
    ErrorCode,
    ErrorPosition,
    Interval,
    ParseError,
    ParseResult,
    Precision,
    Qualification,
    Season,
    UnspecifiedDigits,
)

Span = Tuple[int, int]

DATE_SUGGESTION = "Expected YYYY, YYYY-MM, YYYY-MM-DD or YYYY-MM-DDThh:mm[:ss]"

DATE_TIME_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"T(?P<hour>\d{2}):(?P<minute>\d{2})"
    r"(?::(?P<second>\d{2})(?:\.(?P<fraction>\d+))?)?"
    r"(?P<timezone>Z|[+-]\d{2}(?::?\d{2})?)?$"
)

OPEN_MARKER = ".."


# =============================================================================
# Errors
# =============================================================================

def error(code: str, message: str, span: Optional[Span] = None,
          suggestion: Optional[str] = None) -> ParseError:
    position = ErrorPosition(*span) if span is not None else None
    return ParseError(code=code, message=message, position=position, suggestion=suggestion)


def fail(code: str, message: str, span: Optional[Span] = None,
         suggestion: Optional[str] = None) -> ParseResult:
    return ParseResult.fail([error(code, message, span, suggestion)])


def format_error(value: str, suggestion: str = DATE_SUGGESTION) -> ParseResult:
    return fail(
        ErrorCode.INVALID_FORMAT,
        f"Invalid EDTF format: {value!r}",
        (0, len(value)),
        suggestion,
    )


def empty_error() -> ParseResult:
    return fail(ErrorCode.INVALID_FORMAT, "Empty EDTF string", suggestion=DATE_SUGGESTION)


# =============================================================================
# Components
# =============================================================================

def is_masked(token: Optional[str]) -> bool:
    return token is not None and "X" in token


def to_component(token: Optional[str]) -> Union[int, str, None]:
    """Concrete tokens become ints; masked tokens stay strings."""
    if token is None:
        return None
    return token if is_masked(token) else int(token)


def mask_positions(token: Optional[str]) -> Optional[Tuple[int, ...]]:
    if not is_masked(token):
        return None
    return tuple(index for index, char in enumerate(token.lstrip("-")) if char == "X")


def unspecified_digits(year: Optional[str], month: Optional[str] = None,
                       day: Optional[str] = None) -> Optional[UnspecifiedDigits]:
    """Record masked positions; None when every token is concrete."""
    if not (is_masked(year) or is_masked(month) or is_masked(day)):
        return None
    return UnspecifiedDigits(
        year=mask_positions(year),
        month=mask_positions(month),
        day=mask_positions(day),
    )


def is_right_aligned_mask(year: str, month: Optional[str] = None,
                          day: Optional[str] = None) -> bool:
    """
    Whether the masking is expressible at Level 1.

    Level 1 only masks trailing year digits of a bare year (``201X``,
    ``XXXX``), or whole month/day tokens below a concrete year
    (``1985-XX``, ``1985-04-XX``, ``1985-XX-XX``).
    """
    digits = year.lstrip("-")
    if is_masked(digits):
        if month is not None:
            return False
        return re.fullmatch(r"\d*X+", digits) is not None
    for token in (month, day):
        if is_masked(token) and token != "XX":
            return False
    return not (month == "XX" and day is not None and day != "XX")


def date_precision(month, day) -> Precision:
    if day is not None:
        return Precision.DAY
    if month is not None:
        return Precision.MONTH
    return Precision.YEAR


def merge_qualifications(*qualifications: Optional[Qualification]) -> Optional[Qualification]:
    merged = None
    for qualification in qualifications:
        if qualification is None:
            continue
        merged = qualification if merged is None else merged.merge(qualification)
    return merged


def validate_date(year: str, month: Optional[str], day: Optional[str],
                  spans: Dict[str, Span]) -> List[ParseError]:
    """
    Calendar validation of (possibly masked) date tokens.

    Concrete components are checked directly. When digits are masked,
    validation widens to "at least one calendar date matches".
    """
    errors = []
    if month is not None and not is_masked(month) and not 1 <= int(month) <= 12:
        errors.append(error(
            ErrorCode.INVALID_MONTH,
            f"Invalid month: {month}. Month must be between 01 and 12",
            spans.get("month"),
        ))
        return errors

    if day is not None and not is_masked(day) and not is_masked(year) and not is_masked(month):
        limit = days_in_month(int(year), int(month))
        if not 1 <= int(day) <= limit:
            errors.append(error(
                ErrorCode.INVALID_DAY,
                f"Invalid day: {day}. {year}-{month} has {limit} days",
                spans.get("day"),
            ))
            return errors
    elif day is not None and not is_masked(day) and not 1 <= int(day) <= 31:
        errors.append(error(
            ErrorCode.INVALID_DAY,
            f"Invalid day: {day}. Day must be between 01 and 31",
            spans.get("day"),
        ))
        return errors

    if is_masked(year) or is_masked(month) or is_masked(day):
        if bounds.earliest(to_component(year), to_component(month), to_component(day)) is None:
            text = "-".join(token for token in (year, month, day) if token is not None)
            errors.append(error(
                ErrorCode.INVALID_DATE,
                f"No calendar date matches {text}",
                (min(s[0] for s in spans.values()), max(s[1] for s in spans.values()))
                if spans else None,
            ))
    return errors


def match_spans(match, *names: str) -> Dict[str, Span]:
    return {name: match.span(name) for name in names if match.group(name) is not None}


# =============================================================================
# Date-time (identical at every level)
# =============================================================================

def parse_date_time(value: str) -> ParseResult:
    match = DATE_TIME_PATTERN.match(value)
    if not match:
        return format_error(value, "Expected YYYY-MM-DDThh:mm[:ss[.sss]][Z|+hh:mm]")

    errors = validate_date(
        match.group("year"), match.group("month"), match.group("day"),
        match_spans(match, "year", "month", "day"),
    )
    checks = (
        ("hour", 23, ErrorCode.INVALID_HOUR),
        ("minute", 59, ErrorCode.INVALID_MINUTE),
        ("second", 59, ErrorCode.INVALID_SECOND),
    )
    for name, limit, code in checks:
        text = match.group(name)
        if text is not None and int(text) > limit:
            errors.append(error(
                code,
                f"Invalid {name}: {text}. {name.capitalize()} must be between 00 and {limit}",
                match.span(name),
            ))

    timezone = match.group("timezone")
    if timezone and timezone != "Z":
        digits = timezone[1:].replace(":", "")
        if int(digits[:2]) > 14 or int(digits[2:] or 0) > 59:
            errors.append(error(
                ErrorCode.INVALID_TIMEZONE,
                f"Invalid UTC offset: {timezone}",
                match.span("timezone"),
            ))
    if errors:
        return ParseResult.fail(errors)

    second = match.group("second")
    return ParseResult.ok(DateTime(
        edtf=value,
        level=0,
        precision=Precision.SECOND if second is not None else Precision.MINUTE,
        year=int(match.group("year")),
        month=int(match.group("month")),
        day=int(match.group("day")),
        hour=int(match.group("hour")),
        minute=int(match.group("minute")),
        second=int(second) if second is not None else None,
        timezone=timezone,
    ))


def build_date(value: str, match, level: int, year: Union[int, str, None] = None,
               **extra) -> ParseResult:
    """
    Validate the ``year``/``month``/``day`` groups of ``match`` and build a Date.

    ``year`` overrides the year group (used for ``Y`` and exponential years).
    """
    year_token = match.group("year")
    month_token = match.group("month")
    day_token = match.group("day")

    errors = validate_date(
        year_token, month_token, day_token,
        match_spans(match, "year", "month", "day"),
    )
    if errors:
        return ParseResult.fail(errors)

    return ParseResult.ok(Date(
        edtf=value,
        level=level,
        precision=date_precision(month_token, day_token),
        year=to_component(year_token) if year is None else year,
        month=to_component(month_token),
        day=to_component(day_token),
        unspecified=unspecified_digits(year_token, month_token, day_token),
        **extra,
    ))


# =============================================================================
# Intervals
# =============================================================================

def _side_label(index: int) -> str:
    return "start" if index == 0 else "end"


def parse_interval(value: str, parse_endpoint: Callable[[str], ParseResult],
                   allow_open: bool, masked_level: int = 2) -> ParseResult:
    """
    Split ``value`` on ``/`` and parse each side.

    An empty side is unknown and ``..`` is open; both are rejected unless
    ``allow_open``. Endpoints carrying unspecified digits raise the
    interval's level to ``masked_level``.
    """
    parts = value.split("/")
    if len(parts) != 2:
        return fail(
            ErrorCode.INVALID_INTERVAL,
            "An interval must have exactly one '/' separator",
            (0, len(value)),
        )

    endpoints = [None, None]
    open_flags = [False, False]
    errors = []
    offset = 0
    for index, text in enumerate(parts):
        label = _side_label(index)
        if text in ("", OPEN_MARKER):
            if not allow_open:
                errors.append(error(
                    ErrorCode.INVALID_INTERVAL,
                    f"Interval {label} is missing; Level 0 intervals need two dates",
                    (offset, offset + len(text)),
                    "Use Level 1 syntax ('..' or an empty side) for open or unknown endpoints",
                ))
            open_flags[index] = text == OPEN_MARKER
        else:
            result = parse_endpoint(text)
            if result.success:
                endpoints[index] = result.value
            else:
                errors.extend(
                    e.shifted(offset, f"Invalid interval {label}: ") for e in result.errors
                )
        offset += len(text) + 1

    if errors:
        return ParseResult.fail(errors)

    start, end = endpoints
    if start is None and end is None:
        return fail(
            ErrorCode.INVALID_INTERVAL,
            "An interval needs at least one date endpoint",
            (0, len(value)),
        )

    if start is not None and end is not None and start.min_ms > end.max_ms:
        return fail(
            ErrorCode.INVALID_INTERVAL_ORDER,
            f"Interval start {start} is after its end {end}",
            (0, len(value)),
        )

    level = max(endpoint.level for endpoint in endpoints if endpoint is not None)
    if start is None or end is None:
        level = max(level, 1)
    if any(getattr(endpoint, "unspecified", None) for endpoint in endpoints):
        level = max(level, masked_level)

    return ParseResult.ok(Interval(
        edtf=value,
        level=level,
        precision=(start or end).precision,
        start=start,
        end=end,
        open_start=open_flags[0],
        open_end=open_flags[1],
    ))


# =============================================================================
# Seasons
# =============================================================================

def build_season(value: str, match, max_level: int,
                 qualification: Optional[Qualification] = None) -> ParseResult:
    """
    Build a Season from a ``YYYY-NN`` match whose ``NN`` exceeds 12.

    Codes 13-20 are reported as invalid months; codes a level does not
    support, or that no level supports, as invalid seasons.
    """
    code = int(match.group("month"))
    span = match.span("month")
    if is_masked(match.group("year")):
        return format_error(value, "Season years cannot contain unspecified digits")
    if code < 21:
        return fail(
            ErrorCode.INVALID_MONTH,
            f"Invalid month: {code:02d}. Month must be between 01 and 12",
            span,
        )
    if code not in LEVEL2_SEASONS:
        return fail(
            ErrorCode.INVALID_SEASON,
            f"Invalid season code: {code}. Seasons are 21-24 (Level 1) or 25-41 (Level 2)",
            span,
        )
    level = season_level(code)
    if level > max_level:
        return fail(
            ErrorCode.INVALID_SEASON,
            f"Season code {code} requires Level {level}",
            span,
        )
    return ParseResult.ok(Season(
        edtf=value,
        level=level,
        precision=Precision.SUBYEAR,
        year=int(match.group("year")),
        season=code,
        qualification=qualification,
    ))
