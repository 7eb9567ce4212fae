"""
EDTF Level 1

Adds to Level 0:

    1984?  2004-06~  2004-06-11%     whole-value qualification
    201X  20XX  1985-04-XX           right-aligned unspecified digits
    -1985                            negative years
    Y170000002                       years beyond four digits
    2001-21 ... 2001-24              seasons
    1985/..  ../1985  1985/  /1985   open and unknown interval endpoints
"""

import regex as re

from edtfparser.conf import apply_settings
from edtfparser.parser.common import (
    build_date,
    build_season,
    empty_error,
    fail,
    format_error,
    is_masked,
    is_right_aligned_mask,
    parse_date_time,
    parse_interval,
)
from edtfparser.types import Date, ErrorCode, ParseResult, Precision, Qualification

DATE_PATTERN = re.compile(
    r"^(?P<year>(?!-0000)-?[\dX]{4})(?:-(?P<month>[\dX]{2})(?:-(?P<day>[\dX]{2}))?)?"
    r"(?P<qualifier>[?~%])?$"
)
LONG_YEAR_PATTERN = re.compile(r"^Y(?P<year>-?\d{5,})(?P<qualifier>[?~%])?$")

MASK_SUGGESTION = (
    "Level 1 only masks trailing year digits (201X) or whole month/day "
    "components (1985-XX, 1985-04-XX)"
)


def _date_level(match, qualification) -> int:
    masked = any(is_masked(match.group(name)) for name in ("year", "month", "day"))
    negative = match.group("year").startswith("-")
    return 1 if qualification or masked or negative else 0


def parse_value(value: str) -> ParseResult:
    """A single Level 1 date, date-time or season."""
    if "T" in value:
        return parse_date_time(value)

    match = LONG_YEAR_PATTERN.match(value)
    if match:
        return ParseResult.ok(Date(
            edtf=value,
            level=1,
            precision=Precision.YEAR,
            year=int(match.group("year")),
            qualification=Qualification.from_symbol(match.group("qualifier")),
        ))
    if value.startswith("Y"):
        return format_error(value, "Y-prefixed years need at least five digits (e.g. Y17000)")

    match = DATE_PATTERN.match(value)
    if not match:
        return format_error(value)

    qualification = Qualification.from_symbol(match.group("qualifier"))
    year, month, day = match.group("year"), match.group("month"), match.group("day")

    if day is None and month is not None and not is_masked(month) and int(month) > 12:
        return build_season(value, match, max_level=1, qualification=qualification)

    if not is_right_aligned_mask(year, month, day):
        return format_error(value, MASK_SUGGESTION)

    return build_date(
        value, match, level=_date_level(match, qualification), qualification=qualification
    )


def parse_endpoint(value: str) -> ParseResult:
    """Interval endpoints: any Level 1 value except masked dates."""
    result = parse_value(value)
    if result.success and getattr(result.value, "unspecified", None):
        return fail(
            ErrorCode.INVALID_INTERVAL,
            "Unspecified digits in interval endpoints require Level 2",
            (0, len(value)),
        )
    return result


@apply_settings
def parse_level1(date_string: str, settings=None) -> ParseResult:
    value = date_string.strip()
    if not value:
        return empty_error()
    if "/" in value:
        return parse_interval(value, parse_endpoint, allow_open=True)
    return parse_value(value)
