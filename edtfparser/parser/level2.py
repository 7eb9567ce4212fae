"""
EDTF Level 2

Adds to Level 1:

    [1667, 1668, 1670..1672]     sets ("one of"), with range expansion
    [..1760-12-03]  [1760-12..]  sets open towards earlier / later values
    {1667, 1668, 1670..1672}     lists ("all of")
    Y-17E7                       exponential years
    1950S2  Y171010000S3         significant digits
    ?2004-06-~11  2004?-06-11    partial (per-component) qualification
    156X-12-25  1984-1X          unspecified digits in any position
    2001-25 ... 2001-41          extended seasons
    2004-06-XX/2004-07-03        masked interval endpoints

Nodes parsed here still report the minimum level they need, so a plain
``1985`` parsed by this grammar is a Level 0 value.
"""

import logging
from typing import List, Optional, Tuple

import regex as re

from edtfparser.conf import apply_settings
from edtfparser.parser.common import (
    build_date,
    build_season,
    empty_error,
    error,
    fail,
    format_error,
    is_masked,
    is_right_aligned_mask,
    merge_qualifications,
    parse_date_time,
    parse_interval,
)
from edtfparser.types import (
    Date,
    EDTFType,
    ErrorCode,
    List as EDTFList,
    ParseError,
    ParseResult,
    Precision,
    Qualification,
    Set as EDTFSet,
)
from edtfparser.utils import date_range, range_length

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(
    r"^(?P<yq1>[?~%])?(?P<year>(?!-0000)-?[\dX]{4})(?P<yq2>[?~%])?"
    r"(?:-(?P<mq1>[?~%])?(?P<month>[\dX]{2})(?P<mq2>[?~%])?"
    r"(?:-(?P<dq1>[?~%])?(?P<day>[\dX]{2})(?P<dq2>[?~%])?)?)?$"
)
EXPONENTIAL_PATTERN = re.compile(
    r"^Y(?P<base>-?\d+)E(?P<exponent>\d+)(?:S(?P<significant>\d+))?(?P<qualifier>[?~%])?$"
)
LONG_YEAR_PATTERN = re.compile(
    r"^Y(?P<year>-?\d{5,})(?:S(?P<significant>\d+))?(?P<qualifier>[?~%])?$"
)
SIGNIFICANT_YEAR_PATTERN = re.compile(
    r"^(?P<year>(?!-0000)-?\d{4})S(?P<significant>\d+)(?P<qualifier>[?~%])?$"
)
SET_PATTERN = re.compile(r"^\[(?P<content>.*)\]$")
LIST_PATTERN = re.compile(r"^\{(?P<content>.*)\}$")

RANGE_SEPARATOR = ".."

_TRAILING_GROUP = {"year": "yq2", "month": "mq2", "day": "dq2"}


# =============================================================================
# Years with exponents and significant digits
# =============================================================================

def _significant_digits(match, year: int) -> Tuple[Optional[int], Optional[ParseError]]:
    text = match.group("significant")
    if text is None:
        return None, None
    digits = int(text)
    if not 1 <= digits <= len(str(abs(year))):
        return None, error(
            ErrorCode.INVALID_SIGNIFICANT_DIGITS,
            f"Invalid significant digits: {digits}. {year} has {len(str(abs(year)))} digits",
            match.span("significant"),
        )
    return digits, None


def _parse_special_year(value: str) -> Optional[ParseResult]:
    """Exponential, Y-prefixed and significant-digit years; None if not one."""
    match = EXPONENTIAL_PATTERN.match(value)
    if match:
        exponent = int(match.group("exponent"))
        year = int(match.group("base")) * 10 ** exponent
        extra = {"exponential": exponent}
    else:
        match = LONG_YEAR_PATTERN.match(value) or SIGNIFICANT_YEAR_PATTERN.match(value)
        if not match:
            return None
        year = int(match.group("year"))
        extra = {}

    significant, problem = _significant_digits(match, year)
    if problem:
        return ParseResult.fail([problem])

    level = 2 if extra or significant is not None else 1
    return ParseResult.ok(Date(
        edtf=value,
        level=level,
        precision=Precision.YEAR,
        year=year,
        qualification=Qualification.from_symbol(match.group("qualifier")),
        significant_digits=significant,
        **extra,
    ))


# =============================================================================
# Dates with partial qualification and unspecified digits
# =============================================================================

def _qualifier(match, group: str) -> Optional[Qualification]:
    return Qualification.from_symbol(match.group(group))


def _qualifications(match):
    """
    Resolve qualifier positions into whole-value and per-component slots.

    A qualifier left of a component applies to it alone; one right of a
    component applies to it and everything to its left; the qualifier that
    ends the string qualifies the whole value.
    """
    last = "day" if match.group("day") else "month" if match.group("month") else "year"
    whole = _qualifier(match, _TRAILING_GROUP[last])

    year_q = _qualifier(match, "yq1")
    month_q = _qualifier(match, "mq1")
    day_q = _qualifier(match, "dq1")
    if last != "year":
        year_q = merge_qualifications(year_q, _qualifier(match, "yq2"))
    if last == "day":
        month_group = _qualifier(match, "mq2")
        year_q = merge_qualifications(year_q, month_group)
        month_q = merge_qualifications(month_q, month_group)
    return whole, year_q, month_q, day_q


def _parse_date(value: str) -> ParseResult:
    match = DATE_PATTERN.match(value)
    if not match:
        return format_error(value)

    whole, year_q, month_q, day_q = _qualifications(match)
    year, month, day = match.group("year"), match.group("month"), match.group("day")

    if day is None and month is not None and not is_masked(month) and int(month) > 12:
        if year_q or month_q:
            return format_error(value, "Seasons only take a trailing qualifier")
        return build_season(value, match, max_level=2, qualification=whole)

    masked = any(is_masked(token) for token in (year, month, day))
    if year_q or month_q or day_q or not is_right_aligned_mask(year, month, day):
        level = 2
    elif whole or masked or year.startswith("-"):
        level = 1
    else:
        level = 0

    return build_date(
        value, match, level=level,
        qualification=whole,
        year_qualification=year_q,
        month_qualification=month_q,
        day_qualification=day_q,
    )


def parse_value(value: str) -> ParseResult:
    """A single Level 2 date, date-time or season."""
    if "T" in value:
        return parse_date_time(value)
    special = _parse_special_year(value)
    if special is not None:
        return special
    if value.startswith("Y"):
        return format_error(value, "Expected Y17000, Y-17E7 or Y171010000S3 style years")
    return _parse_date(value)


# =============================================================================
# Sets and lists
# =============================================================================

def _format_year(year: int) -> str:
    return f"-{abs(year):04d}" if year < 0 else f"{year:04d}"


def _plain_date(parts: Tuple[int, ...]) -> Date:
    year = parts[0]
    text = "-".join([_format_year(year)] + [f"{part:02d}" for part in parts[1:]])
    return Date(
        edtf=text,
        level=1 if year < 0 else 0,
        precision=(Precision.YEAR, Precision.MONTH, Precision.DAY)[len(parts) - 1],
        year=year,
        month=parts[1] if len(parts) > 1 else None,
        day=parts[2] if len(parts) > 2 else None,
    )


def _is_plain_date(node) -> bool:
    return (
        node.type is EDTFType.DATE
        and node.unspecified is None
        and node.qualification is None
        and not any(node.component_qualifications)
        and node.exponential is None
        and node.significant_digits is None
    )


def _range_parts(node: Date) -> Tuple[int, ...]:
    return tuple(part for part in (node.year, node.month, node.day) if part is not None)


def _expand_range(entry: str, offset: int, settings) -> Tuple[List[Date], List[ParseError]]:
    """Expand ``a..b`` into one Date per year, month or day, inclusive."""
    left, right = entry.split(RANGE_SEPARATOR, 1)
    span = (offset, offset + len(entry))
    if not left.strip() or not right.strip():
        return [], [error(ErrorCode.INVALID_RANGE, f"Range {entry!r} needs two endpoints", span)]

    ends = []
    errors = []
    for label, text, shift in (("start", left, 0), ("end", right, len(left) + 2)):
        stripped = text.strip()
        result = parse_value(stripped)
        if not result.success:
            start = offset + shift + len(text) - len(text.lstrip())
            errors.extend(e.shifted(start, f"Invalid range {label}: ") for e in result.errors)
        else:
            ends.append(result.value)
    if errors:
        return [], errors

    first, last = ends
    if not (_is_plain_date(first) and _is_plain_date(last)):
        return [], [error(
            ErrorCode.INVALID_RANGE,
            f"Range {entry!r} must join two plain dates without qualifiers or unspecified digits",
            span,
        )]
    if first.precision != last.precision:
        return [], [error(
            ErrorCode.INVALID_RANGE,
            f"Range endpoints must share the same precision: {first} is a "
            f"{first.precision.value}, {last} is a {last.precision.value}",
            span,
            "Write both ends at the same precision, e.g. 2025-01..2026-12",
        )]

    begin, end = _range_parts(first), _range_parts(last)
    if begin > end:
        return [], [error(ErrorCode.INVALID_RANGE, f"Range start {first} is after its end {last}", span)]

    unit = first.precision.value
    size = range_length(begin, end, unit)
    if size > settings.MAX_RANGE_EXPANSION:
        return [], [error(
            ErrorCode.RANGE_TOO_LARGE,
            f"Range {entry!r} expands to {size} values, more than the "
            f"limit of {settings.MAX_RANGE_EXPANSION}",
            span,
        )]

    logger.debug(f"Expanding range {entry!r} into {size} {unit} values")
    return [_plain_date(parts) for parts in date_range(begin, end, unit)], []


def _split_entries(content: str, offset: int) -> List[Tuple[str, int]]:
    """Comma separated entries with their absolute offsets, whitespace trimmed."""
    entries = []
    position = offset
    for raw in content.split(","):
        leading = len(raw) - len(raw.lstrip())
        entries.append((raw.strip(), position + leading))
        position += len(raw) + 1
    return entries


def _parse_collection(value: str, content: str, node_class, empty_code: str,
                      settings) -> ParseResult:
    if not content.strip():
        kind = "set" if node_class is EDTFSet else "list"
        return fail(empty_code, f"Empty {kind}: {value!r}", (0, len(value)))

    entries = _split_entries(content, 1)
    earlier = entries[0][0].startswith(RANGE_SEPARATOR)
    if earlier:
        text, position = entries[0]
        entries[0] = (text[len(RANGE_SEPARATOR):].strip(), position + len(RANGE_SEPARATOR))
    later = entries[-1][0].endswith(RANGE_SEPARATOR)
    if later:
        text, position = entries[-1]
        entries[-1] = (text[:-len(RANGE_SEPARATOR)].strip(), position)

    values = []
    errors = []
    for text, position in entries:
        span = (position, position + len(text))
        if not text:
            errors.append(error(ErrorCode.INVALID_FORMAT, "Empty entry", span))
        elif text[0] in "[{" or "/" in text:
            errors.append(error(
                ErrorCode.INVALID_FORMAT,
                f"Sets and lists may only contain dates and seasons, got {text!r}",
                span,
            ))
        elif RANGE_SEPARATOR in text:
            expanded, problems = _expand_range(text, position, settings)
            values.extend(expanded)
            errors.extend(problems)
        else:
            result = parse_value(text)
            if result.success:
                values.append(result.value)
            else:
                errors.extend(e.shifted(position) for e in result.errors)

    if errors:
        return ParseResult.fail(errors)

    return ParseResult.ok(node_class(
        edtf=value,
        level=2,
        precision=values[0].precision,
        values=tuple(values),
        earlier=earlier,
        later=later,
    ))


# =============================================================================
# Entry point
# =============================================================================

@apply_settings
def parse_level2(date_string: str, settings=None) -> ParseResult:
    value = date_string.strip()
    if not value:
        return empty_error()

    match = SET_PATTERN.match(value)
    if match:
        return _parse_collection(value, match.group("content"), EDTFSet, ErrorCode.EMPTY_SET, settings)
    match = LIST_PATTERN.match(value)
    if match:
        return _parse_collection(value, match.group("content"), EDTFList, ErrorCode.EMPTY_LIST, settings)

    if "/" in value:
        return parse_interval(value, parse_value, allow_open=True)
    return parse_value(value)
