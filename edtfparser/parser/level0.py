"""
EDTF Level 0: the ISO 8601-1 profile.

    1985                     year
    1985-04                  month
    1985-04-12               day
    1985-04-12T23:20:30Z     date and time, optional UTC offset
    1964/2008                interval of two of the above
"""

import regex as re

from edtfparser.conf import apply_settings
from edtfparser.parser.common import (
    build_date,
    empty_error,
    format_error,
    parse_date_time,
    parse_interval,
)
from edtfparser.types import ParseResult

DATE_PATTERN = re.compile(r"^(?P<year>\d{4})(?:-(?P<month>\d{2})(?:-(?P<day>\d{2}))?)?$")


def parse_value(value: str) -> ParseResult:
    """A single Level 0 date or date-time."""
    if "T" in value:
        return parse_date_time(value)
    match = DATE_PATTERN.match(value)
    if not match:
        return format_error(value)
    return build_date(value, match, level=0)


@apply_settings
def parse_level0(date_string: str, settings=None) -> ParseResult:
    value = date_string.strip()
    if not value:
        return empty_error()
    if "/" in value:
        return parse_interval(value, parse_value, allow_open=False)
    return parse_value(value)
