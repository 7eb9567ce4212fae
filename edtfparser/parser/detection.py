"""
Level Detection

A cheap pre-classifier that picks the grammar most likely to parse a string
without parsing it. Indicators are checked most specific first: any Level 2
indicator wins over every Level 1 indicator, and a string matching none is
Level 0.

Indicators either look at the whole string, or at each side of an interval
(split on ``/``) with qualifier characters removed so that masking rules see
bare digits. The parse step stays authoritative; detection only chooses
where to start.
"""

import logging
from dataclasses import dataclass
from typing import List

import regex as re

logger = logging.getLogger(__name__)


@dataclass
class LevelIndicator:
    """A lexical feature that implies a minimum conformance level."""
    name: str
    regex: re.Pattern
    level: int
    per_side: bool = False


def _indicator(name: str, pattern: str, level: int, per_side: bool = False) -> LevelIndicator:
    return LevelIndicator(name=name, regex=re.compile(pattern), level=level, per_side=per_side)


INDICATORS: List[LevelIndicator] = [
    # =========================================================================
    # LEVEL 2
    # =========================================================================
    _indicator("set", r"^\[.*\]$", 2),
    _indicator("list", r"^\{.*\}$", 2),
    _indicator("exponential_year", r"Y-?\d+E\d+", 2),
    _indicator("significant_digits", r"\dS\d", 2),
    _indicator("masked_interval_endpoint", r"X.*/|/.*X", 2),
    # "2004?-06", "?2004", "2004-~06", "2004-06~-11"
    _indicator("leading_qualifier", r"^[?~%]", 2),
    _indicator("qualifier_before_component", r"-[?~%]", 2),
    _indicator("qualifier_after_component", r"[?~%]-", 2),
    # Per-side checks run on the side with qualifiers stripped
    _indicator("extended_season", r"^-?\d{4}-(?:2[5-9]|[3-9]\d)$", 2, per_side=True),
    _indicator("masked_year_with_components", r"^-?\d{0,3}X[\dX]*-", 2, per_side=True),
    _indicator("embedded_year_mask", r"^-?\d*X+\d", 2, per_side=True),
    _indicator("partial_month_mask", r"^-?[\dX]{4}-(?:\dX|X\d)", 2, per_side=True),
    _indicator("masked_month_concrete_day", r"^-?[\dX]{4}-XX-\d", 2, per_side=True),
    _indicator("partial_day_mask", r"^-?[\dX]{4}-[\dX]{2}-(?:\dX|X\d)", 2, per_side=True),

    # =========================================================================
    # LEVEL 1
    # =========================================================================
    _indicator("qualifier", r"[?~%]", 1),
    _indicator("unspecified_digit", r"X", 1),
    _indicator("unknown_endpoint", r"^/|/$", 1),
    _indicator("long_year", r"Y-?\d{5,}", 1),
    _indicator("open_endpoint", r"^\.\.$", 1, per_side=True),
    _indicator("season", r"^-?\d{4}-2[1-4]$", 1, per_side=True),
    _indicator("negative_year", r"^-\d", 1, per_side=True),
]

_QUALIFIERS = re.compile(r"[?~%]")


def _sides(value: str) -> List[str]:
    return [_QUALIFIERS.sub("", side) for side in value.split("/")]


def matching_indicators(date_string: str) -> List[LevelIndicator]:
    """Every indicator that fires for ``date_string``, in priority order."""
    value = date_string.strip()
    sides = _sides(value)
    matches = []
    for indicator in INDICATORS:
        targets = sides if indicator.per_side else [value]
        if any(indicator.regex.search(target) for target in targets):
            matches.append(indicator)
    return matches


def detect_level(date_string: str) -> int:
    """
    Guess the EDTF conformance level of ``date_string``.

    Returns:
        2 if any Level 2 indicator fires, else 1 if any Level 1 indicator
        fires, else 0.
    """
    value = date_string.strip()
    sides = _sides(value)
    for indicator in INDICATORS:
        targets = sides if indicator.per_side else [value]
        if any(indicator.regex.search(target) for target in targets):
            logger.debug(f"Level indicator '{indicator.name}' matched: {value}")
            return indicator.level
    return 0
