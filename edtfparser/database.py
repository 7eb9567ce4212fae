"""
Database column projection.

Flattens an EDTF value into nullable epoch-millisecond columns so databases
can index and range-query it::

    edtf_text          TEXT NOT NULL
    start_min_ms       BIGINT NULL
    start_max_ms       BIGINT NULL
    end_min_ms         BIGINT NULL
    end_max_ms         BIGINT NULL
    has_open_start     BOOLEAN NOT NULL
    has_open_end       BOOLEAN NOT NULL
    has_unknown_start  BOOLEAN NOT NULL
    has_unknown_end    BOOLEAN NOT NULL
    precision_rank     SMALLINT NOT NULL
    is_set             BOOLEAN NOT NULL
    set_mode           SMALLINT NULL      -- 0 oneOf, 1 allOf
    out_of_range       BOOLEAN NOT NULL

Sets and lists are stored as their convex hull unless ``FLATTEN_SETS`` is
off, so a database match is a candidate that should be re-checked with the
relation evaluator.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Union

from edtfparser.conf import apply_settings
from edtfparser.member import BoundKind, ListMode, Member
from edtfparser.normalization import convex_hull, normalize
from edtfparser.parser import parse
from edtfparser.types import Precision
from edtfparser.utils import clamp

logger = logging.getLogger(__name__)

PRECISION_RANK = {
    Precision.SECOND: 7,
    Precision.MINUTE: 6,
    Precision.HOUR: 5,
    Precision.DAY: 4,
    Precision.MONTH: 3,
    Precision.YEAR: 2,
    Precision.SUBYEAR: 1,
    Precision.MIXED: 0,
    Precision.UNKNOWN: 0,
}

SET_MODES = {
    ListMode.ONE_OF: 0,
    ListMode.ALL_OF: 1,
}


@dataclass(frozen=True)
class DbColumns:
    edtf_text: str
    start_min_ms: Optional[int]
    start_max_ms: Optional[int]
    end_min_ms: Optional[int]
    end_max_ms: Optional[int]
    has_open_start: bool
    has_open_end: bool
    has_unknown_start: bool
    has_unknown_end: bool
    precision_rank: int
    is_set: bool
    set_mode: Optional[int]
    out_of_range: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _fit(value: Optional[int], settings):
    """Return ``(stored_value, out_of_range)`` for one bound."""
    if value is None:
        return None, False
    outside = not settings.MIN_DB_MS <= value <= settings.MAX_DB_MS
    if outside and settings.CLAMP_OUT_OF_RANGE:
        return clamp(value, settings.MIN_DB_MS, settings.MAX_DB_MS), True
    return value, outside


def member_to_columns(member: Member, edtf_text: str, settings,
                      list_mode: Optional[ListMode] = None) -> DbColumns:
    stored = {}
    out_of_range = False
    for name, value in (
        ("start_min_ms", member.s_min),
        ("start_max_ms", member.s_max),
        ("end_min_ms", member.e_min),
        ("end_max_ms", member.e_max),
    ):
        stored[name], outside = _fit(value, settings)
        out_of_range = out_of_range or outside

    if out_of_range:
        logger.debug(f"Bounds of {edtf_text} fall outside the storable range")

    return DbColumns(
        edtf_text=edtf_text,
        has_open_start=member.start_kind is BoundKind.OPEN,
        has_open_end=member.end_kind is BoundKind.OPEN,
        has_unknown_start=member.start_kind is BoundKind.UNKNOWN,
        has_unknown_end=member.end_kind is BoundKind.UNKNOWN,
        precision_rank=PRECISION_RANK[member.precision],
        is_set=list_mode is not None,
        set_mode=SET_MODES.get(list_mode),
        out_of_range=out_of_range,
        **stored,
    )


@apply_settings
def prepare_for_database(value, settings=None) -> Union[DbColumns, List[DbColumns]]:
    """Project an EDTF value onto database columns.

    :param value:
        An EDTF string or a parsed AST node.

    :param settings:
        Configure customized behavior using settings defined in :mod:`edtfparser.conf.Settings`.
        Reads ``FLATTEN_SETS``, ``CLAMP_OUT_OF_RANGE``, ``MIN_DB_MS`` and ``MAX_DB_MS``.
    :type settings: dict

    :return: One :class:`DbColumns` row, or one row per member for a set or
        list when ``FLATTEN_SETS`` is off.

    :raises ValueError: if ``value`` is a string that does not parse.

    ``out_of_range`` is set whenever a bound lies outside
    ``[MIN_DB_MS, MAX_DB_MS]``; the bound itself is clamped only when
    ``CLAMP_OUT_OF_RANGE`` is on.
    """
    if isinstance(value, str):
        result = parse(value, settings=settings)
        if not result.success:
            raise ValueError(
                "Cannot store unparseable EDTF {!r}: {}".format(value, result.errors[0].message)
            )
        value = result.value

    edtf_text = str(value)
    shape = normalize(value, settings=settings)

    if shape.list_mode is not None and not settings.FLATTEN_SETS:
        return [member_to_columns(member, edtf_text, settings, shape.list_mode) for member in shape]
    return member_to_columns(convex_hull(shape.members), edtf_text, settings, shape.list_mode)
