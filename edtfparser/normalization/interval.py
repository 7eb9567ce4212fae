from typing import Dict, Optional, Tuple

from edtfparser.member import BoundKind, Member, Qualifiers
from edtfparser.normalization.single import normalize_single
from edtfparser.types import Interval, Precision


def _side_kind(endpoint, is_open: bool) -> BoundKind:
    if endpoint is not None:
        return BoundKind.CLOSED
    return BoundKind.OPEN if is_open else BoundKind.UNKNOWN


def normalize_interval(interval: Interval,
                       mappings: Optional[Dict[int, Tuple[int, int]]] = None) -> Member:
    """
    Bounds of an interval.

    The start bound comes from the start endpoint's start range and the end
    bound from the end endpoint's end range. Open and unknown sides keep null
    bounds. Endpoint qualifiers are not folded in; only the interval's own
    qualification is.
    """
    start_kind = _side_kind(interval.start, interval.open_start)
    end_kind = _side_kind(interval.end, interval.open_end)

    s_min = s_max = e_min = e_max = None
    start_member = end_member = None
    if interval.start is not None:
        start_member = normalize_single(interval.start, mappings)
        s_min, s_max = start_member.s_min, start_member.s_max
    if interval.end is not None:
        end_member = normalize_single(interval.end, mappings)
        e_min, e_max = end_member.e_min, end_member.e_max

    if start_member is None or end_member is None:
        precision = Precision.UNKNOWN
    elif start_member.precision == end_member.precision:
        precision = start_member.precision
    else:
        precision = Precision.MIXED

    return Member(
        s_min=s_min,
        s_max=s_max,
        e_min=e_min,
        e_max=e_max,
        precision=precision,
        start_kind=start_kind,
        end_kind=end_kind,
        qualifiers=Qualifiers.from_qualifications(interval.qualification),
    )
