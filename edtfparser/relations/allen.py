"""
Allen's interval algebra over Members.

Every relation is a conjunction of two kinds of atom comparing one bound of
each member, where a bound is a side's range of possible instants
(``[s_min, s_max]`` for a start, ``[e_min, e_max]`` for an end):

    lt(x, y)  x is strictly earlier than y
    eq(x, y)  x and y are the same instant

An atom is YES when every pair of instants drawn from the two ranges
satisfies it, NO when none does and MAYBE otherwise. Unknown bounds make it
UNKNOWN. Open bounds sit at -inf (start) or +inf (end): they give NO wherever
infinity rules the atom out, and MAYBE where infinity would satisfy it, since
an unbounded side never proves a relation on its own.

Atoms are combined with ``combine_with_all``, so NO beats UNKNOWN beats
MAYBE. A relation another bound already rules out stays NO even when one of
its bounds is unknown.
"""

from typing import Callable, Dict, NamedTuple, Optional

from edtfparser.member import BoundKind, Member
from edtfparser.relations.truth import Truth, combine_with_all

Relation = Callable[[Member, Member], Truth]


class Bound(NamedTuple):
    kind: BoundKind
    low: Optional[int]
    high: Optional[int]
    # -1 for a start (open means -inf), +1 for an end (open means +inf)
    direction: int


def start(member: Member) -> Bound:
    return Bound(member.start_kind, member.s_min, member.s_max, -1)


def end(member: Member) -> Bound:
    return Bound(member.end_kind, member.e_min, member.e_max, 1)


def _is_open(bound: Bound, direction: int) -> bool:
    return bound.kind is BoundKind.OPEN and bound.direction == direction


# =============================================================================
# Atoms
# =============================================================================

def lt(x: Bound, y: Bound) -> Truth:
    if x.kind is BoundKind.UNKNOWN or y.kind is BoundKind.UNKNOWN:
        return Truth.UNKNOWN
    if _is_open(x, 1) or _is_open(y, -1):
        return Truth.NO
    if x.kind is BoundKind.OPEN or y.kind is BoundKind.OPEN:
        return Truth.MAYBE
    if x.high < y.low:
        return Truth.YES
    if x.low >= y.high:
        return Truth.NO
    return Truth.MAYBE


def eq(x: Bound, y: Bound) -> Truth:
    if x.kind is BoundKind.UNKNOWN or y.kind is BoundKind.UNKNOWN:
        return Truth.UNKNOWN
    if x.kind is BoundKind.OPEN or y.kind is BoundKind.OPEN:
        if x.kind is y.kind and x.direction == y.direction:
            return Truth.MAYBE
        return Truth.NO
    if x.low == x.high == y.low == y.high:
        return Truth.YES
    if x.high < y.low or y.high < x.low:
        return Truth.NO
    return Truth.MAYBE


# =============================================================================
# Base relations
# =============================================================================

def before(a: Member, b: Member) -> Truth:
    """A ends before B starts, with a gap."""
    return lt(end(a), start(b))


def after(a: Member, b: Member) -> Truth:
    return before(b, a)


def meets(a: Member, b: Member) -> Truth:
    """A ends exactly where B starts.

    Calendar units never meet: April ends at 23:59:59.999 and May starts one
    millisecond later, so ``meets("1985-04", "1985-05")`` is NO.
    """
    return eq(end(a), start(b))


def met_by(a: Member, b: Member) -> Truth:
    return meets(b, a)


def overlaps(a: Member, b: Member) -> Truth:
    """A starts first and ends inside B."""
    return combine_with_all([
        lt(start(a), start(b)),
        lt(start(b), end(a)),
        lt(end(a), end(b)),
    ])


def overlapped_by(a: Member, b: Member) -> Truth:
    return overlaps(b, a)


def starts(a: Member, b: Member) -> Truth:
    """A and B start together and A ends first."""
    return combine_with_all([eq(start(a), start(b)), lt(end(a), end(b))])


def started_by(a: Member, b: Member) -> Truth:
    return starts(b, a)


def during(a: Member, b: Member) -> Truth:
    """A lies strictly inside B."""
    return combine_with_all([lt(start(b), start(a)), lt(end(a), end(b))])


def contains(a: Member, b: Member) -> Truth:
    return during(b, a)


def finishes(a: Member, b: Member) -> Truth:
    """A and B end together and A starts last."""
    return combine_with_all([eq(end(a), end(b)), lt(start(b), start(a))])


def finished_by(a: Member, b: Member) -> Truth:
    return finishes(b, a)


def equals(a: Member, b: Member) -> Truth:
    return combine_with_all([eq(start(a), start(b)), eq(end(a), end(b))])


ALLEN_RELATIONS: Dict[str, Relation] = {
    "before": before,
    "after": after,
    "meets": meets,
    "met_by": met_by,
    "overlaps": overlaps,
    "overlapped_by": overlapped_by,
    "starts": starts,
    "started_by": started_by,
    "during": during,
    "contains": contains,
    "finishes": finishes,
    "finished_by": finished_by,
    "equals": equals,
}
