"""Relations built by OR-ing base Allen relations with ``combine_with_any``."""

from typing import Dict

from edtfparser.member import Member
from edtfparser.relations import allen
from edtfparser.relations.allen import Relation
from edtfparser.relations.truth import Truth, combine_with_any


def _any_of(*relations: Relation) -> Relation:
    def relation(a: Member, b: Member) -> Truth:
        return combine_with_any(rel(a, b) for rel in relations)
    return relation


# Everything except before/after: the two values share at least one instant
intersects = _any_of(
    allen.meets, allen.met_by,
    allen.overlaps, allen.overlapped_by,
    allen.starts, allen.started_by,
    allen.during, allen.contains,
    allen.finishes, allen.finished_by,
    allen.equals,
)
intersects.__name__ = "intersects"

disjoint = _any_of(allen.before, allen.after)
disjoint.__name__ = "disjoint"

touches = _any_of(allen.meets, allen.met_by)
touches.__name__ = "touches"

during_or_equal = _any_of(allen.during, allen.starts, allen.finishes, allen.equals)
during_or_equal.__name__ = "during_or_equal"

contains_or_equal = _any_of(allen.contains, allen.started_by, allen.finished_by, allen.equals)
contains_or_equal.__name__ = "contains_or_equal"


DERIVED_RELATIONS: Dict[str, Relation] = {
    "intersects": intersects,
    "disjoint": disjoint,
    "touches": touches,
    "during_or_equal": during_or_equal,
    "contains_or_equal": contains_or_equal,
}
