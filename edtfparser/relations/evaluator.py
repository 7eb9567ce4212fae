"""
Shape-level relation evaluation and the EDTF-level helpers.

``evaluate_relation`` lifts a Member relation to two Shapes: for each member
of A the relation is combined across every member of B with B's quantifier,
then those per-member results are combined across A with A's quantifier.

The helpers (``is_before``, ``during``, ...) accept parsed nodes or EDTF
strings, normalize both sides and apply the same quantifier to each. When no
quantifier is given, ``DEFAULT_QUANTIFIER`` from the settings is used.
"""

import logging
from typing import Union

from edtfparser.conf import apply_settings
from edtfparser.member import Member, Shape
from edtfparser.normalization import normalize
from edtfparser.parser import parse
from edtfparser.relations.allen import ALLEN_RELATIONS, Relation
from edtfparser.relations.derived import DERIVED_RELATIONS
from edtfparser.relations.truth import COMBINERS, Quantifier, Truth
from edtfparser.types import NODE_TYPES

logger = logging.getLogger(__name__)

RELATIONS = dict(ALLEN_RELATIONS, **DERIVED_RELATIONS)


def resolve_relation(relation: Union[str, Relation]) -> Relation:
    if callable(relation):
        return relation
    try:
        return RELATIONS[relation]
    except KeyError:
        raise ValueError(
            "Unknown relation: {!r}. Expected one of: {}".format(relation, ", ".join(RELATIONS))
        ) from None


def evaluate_relation(shape_a: Shape, shape_b: Shape, relation: Union[str, Relation],
                      quantifier_a=Quantifier.ANY, quantifier_b=Quantifier.ANY) -> Truth:
    relation = resolve_relation(relation)
    combine_a = COMBINERS[Quantifier.coerce(quantifier_a)]
    combine_b = COMBINERS[Quantifier.coerce(quantifier_b)]
    return combine_a(
        combine_b(relation(member_a, member_b) for member_b in shape_b.members)
        for member_a in shape_a.members
    )


def to_shape(value, settings) -> Shape:
    """Coerce an EDTF string, AST node, Member or Shape into a Shape."""
    if isinstance(value, Shape):
        return value
    if isinstance(value, Member):
        return Shape(members=(value,))
    if isinstance(value, str):
        result = parse(value, settings=settings)
        if not result.success:
            raise ValueError(
                "Cannot compare unparseable EDTF {!r}: {}".format(value, result.errors[0].message)
            )
        value = result.value
    if not isinstance(value, NODE_TYPES):
        raise TypeError(
            "Expected an EDTF string, node, Member or Shape, got {}".format(type(value).__name__)
        )
    return normalize(value, settings=settings)


@apply_settings
def evaluate(a, b, relation, quantifier=None, settings=None) -> Truth:
    """Evaluate ``relation`` between two EDTF values.

    :param a: An EDTF string, AST node, Member or Shape.
    :param b: Same as ``a``.
    :param relation: A relation function or its name, e.g. ``"before"`` or ``"intersects"``.
    :param quantifier: ``ANY`` or ``ALL``, applied to both sides.
    :return: :class:`~edtfparser.relations.truth.Truth`
    :raises ValueError: if a string does not parse, or the relation or quantifier is unknown
    """
    quantifier = Quantifier.coerce(quantifier or settings.DEFAULT_QUANTIFIER)
    shape_a = to_shape(a, settings)
    shape_b = to_shape(b, settings)
    truth = evaluate_relation(shape_a, shape_b, relation, quantifier, quantifier)
    logger.debug(f"{a} {getattr(relation, '__name__', relation)} {b} [{quantifier.value}]: {truth.value}")
    return truth


def _helper(relation: str, name: str, doc: str = None):
    @apply_settings
    def helper(a, b, quantifier=None, settings=None) -> Truth:
        return evaluate(a, b, relation, quantifier=quantifier, settings=settings)

    helper.__name__ = helper.__qualname__ = name
    helper.__doc__ = doc
    return helper


is_before = _helper("before", "is_before", "Whether ``a`` ends before ``b`` starts.")
is_after = _helper("after", "is_after", "Whether ``a`` starts after ``b`` ends.")
meets = _helper("meets", "meets")
met_by = _helper("met_by", "met_by")
overlaps = _helper("overlaps", "overlaps")
overlapped_by = _helper("overlapped_by", "overlapped_by")
starts = _helper("starts", "starts")
started_by = _helper("started_by", "started_by")
during = _helper("during", "during", "Whether ``a`` lies strictly inside ``b``.")
contains = _helper("contains", "contains", "Whether ``b`` lies strictly inside ``a``.")
finishes = _helper("finishes", "finishes")
finished_by = _helper("finished_by", "finished_by")
equals = _helper("equals", "equals")
intersects = _helper("intersects", "intersects", "Whether ``a`` and ``b`` share at least one instant.")
disjoint = _helper("disjoint", "disjoint")
touches = _helper("touches", "touches")
during_or_equal = _helper("during_or_equal", "during_or_equal")
contains_or_equal = _helper("contains_or_equal", "contains_or_equal")
