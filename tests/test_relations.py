"""
Tests for four-valued truth, Allen's relations over Members and the
EDTF-level relation helpers.
"""

import itertools

import pytest

import edtfparser
from edtfparser import parse
from edtfparser.member import BoundKind, Member, Shape
from edtfparser.normalization import normalize
from edtfparser.relations import allen, derived
from edtfparser.relations.allen import ALLEN_RELATIONS
from edtfparser.relations.evaluator import (
    RELATIONS,
    contains_or_equal,
    during,
    during_or_equal,
    disjoint,
    equals,
    evaluate,
    evaluate_relation,
    finishes,
    intersects,
    is_after,
    is_before,
    meets,
    overlaps,
    starts,
    touches,
)
from edtfparser.relations.truth import (
    Quantifier,
    Truth,
    and_,
    combine_with_all,
    combine_with_any,
    negate,
    or_,
)
from edtfparser.types import Precision

YES, NO, MAYBE, UNKNOWN = Truth.YES, Truth.NO, Truth.MAYBE, Truth.UNKNOWN


def point(start, end):
    """A member with exact start and end instants."""
    return Member(start, start, end, end, Precision.SECOND)


# =============================================================================
# Truth combinators
# =============================================================================

class TestTruth:
    """Tests for the combinator laws."""

    def test_empty_inputs(self):
        assert combine_with_any([]) is NO
        assert combine_with_all([]) is YES

    @pytest.mark.parametrize("value", list(Truth))
    def test_double_negation(self, value):
        assert negate(negate(value)) is value

    def test_negate(self):
        assert negate(YES) is NO
        assert negate(NO) is YES
        assert negate(MAYBE) is MAYBE
        assert negate(UNKNOWN) is UNKNOWN

    @pytest.mark.parametrize("values", list(itertools.permutations([YES, UNKNOWN, MAYBE])))
    def test_any_prefers_yes(self, values):
        assert combine_with_any(values) is YES

    @pytest.mark.parametrize("values", list(itertools.permutations([NO, UNKNOWN, MAYBE])))
    def test_any_prefers_unknown_over_maybe(self, values):
        assert combine_with_any(values) is UNKNOWN

    @pytest.mark.parametrize("values", list(itertools.permutations([NO, UNKNOWN, MAYBE])))
    def test_all_prefers_no(self, values):
        assert combine_with_all(values) is NO

    @pytest.mark.parametrize("values", list(itertools.permutations([YES, UNKNOWN, MAYBE])))
    def test_all_prefers_unknown_over_maybe(self, values):
        assert combine_with_all(values) is UNKNOWN

    def test_maybe_beats_the_identity(self):
        assert combine_with_any([NO, MAYBE]) is MAYBE
        assert combine_with_all([YES, MAYBE]) is MAYBE

    def test_binary_forms(self):
        assert and_(YES, MAYBE) is MAYBE
        assert or_(NO, UNKNOWN) is UNKNOWN

    def test_accepts_generators(self):
        assert combine_with_any(value for value in [NO, YES]) is YES

    def test_quantifier_coerce(self):
        assert Quantifier.coerce("any") is Quantifier.ANY
        assert Quantifier.coerce(Quantifier.ALL) is Quantifier.ALL
        with pytest.raises(ValueError):
            Quantifier.coerce("SOME")


# =============================================================================
# Allen relations over Members
# =============================================================================

class TestAllenPoints:
    """Tests on members whose bounds are exact instants."""

    INTERVALS = [(0, 10), (10, 20), (5, 15), (0, 20), (0, 5), (2, 8), (5, 10), (15, 25), (30, 40)]

    def test_exactly_one_relation_holds(self):
        """Test the 13 relations are exhaustive and exclusive on precise intervals."""
        for a, b in itertools.product(self.INTERVALS, repeat=2):
            results = {name: rel(point(*a), point(*b)) for name, rel in ALLEN_RELATIONS.items()}
            assert list(results.values()).count(YES) == 1, (a, b, results)
            assert all(value in (YES, NO) for value in results.values()), (a, b, results)

    @pytest.mark.parametrize("a,b,name", [
        ((0, 5), (10, 20), "before"),
        ((10, 20), (0, 5), "after"),
        ((0, 10), (10, 20), "meets"),
        ((10, 20), (0, 10), "met_by"),
        ((0, 15), (10, 20), "overlaps"),
        ((10, 20), (0, 15), "overlapped_by"),
        ((0, 5), (0, 20), "starts"),
        ((0, 20), (0, 5), "started_by"),
        ((5, 10), (0, 20), "during"),
        ((0, 20), (5, 10), "contains"),
        ((10, 20), (0, 20), "finishes"),
        ((0, 20), (10, 20), "finished_by"),
        ((0, 20), (0, 20), "equals"),
    ])
    def test_each_relation(self, a, b, name):
        assert ALLEN_RELATIONS[name](point(*a), point(*b)) is YES


class TestAllenRanges:
    """Tests on members with range width, open and unknown bounds."""

    def test_overlapping_end_ranges_give_maybe(self):
        a = Member(0, 0, 10, 20, Precision.YEAR)
        b = Member(15, 15, 30, 30, Precision.YEAR)
        assert allen.before(a, b) is MAYBE

    def test_open_end_is_never_before(self):
        a = Member(0, 0, None, None, Precision.UNKNOWN, end_kind=BoundKind.OPEN)
        assert allen.before(a, point(10, 20)) is NO

    def test_open_bound_never_proves(self):
        a = Member(None, None, 5, 5, Precision.UNKNOWN, start_kind=BoundKind.OPEN)
        assert allen.during(point(2, 4), a) is MAYBE
        assert allen.contains(a, point(10, 20)) is NO
        assert allen.before(a, point(10, 20)) is YES

    def test_unknown_bound(self):
        a = Member(0, 0, None, None, Precision.UNKNOWN, end_kind=BoundKind.UNKNOWN)
        assert allen.before(a, point(10, 20)) is UNKNOWN
        assert allen.after(a, point(-20, -10)) is YES

    def test_other_bounds_can_still_force_no(self):
        a = Member(50, 50, None, None, Precision.UNKNOWN, end_kind=BoundKind.UNKNOWN)
        assert allen.during(a, point(60, 70)) is NO

    def test_both_open_starts(self):
        a = Member(None, None, 10, 10, Precision.UNKNOWN, start_kind=BoundKind.OPEN)
        b = Member(None, None, 20, 20, Precision.UNKNOWN, start_kind=BoundKind.OPEN)
        assert allen.starts(a, b) is MAYBE
        assert allen.overlaps(a, b) is NO


class TestDerived:
    """Tests for relations composed from base relations."""

    def test_intersects(self):
        assert derived.intersects(point(0, 10), point(5, 15)) is YES
        assert derived.intersects(point(0, 5), point(10, 15)) is NO

    def test_disjoint(self):
        assert derived.disjoint(point(0, 5), point(10, 15)) is YES
        assert derived.disjoint(point(0, 10), point(5, 15)) is NO

    def test_touches(self):
        assert derived.touches(point(0, 10), point(10, 15)) is YES
        assert derived.touches(point(10, 15), point(0, 10)) is YES

    def test_during_or_equal(self):
        assert derived.during_or_equal(point(0, 10), point(0, 10)) is YES
        assert derived.during_or_equal(point(0, 5), point(0, 10)) is YES
        assert derived.during_or_equal(point(0, 15), point(0, 10)) is NO

    def test_contains_or_equal(self):
        assert derived.contains_or_equal(point(0, 10), point(2, 10)) is YES

    def test_derived_names(self):
        assert derived.intersects.__name__ == "intersects"
        assert set(RELATIONS) >= set(ALLEN_RELATIONS)


# =============================================================================
# Shape evaluation
# =============================================================================

class TestEvaluateRelation:
    """Tests for quantifiers over multi-member shapes."""

    @pytest.fixture
    def early_and_late(self):
        return Shape(members=(point(0, 5), point(30, 40)))

    @pytest.fixture
    def middle(self):
        return Shape(members=(point(10, 20),))

    def test_any(self, early_and_late, middle):
        assert evaluate_relation(early_and_late, middle, allen.before) is YES

    def test_all(self, early_and_late, middle):
        assert evaluate_relation(early_and_late, middle, allen.before, "ALL", "ALL") is NO

    def test_relation_by_name(self, early_and_late, middle):
        assert evaluate_relation(middle, early_and_late, "after", Quantifier.ANY, Quantifier.ANY) is YES

    def test_quantifier_order(self, early_and_late, middle):
        """Test B's quantifier combines each row before A's combines the rows."""
        assert evaluate_relation(middle, early_and_late, allen.after, "ANY", "ALL") is NO
        assert evaluate_relation(middle, early_and_late, allen.after, "ALL", "ANY") is YES

    def test_unknown_relation(self, middle):
        with pytest.raises(ValueError):
            evaluate_relation(middle, middle, "near")


# =============================================================================
# EDTF-level helpers
# =============================================================================

class TestScenarios:
    """End-to-end comparisons of parsed EDTF values."""

    def test_year_before_year(self):
        a = parse("1985").value
        b = parse("1990").value
        assert is_before(a, b) is YES

    def test_masked_decade(self):
        assert is_before("198X", "1995") is YES
        assert equals("198X", "1985") is MAYBE

    def test_open_end(self):
        assert is_before("1985/..", "1990") is NO
        assert during("1990", "1985/..") is MAYBE

    def test_unknown_end(self):
        assert overlaps("1985/", "1990") is UNKNOWN

    def test_set_expansion(self):
        assert len(normalize(parse("[1667..1669]").value).members) == 3

    def test_months_do_not_meet(self):
        assert meets("1985-04", "1985-05") is NO

    def test_masking_never_makes_during_false(self):
        assert during("1985", "198X") in (MAYBE, YES)

    def test_unknown_start_with_forced_answer(self):
        assert is_before("/1980", "1990") is YES
        assert is_after("1985/", "1980") is YES


class TestHelpers:
    """Tests for the remaining helpers and their options."""

    def test_starts_and_finishes(self):
        assert starts("1985-01", "1985") is YES
        assert finishes("1985-12", "1985") is YES

    def test_derived_helpers(self):
        assert intersects("1985", "1985-04") is YES
        assert disjoint("1985", "1990") is YES
        assert touches("1985", "1986") is NO
        assert during_or_equal("1985", "1985") is YES
        assert contains_or_equal("1985", "1985-06") is YES

    def test_quantifier_argument(self):
        assert is_before("[1980, 2000]", "1990") is YES
        assert is_before("[1980, 2000]", "1990", quantifier="ALL") is NO

    def test_default_quantifier_setting(self):
        assert is_before("[1980, 2000]", "1990", settings={"DEFAULT_QUANTIFIER": "ALL"}) is NO

    def test_accepts_members_and_shapes(self):
        assert evaluate(point(0, 5), Shape(members=(point(10, 20),)), "before") is YES

    def test_unparseable_string(self):
        with pytest.raises(ValueError):
            is_before("1985-13", "1990")

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            is_before(1985, "1990")

    def test_helper_names(self):
        assert is_before.__name__ == "is_before"
        assert edtfparser.contains_or_equal is contains_or_equal

    def test_truth_str(self):
        assert str(is_before("1985", "1990")) == "YES"
