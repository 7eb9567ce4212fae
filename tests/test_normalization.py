"""
Tests for the normalization engine: every AST node becomes a Shape of
four-bound Members.
"""

import pytest

from edtfparser import parse
from edtfparser.calendars import end_of_period, start_of_period, to_epoch_ms
from edtfparser.member import (
    BoundKind,
    ListMode,
    Member,
    MemberContractError,
    Qualifiers,
    Shape,
)
from edtfparser.normalization import (
    NormalizationError,
    convex_hull,
    normalize,
    normalize_to_convex_hull,
    normalize_to_members,
)
from edtfparser.normalization import bounds
from edtfparser.types import Date, Interval, Precision, Set as EDTFSet


def member_of(edtf, **kwargs):
    result = parse(edtf)
    assert result.success, result.errors
    return normalize_to_convex_hull(result.value, **kwargs)


def bounds_of(edtf):
    member = member_of(edtf)
    return member.s_min, member.s_max, member.e_min, member.e_max


# =============================================================================
# Member and Shape
# =============================================================================

class TestMember:
    """Tests for the Member contract."""

    def test_closed_member(self):
        member = Member(0, 0, 9, 9, Precision.DAY)
        assert member.is_closed
        assert member.to_dict()["start_kind"] == "closed"

    def test_inverted_start_raises(self):
        with pytest.raises(MemberContractError):
            Member(5, 1, 9, 9, Precision.DAY)

    def test_closed_side_needs_bounds(self):
        with pytest.raises(MemberContractError):
            Member(None, 0, 9, 9, Precision.DAY)

    def test_open_side_cannot_carry_bounds(self):
        with pytest.raises(MemberContractError):
            Member(0, 0, 9, 9, Precision.DAY, start_kind=BoundKind.OPEN)

    def test_open_side(self):
        member = Member(None, None, 9, 9, Precision.UNKNOWN, start_kind=BoundKind.OPEN)
        assert not member.is_closed

    def test_contract_error_is_value_error(self):
        assert issubclass(MemberContractError, ValueError)

    def test_qualifiers_merge(self):
        merged = Qualifiers(uncertain=True).merge(Qualifiers(approximate=True))
        assert merged == Qualifiers(uncertain=True, approximate=True)
        assert Qualifiers.from_qualifications(None, None) is None


# =============================================================================
# Dates
# =============================================================================

class TestDateNormalization:
    """Tests for calendar dates, with and without unspecified digits."""

    def test_year(self):
        assert bounds_of("1985") == (
            start_of_period(1985), start_of_period(1985),
            end_of_period(1985), end_of_period(1985),
        )
        assert member_of("1985").precision is Precision.YEAR

    def test_day(self):
        member = member_of("1985-04-12")
        assert member.s_min == to_epoch_ms(1985, 4, 12)
        assert member.e_max == to_epoch_ms(1985, 4, 13) - 1
        assert member.precision is Precision.DAY

    def test_masked_decade(self):
        """Test 19XX spans the start of 1900 to the end of 1999."""
        assert bounds_of("19XX") == (
            start_of_period(1900), start_of_period(1999),
            end_of_period(1900), end_of_period(1999),
        )

    def test_masked_day(self):
        s_min, s_max, e_min, e_max = bounds_of("1985-04-XX")
        assert s_min == start_of_period(1985, 4, 1)
        assert e_max == end_of_period(1985, 4, 30)

    def test_masked_leap_day_resolves_to_leap_years(self):
        assert bounds.earliest("XXXX", 2, 29) == (0, 2, 29)
        assert bounds.latest("XXXX", 2, 29) == (9996, 2, 29)

    def test_masked_negative_year(self):
        assert bounds.earliest("-198X") == (-1989,)
        assert bounds.latest("-198X") == (-1980,)

    def test_negative_mask_skips_year_zero(self):
        assert list(bounds.candidates("-00X")) == list(range(-9, 0))
        assert bounds.earliest("-XXXX") == (-9999,)
        assert bounds.latest("-XXXX") == (-1,)

    def test_candidates(self):
        assert list(bounds.candidates("1X"))[:3] == [10, 11, 12]
        assert list(bounds.candidates("1X", descending=True))[0] == 19

    def test_widening_contains_concrete_value(self):
        """Test a masked date's envelope covers every date it can stand for."""
        concrete = member_of("1985")
        masked = member_of("198X")
        assert masked.s_min <= concrete.s_min
        assert masked.e_max >= concrete.e_max

    def test_whole_qualification(self):
        assert member_of("1984?").qualifiers == Qualifiers(uncertain=True)
        assert member_of("1984").qualifiers is None

    def test_component_qualification_folds_into_member(self):
        assert member_of("2004-06~-11").qualifiers == Qualifiers(approximate=True)
        assert member_of("?2004-06-~11").qualifiers == Qualifiers(uncertain=True, approximate=True)

    def test_uncertain_approximate(self):
        assert member_of("2004%").qualifiers == Qualifiers(uncertain=True, approximate=True)

    def test_exponential_year_is_exact(self):
        assert member_of("Y-17E7").s_min == start_of_period(-170000000)

    def test_deterministic(self):
        node = parse("198X~").value
        assert normalize(node) == normalize(node)


class TestDateTimeNormalization:
    """Tests for date-times: exact seconds, minute precision tag."""

    def test_seconds(self):
        member = member_of("1985-04-12T23:20:30Z")
        start = to_epoch_ms(1985, 4, 12, 23, 20, 30)
        assert (member.s_min, member.s_max) == (start, start)
        assert (member.e_min, member.e_max) == (start + 999, start + 999)
        assert member.precision is Precision.MINUTE

    def test_minutes(self):
        member = member_of("1985-04-12T23:20")
        start = to_epoch_ms(1985, 4, 12, 23, 20)
        assert member.e_max == start + 59999

    def test_offset_does_not_shift_bounds(self):
        assert member_of("1985-04-12T23:20+05:00") == member_of("1985-04-12T23:20Z")


class TestSeasonNormalization:
    """Tests for season month spans."""

    def test_spring(self):
        member = member_of("2001-21")
        assert member.s_min == start_of_period(2001, 3)
        assert member.e_max == end_of_period(2001, 5)
        assert member.precision is Precision.SUBYEAR

    def test_winter_crosses_year(self):
        member = member_of("2001-24")
        assert member.s_min == start_of_period(2001, 12)
        assert member.e_max == end_of_period(2002, 2)

    def test_southern_hemisphere(self):
        member = member_of("2001-29")
        assert member.s_min == start_of_period(2001, 9)

    def test_quarter(self):
        member = member_of("2001-36")
        assert member.s_min == start_of_period(2001, 10)
        assert member.e_max == end_of_period(2001, 12)

    def test_custom_mappings(self):
        member = member_of("2001-21", settings={"SEASON_MAPPINGS": {21: (4, 6)}})
        assert member.s_min == start_of_period(2001, 4)

    def test_partial_mappings_keep_defaults(self):
        """Test codes missing from a custom table still normalize with the default spans."""
        member = member_of("2001-22", settings={"SEASON_MAPPINGS": {21: (4, 6)}})
        assert member.s_min == start_of_period(2001, 6)
        assert member.e_max == end_of_period(2001, 8)


# =============================================================================
# Intervals
# =============================================================================

class TestIntervalNormalization:
    """Tests for interval bounds, kinds and precision."""

    def test_closed(self):
        member = member_of("1985-04/1990-06")
        assert member.s_min == start_of_period(1985, 4)
        assert member.e_max == end_of_period(1990, 6)
        assert member.precision is Precision.MONTH

    def test_mixed_precision(self):
        assert member_of("1985-04/1990").precision is Precision.MIXED

    def test_open_end(self):
        member = member_of("1985/..")
        assert member.end_kind is BoundKind.OPEN
        assert member.e_min is None and member.e_max is None
        assert member.precision is Precision.UNKNOWN

    def test_unknown_start(self):
        member = member_of("/1985")
        assert member.start_kind is BoundKind.UNKNOWN
        assert member.end_kind is BoundKind.CLOSED

    def test_masked_start(self):
        member = member_of("198X/1995")
        assert member.s_min == start_of_period(1980)
        assert member.s_max == start_of_period(1989)

    def test_endpoint_qualifiers_not_folded(self):
        assert member_of("1984?/2004~").qualifiers is None


# =============================================================================
# Sets, lists and convex hulls
# =============================================================================

class TestCollections:
    """Tests for Shapes of several members."""

    def test_set_expansion_members(self):
        shape = normalize(parse("[1667..1669]").value)
        assert len(shape) == 3
        assert shape.list_mode is ListMode.ONE_OF
        assert all(member.precision is Precision.YEAR for member in shape)

    def test_list_mode(self):
        assert normalize(parse("{1667, 1668}").value).list_mode is ListMode.ALL_OF

    def test_simple_values_have_no_list_mode(self):
        shape = normalize(parse("1985").value)
        assert len(shape) == 1
        assert shape.list_mode is None

    def test_normalize_to_members(self):
        members = normalize_to_members(parse("[1667, 1668]").value)
        assert [member.s_min for member in members] == [start_of_period(1667), start_of_period(1668)]

    def test_convex_hull(self):
        hull = member_of("[1667, 1670]")
        assert hull.s_min == start_of_period(1667)
        assert hull.s_max == start_of_period(1670)
        assert hull.e_max == end_of_period(1670)
        assert hull.precision is Precision.MIXED

    def test_convex_hull_merges_qualifiers(self):
        assert member_of("[1667?, 1670~]").qualifiers == Qualifiers(uncertain=True, approximate=True)

    def test_convex_hull_kinds(self):
        """Test open beats unknown beats closed on each side."""
        closed = Member(0, 0, 9, 9, Precision.DAY)
        unknown = Member(None, None, 9, 9, Precision.UNKNOWN, start_kind=BoundKind.UNKNOWN)
        opened = Member(None, None, 9, 9, Precision.UNKNOWN, start_kind=BoundKind.OPEN)
        assert convex_hull([closed, unknown]).start_kind is BoundKind.UNKNOWN
        assert convex_hull([closed, unknown, opened]).start_kind is BoundKind.OPEN
        assert convex_hull([closed, unknown]).end_kind is BoundKind.CLOSED

    def test_convex_hull_of_nothing(self):
        with pytest.raises(NormalizationError):
            convex_hull([])

    def test_shape_to_dict(self):
        data = normalize(parse("[1667, 1668]").value).to_dict()
        assert data["list_mode"] == "oneOf"
        assert len(data["members"]) == 2


# =============================================================================
# Contract violations
# =============================================================================

class TestContractViolations:

    def test_unknown_node(self):
        with pytest.raises(NormalizationError):
            normalize(object())

    def test_interval_inside_set(self):
        interval = parse("1985/1990").value
        bad_set = EDTFSet(edtf="[1985/1990]", level=2, precision=Precision.YEAR, values=(interval,))
        with pytest.raises(NormalizationError):
            normalize(bad_set)

    def test_normalization_error_is_value_error(self):
        assert issubclass(NormalizationError, ValueError)

    def test_shape_is_plain_value(self):
        member = Member(0, 0, 9, 9, Precision.DAY)
        assert Shape(members=(member,)) == Shape(members=(member,))

    def test_interval_node_fields(self):
        node = Interval(edtf="1985/", level=1, precision=Precision.YEAR,
                        start=Date(edtf="1985", level=0, precision=Precision.YEAR, year=1985))
        assert normalize_to_convex_hull(node).end_kind is BoundKind.UNKNOWN
