"""
Normalization Engine

Converts any EDTF AST node into a :class:`~edtfparser.member.Shape`: one or
more four-bound :class:`~edtfparser.member.Member` ranges plus, for sets and
lists, how the members combine (``oneOf``/``allOf``).

Normalization is pure and deterministic. It only raises on contract
violations: a node whose ``type`` tag it does not know, or a Set/List that
contains something other than a Date, DateTime or Season.
"""

import logging
from typing import List

from edtfparser.conf import apply_settings
from edtfparser.member import BoundKind, ListMode, Member, Shape
from edtfparser.normalization.interval import normalize_interval
from edtfparser.normalization.single import NormalizationError, normalize_single
from edtfparser.types import EDTFType, Precision
from edtfparser.utils import max_bound, min_bound

logger = logging.getLogger(__name__)

__all__ = [
    "normalize",
    "normalize_to_members",
    "normalize_to_convex_hull",
    "convex_hull",
    "NormalizationError",
]


def _single_shape(node, settings) -> Shape:
    return Shape(members=(normalize_single(node, settings.SEASON_MAPPINGS),))


def _interval_shape(node, settings) -> Shape:
    return Shape(members=(normalize_interval(node, settings.SEASON_MAPPINGS),))


def _collection_shape(node, settings) -> Shape:
    members = tuple(normalize_single(value, settings.SEASON_MAPPINGS) for value in node.values)
    list_mode = ListMode.ONE_OF if node.type is EDTFType.SET else ListMode.ALL_OF
    return Shape(members=members, list_mode=list_mode)


_NORMALIZERS = {
    EDTFType.DATE: _single_shape,
    EDTFType.DATE_TIME: _single_shape,
    EDTFType.SEASON: _single_shape,
    EDTFType.INTERVAL: _interval_shape,
    EDTFType.SET: _collection_shape,
    EDTFType.LIST: _collection_shape,
}


@apply_settings
def normalize(node, settings=None) -> Shape:
    """Normalize an AST node into its comparison Shape.

    :param node:
        A Date, DateTime, Interval, Season, Set or List node.

    :param settings:
        Configure customized behavior using settings defined in :mod:`edtfparser.conf.Settings`.
        ``SEASON_MAPPINGS`` is the only setting normalization reads.
    :type settings: dict

    :return: A :class:`~edtfparser.member.Shape`
    :raises NormalizationError: if ``node`` is not a known AST node
    """
    handler = _NORMALIZERS.get(getattr(node, "type", None))
    if handler is None:
        raise NormalizationError(f"Cannot normalize {type(node).__name__}: unknown node type")
    return handler(node, settings)


@apply_settings
def normalize_to_members(node, settings=None) -> List[Member]:
    return list(normalize(node, settings=settings).members)


def convex_hull(members) -> Member:
    """
    Collapse members into the single smallest range covering all of them.

    Gaps between disjoint members are lost. Each bound is the elementwise
    min/max ignoring nulls; a side is open if any member is open there, else
    unknown if any is unknown.
    """
    members = list(members)
    if not members:
        raise NormalizationError("Cannot take the convex hull of no members")
    if len(members) == 1:
        return members[0]

    def side_kind(kinds) -> BoundKind:
        kinds = set(kinds)
        if BoundKind.OPEN in kinds:
            return BoundKind.OPEN
        if BoundKind.UNKNOWN in kinds:
            return BoundKind.UNKNOWN
        return BoundKind.CLOSED

    start_kind = side_kind(member.start_kind for member in members)
    end_kind = side_kind(member.end_kind for member in members)

    qualifiers = None
    for member in members:
        if member.qualifiers is not None:
            qualifiers = member.qualifiers.merge(qualifiers)

    s_min = s_max = e_min = e_max = None
    if start_kind is BoundKind.CLOSED:
        s_min = min_bound(member.s_min for member in members)
        s_max = max_bound(member.s_max for member in members)
    if end_kind is BoundKind.CLOSED:
        e_min = min_bound(member.e_min for member in members)
        e_max = max_bound(member.e_max for member in members)

    return Member(
        s_min=s_min,
        s_max=s_max,
        e_min=e_min,
        e_max=e_max,
        precision=Precision.MIXED,
        start_kind=start_kind,
        end_kind=end_kind,
        qualifiers=qualifiers,
    )


@apply_settings
def normalize_to_convex_hull(node, settings=None) -> Member:
    """Normalize ``node`` and collapse its Shape into one Member."""
    shape = normalize(node, settings=settings)
    if len(shape) > 1:
        logger.debug(f"Flattening {len(shape)} members of {node} into their convex hull")
    return convex_hull(shape.members)
