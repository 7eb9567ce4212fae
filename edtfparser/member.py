"""
Normalized comparison values.

A :class:`Member` describes one EDTF value as four bounds in epoch
milliseconds: the earliest and latest possible start (``s_min``/``s_max``)
and the earliest and latest possible end (``e_min``/``e_max``). Bounds are
plain Python ints, so they stay exact for any year.

A :class:`Shape` groups the members of a whole EDTF value. Simple values have
exactly one member and no list mode; sets are ``oneOf`` and lists ``allOf``.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from edtfparser.types import Precision, Qualification


class BoundKind(Enum):
    CLOSED = "closed"
    OPEN = "open"        # unbounded, EDTF ".."
    UNKNOWN = "unknown"  # missing information, EDTF empty endpoint


class ListMode(Enum):
    ONE_OF = "oneOf"
    ALL_OF = "allOf"


class MemberContractError(ValueError):
    """A Member whose bounds contradict its bound kinds."""


@dataclass(frozen=True)
class Qualifiers:
    uncertain: bool = False
    approximate: bool = False

    @classmethod
    def from_qualifications(cls, *qualifications: Optional[Qualification]) -> Optional[Qualifiers]:
        """OR together any number of qualifications; None when nothing is qualified."""
        present = [q for q in qualifications if q is not None]
        if not present:
            return None
        return cls(
            uncertain=any(q.is_uncertain for q in present),
            approximate=any(q.is_approximate for q in present),
        )

    def merge(self, other: Optional[Qualifiers]) -> Qualifiers:
        if other is None:
            return self
        return Qualifiers(
            uncertain=self.uncertain or other.uncertain,
            approximate=self.approximate or other.approximate,
        )

    def to_dict(self) -> Dict[str, bool]:
        return {"uncertain": self.uncertain, "approximate": self.approximate}


@dataclass(frozen=True)
class Member:
    s_min: Optional[int]
    s_max: Optional[int]
    e_min: Optional[int]
    e_max: Optional[int]
    precision: Precision
    start_kind: BoundKind = BoundKind.CLOSED
    end_kind: BoundKind = BoundKind.CLOSED
    qualifiers: Optional[Qualifiers] = None

    def __post_init__(self):
        self._check_side("start", self.start_kind, self.s_min, self.s_max)
        self._check_side("end", self.end_kind, self.e_min, self.e_max)

    @staticmethod
    def _check_side(side: str, kind: BoundKind, low: Optional[int], high: Optional[int]):
        if kind is BoundKind.CLOSED:
            if low is None or high is None:
                raise MemberContractError(f"Closed {side} requires both bounds, got {low!r}, {high!r}")
            if low > high:
                raise MemberContractError(f"Inverted {side} bounds: {low} > {high}")
        elif low is not None or high is not None:
            raise MemberContractError(f"{kind.value.capitalize()} {side} cannot carry bounds")

    @property
    def is_closed(self) -> bool:
        return self.start_kind is BoundKind.CLOSED and self.end_kind is BoundKind.CLOSED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "s_min": self.s_min,
            "s_max": self.s_max,
            "e_min": self.e_min,
            "e_max": self.e_max,
            "start_kind": self.start_kind.value,
            "end_kind": self.end_kind.value,
            "precision": self.precision.value,
            "qualifiers": self.qualifiers.to_dict() if self.qualifiers else None,
        }


@dataclass(frozen=True)
class Shape:
    members: Tuple[Member, ...]
    list_mode: Optional[ListMode] = None

    def __iter__(self):
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "members": [member.to_dict() for member in self.members],
            "list_mode": self.list_mode.value if self.list_mode else None,
        }
