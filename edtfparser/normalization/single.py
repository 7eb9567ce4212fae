from typing import Dict, Optional, Tuple

from edtfparser.member import Member
from edtfparser.normalization.date import normalize_date, normalize_date_time
from edtfparser.normalization.season import normalize_season
from edtfparser.types import EDTFType


class NormalizationError(ValueError):
    """A node that cannot be normalized in the position it appears."""


def normalize_single(node, mappings: Optional[Dict[int, Tuple[int, int]]] = None) -> Member:
    """Normalize a Date, DateTime or Season; anything else is a contract violation."""
    node_type = getattr(node, "type", None)
    if node_type is EDTFType.DATE:
        return normalize_date(node)
    if node_type is EDTFType.DATE_TIME:
        return normalize_date_time(node)
    if node_type is EDTFType.SEASON:
        return normalize_season(node, mappings)
    raise NormalizationError(
        f"Expected a Date, DateTime or Season, got {type(node).__name__}"
    )
