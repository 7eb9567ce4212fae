__version__ = "1.0.0"

from .conf import apply_settings, Settings, SettingValidationError
from .parser import parse, is_valid
from .parser.detection import detect_level

# Re-export AST types for convenience
from .types import (
    EDTFNode,
    # Node types
    Date, DateTime, Interval, Season, Set, List,
    # Parse results
    ParseResult, ParseError, ErrorPosition, ErrorCode,
    # Metadata
    Qualification, UnspecifiedDigits,
    # Enums
    EDTFType, Precision,
)
from .type_guards import is_date, is_date_time, is_interval, is_season, is_set, is_list

# =============================================================================
# Comparison Exports
# =============================================================================

from .member import Member, Shape, BoundKind, ListMode, Qualifiers, MemberContractError
from .normalization import (
    normalize,
    normalize_to_members,
    normalize_to_convex_hull,
    NormalizationError,
)
from .relations.truth import Truth, Quantifier
from .relations.evaluator import (
    evaluate,
    evaluate_relation,
    is_before,
    is_after,
    meets,
    met_by,
    overlaps,
    overlapped_by,
    starts,
    started_by,
    during,
    contains,
    finishes,
    finished_by,
    equals,
    intersects,
    disjoint,
    touches,
    during_or_equal,
    contains_or_equal,
)
from .database import prepare_for_database, DbColumns
