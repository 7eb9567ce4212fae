from edtfparser.relations.truth import (
    Quantifier,
    Truth,
    and_,
    combine_with_all,
    combine_with_any,
    negate,
    or_,
)
from edtfparser.relations.allen import ALLEN_RELATIONS
from edtfparser.relations.derived import DERIVED_RELATIONS
from edtfparser.relations.evaluator import (
    RELATIONS,
    evaluate,
    evaluate_relation,
    is_after,
    is_before,
)
