from typing import Dict, Optional, Tuple

from edtfparser.calendars import end_of_period, start_of_period
from edtfparser.member import Member, Qualifiers
from edtfparser.seasons import DEFAULT_SEASON_MAPPINGS
from edtfparser.types import Precision, Season


def normalize_season(season: Season,
                     mappings: Optional[Dict[int, Tuple[int, int]]] = None) -> Member:
    """
    Bounds of a season from its ``(start_month, end_month)`` mapping.

    A span such as December-February ends in the following year.
    """
    mappings = mappings if mappings is not None else DEFAULT_SEASON_MAPPINGS
    try:
        start_month, end_month = mappings[season.season]
    except KeyError:
        raise ValueError(f"No month mapping for season code {season.season}")

    end_year = season.year + 1 if end_month < start_month else season.year
    start = start_of_period(season.year, start_month)
    end = end_of_period(end_year, end_month)
    return Member(
        s_min=start,
        s_max=start,
        e_min=end,
        e_max=end,
        precision=Precision.SUBYEAR,
        qualifiers=Qualifiers.from_qualifications(season.qualification),
    )
