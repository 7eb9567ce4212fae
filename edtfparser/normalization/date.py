from edtfparser.calendars import MS_PER_MINUTE, MS_PER_SECOND, to_epoch_ms
from edtfparser.member import Member, Qualifiers
from edtfparser.normalization.bounds import date_bounds
from edtfparser.types import Date, DateTime, Precision


def normalize_date(date: Date) -> Member:
    """
    Bounds of a calendar date, widened over any unspecified digits.

    Whole-value and per-component qualifications all fold into the member's
    qualifiers.
    """
    s_min, s_max, e_min, e_max = date_bounds(date.year, date.month, date.day)

    if date.day is not None:
        precision = Precision.DAY
    elif date.month is not None:
        precision = Precision.MONTH
    else:
        precision = Precision.YEAR

    return Member(
        s_min=s_min,
        s_max=s_max,
        e_min=e_min,
        e_max=e_max,
        precision=precision,
        qualifiers=Qualifiers.from_qualifications(
            date.qualification, *date.component_qualifications
        ),
    )


def normalize_date_time(value: DateTime) -> Member:
    """
    Bounds of a date-time: the exact second when seconds are given, else the
    whole minute. The precision tag is always ``minute``; the UTC offset is
    carried on the node only and does not shift the bounds.
    """
    start = to_epoch_ms(
        value.year, value.month, value.day, value.hour, value.minute, value.second or 0
    )
    span = MS_PER_SECOND if value.second is not None else MS_PER_MINUTE
    end = start + span - 1
    return Member(
        s_min=start,
        s_max=start,
        e_min=end,
        e_max=end,
        precision=Precision.MINUTE,
    )
