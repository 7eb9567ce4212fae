from edtfparser.calendars.gregorian import (
    DATETIME_MAX_MS,
    DATETIME_MIN_MS,
    DAYS_PER_ERA,
    EPOCH_SHIFT,
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    astronomical_to_historical,
    civil_from_days,
    days_in_month,
    days_in_year,
    days_since_epoch,
    end_of_period,
    epoch_ms_to_datetime,
    historical_to_astronomical,
    is_leap_year,
    start_of_period,
    to_epoch_ms,
)
