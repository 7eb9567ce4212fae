"""
Tests for proleptic Gregorian calendar arithmetic and the small range helpers
used by set expansion.
"""

import pytest
from datetime import datetime

from edtfparser.calendars import (
    DATETIME_MAX_MS,
    DATETIME_MIN_MS,
    EPOCH_SHIFT,
    MS_PER_DAY,
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
from edtfparser.utils import clamp, date_range, max_bound, min_bound, range_length


# =============================================================================
# Leap years and month lengths
# =============================================================================

class TestCalendar:
    """Tests for leap years and days per month."""

    @pytest.mark.parametrize("year,expected", [
        (2000, True),
        (1900, False),
        (2024, True),
        (2023, False),
        (0, True),
        (-4, True),
        (-100, False),
    ])
    def test_is_leap_year(self, year, expected):
        """Test the Gregorian leap rule, including year 0 and negative years."""
        assert is_leap_year(year) is expected

    def test_days_in_month(self):
        """Test February follows the leap rule."""
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2023, 4) == 30
        assert days_in_month(2023, 12) == 31

    def test_days_in_month_rejects_bad_month(self):
        """Test month 13 is a contract violation."""
        with pytest.raises(ValueError):
            days_in_month(2023, 13)

    def test_days_in_year(self):
        assert days_in_year(2000) == 366
        assert days_in_year(1999) == 365


# =============================================================================
# Day counts and epoch milliseconds
# =============================================================================

class TestEpoch:
    """Tests for days and milliseconds since 1970-01-01."""

    def test_epoch_is_zero(self):
        assert days_since_epoch(1970, 1, 1) == 0
        assert to_epoch_ms(1970) == 0

    def test_known_instants(self):
        """Test a couple of well known timestamps."""
        assert to_epoch_ms(2000, 1, 1) == 946684800000
        assert to_epoch_ms(1985) == 473385600000

    def test_year_zero_march_first(self):
        """Test the shift constant matches 0000-03-01."""
        assert days_since_epoch(0, 3, 1) == -EPOCH_SHIFT

    @pytest.mark.parametrize("days", [-EPOCH_SHIFT, -1, 0, 59, 11016, 2932896, -10 ** 12])
    def test_civil_from_days_inverts_days_since_epoch(self, days):
        """Test the two conversions are inverses, far outside datetime's range too."""
        assert days_since_epoch(*civil_from_days(days)) == days

    def test_invalid_day_raises(self):
        with pytest.raises(ValueError):
            days_since_epoch(2023, 2, 29)

    def test_invalid_time_raises(self):
        with pytest.raises(ValueError):
            to_epoch_ms(2023, 1, 1, hour=24)
        with pytest.raises(ValueError):
            to_epoch_ms(2023, 1, 1, millisecond=1000)

    def test_exact_for_huge_years(self):
        """Test bounds stay exact integers for exponential years."""
        start = start_of_period(-170000000)
        assert isinstance(start, int)
        assert start_of_period(-169999999) - start == days_in_year(-170000000) * MS_PER_DAY


# =============================================================================
# Periods
# =============================================================================

class TestPeriods:
    """Tests for the first and last millisecond of a unit."""

    def test_year(self):
        assert start_of_period(1985) == to_epoch_ms(1985)
        assert end_of_period(1985) == to_epoch_ms(1986) - 1

    def test_month(self):
        assert start_of_period(2024, 2) == to_epoch_ms(2024, 2, 1)
        assert end_of_period(2024, 2) == to_epoch_ms(2024, 3, 1) - 1

    def test_day(self):
        assert end_of_period(1985, 4, 12) - start_of_period(1985, 4, 12) == MS_PER_DAY - 1

    def test_end_of_1969(self):
        assert end_of_period(1969) == -1


# =============================================================================
# Eras and datetime conversion
# =============================================================================

class TestEras:
    """Tests for astronomical and historical year numbering."""

    @pytest.mark.parametrize("astronomical,historical", [
        (1985, (1985, "AD")),
        (1, (1, "AD")),
        (0, (1, "BC")),
        (-1, (2, "BC")),
    ])
    def test_astronomical_to_historical(self, astronomical, historical):
        assert astronomical_to_historical(astronomical) == historical

    def test_historical_to_astronomical(self):
        assert historical_to_astronomical(1, "BC") == 0
        assert historical_to_astronomical(44, "bce") == -43
        assert historical_to_astronomical(1985) == 1985

    def test_historical_rejects_year_zero(self):
        with pytest.raises(ValueError):
            historical_to_astronomical(0, "BC")


class TestDatetimeConversion:

    def test_in_range(self):
        assert epoch_ms_to_datetime(0) == datetime(1970, 1, 1)
        assert epoch_ms_to_datetime(DATETIME_MIN_MS) == datetime.min

    def test_out_of_range(self):
        """Test values datetime cannot hold come back as None."""
        assert epoch_ms_to_datetime(DATETIME_MIN_MS - 1) is None
        assert epoch_ms_to_datetime(DATETIME_MAX_MS + 1) is None


# =============================================================================
# Utilities
# =============================================================================

class TestUtils:
    """Tests for bound helpers and date ranges."""

    def test_min_max_bound_ignore_none(self):
        assert min_bound([None, 3, 1]) == 1
        assert max_bound([None, 3, 1]) == 3
        assert min_bound([None, None]) is None
        assert max_bound([]) is None

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-5, 0, 3) == 0
        assert clamp(2, 0, 3) == 2

    def test_date_range_years(self):
        assert list(date_range((1667,), (1669,), "year")) == [(1667,), (1668,), (1669,)]

    def test_date_range_months_cross_year(self):
        """Test month stepping rolls over December."""
        assert list(date_range((1985, 11), (1986, 2), "month")) == [
            (1985, 11), (1985, 12), (1986, 1), (1986, 2),
        ]

    def test_date_range_days_cross_month(self):
        assert list(date_range((2024, 2, 28), (2024, 3, 1), "day")) == [
            (2024, 2, 28), (2024, 2, 29), (2024, 3, 1),
        ]

    def test_date_range_invalid_unit(self):
        with pytest.raises(ValueError):
            list(date_range((1,), (2,), "week"))

    def test_range_length_matches_date_range(self):
        for begin, end, unit in (
            ((1667,), (1672,), "year"),
            ((1985, 11), (1987, 2), "month"),
            ((2023, 12, 25), (2024, 3, 1), "day"),
        ):
            assert range_length(begin, end, unit) == len(list(date_range(begin, end, unit)))
