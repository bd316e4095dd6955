"""Tests for whole years / months of service."""

from datetime import date

import pytest

from hr_kernel.domain.tenure import TenureMethod, tenure_months, tenure_years


class TestTenureYears:

    def test_anniversary_reached(self):
        assert tenure_years(date(2020, 6, 15), date(2024, 6, 15)) == 4

    def test_day_before_anniversary(self):
        assert tenure_years(date(2020, 6, 15), date(2024, 6, 14)) == 3

    def test_calendar_counts_year_boundaries(self):
        hired, as_of = date(2023, 12, 31), date(2024, 1, 1)

        assert tenure_years(hired, as_of, TenureMethod.ELAPSED) == 0
        assert tenure_years(hired, as_of, TenureMethod.CALENDAR) == 1

    def test_leap_day_hire(self):
        assert tenure_years(date(2020, 2, 29), date(2021, 2, 28)) == 0
        assert tenure_years(date(2020, 2, 29), date(2021, 3, 1)) == 1

    @pytest.mark.parametrize("method", list(TenureMethod))
    def test_future_hire_is_zero(self, method):
        assert tenure_years(date(2025, 1, 1), date(2024, 6, 15), method) == 0


class TestTenureMonths:

    def test_elapsed_months(self):
        assert tenure_months(date(2023, 6, 15), date(2024, 6, 14)) == 11
        assert tenure_months(date(2023, 6, 15), date(2024, 6, 15)) == 12

    def test_calendar_months(self):
        assert tenure_months(date(2023, 6, 15), date(2024, 6, 14), TenureMethod.CALENDAR) == 12
        assert tenure_months(date(2024, 1, 31), date(2024, 2, 1), TenureMethod.CALENDAR) == 1

    @pytest.mark.parametrize("method", list(TenureMethod))
    def test_future_hire_is_zero(self, method):
        assert tenure_months(date(2025, 1, 1), date(2024, 6, 15), method) == 0
