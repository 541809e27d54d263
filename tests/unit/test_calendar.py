"""Unit tests for calendar grid and local clock helpers."""

from datetime import UTC, date, datetime

import pytest

from carehub.core import calendar
from carehub.core.config import settings


@pytest.mark.unit
class TestGenerateCalendarDays:
    """Tests for generate_calendar_days function."""

    def test_october_2024_grid(self):
        """October 2024 starts on a Tuesday and ends on a Thursday."""
        cells = calendar.generate_calendar_days(2024, 10, date(2024, 10, 20))

        assert len(cells) == 35
        assert cells[0] == (date(2024, 9, 29), False, False)
        assert cells[1] == (date(2024, 9, 30), False, False)
        assert cells[2] == (date(2024, 10, 1), True, False)
        assert cells[-1] == (date(2024, 11, 2), False, False)

    def test_weeks_start_on_sunday(self):
        """Every row starts on a Sunday."""
        cells = calendar.generate_calendar_days(2025, 3, date(2025, 3, 1))

        assert len(cells) % 7 == 0
        for row_start in cells[::7]:
            assert row_start[0].weekday() == 6

    def test_month_starting_on_sunday_has_no_leading_days(self):
        """September 2024 begins on a Sunday."""
        cells = calendar.generate_calendar_days(2024, 9, date(2024, 1, 1))

        assert cells[0] == (date(2024, 9, 1), True, False)

    def test_exact_four_week_month(self):
        """February 2015 fills exactly four weeks."""
        cells = calendar.generate_calendar_days(2015, 2, date(2015, 2, 1))

        assert len(cells) == 28
        assert all(in_month for _, in_month, _ in cells)

    def test_only_one_today(self):
        """Exactly the current-month cell matching today is flagged."""
        cells = calendar.generate_calendar_days(2024, 10, date(2024, 10, 20))

        assert [day for day, _, is_today in cells if is_today] == [date(2024, 10, 20)]

    def test_today_outside_month_not_flagged(self):
        """A leading or trailing cell is never today."""
        cells = calendar.generate_calendar_days(2024, 10, date(2024, 9, 30))

        assert not any(is_today for _, _, is_today in cells)


@pytest.mark.unit
class TestLocalClock:
    """Tests for the configured timezone helpers."""

    def test_to_local_uses_configured_timezone(self, monkeypatch):
        """A late UTC instant falls on the previous day in New York."""
        monkeypatch.setattr(settings, "timezone", "America/New_York")

        local = calendar.to_local(datetime(2024, 10, 21, 2, 0, tzinfo=UTC))

        assert local.date() == date(2024, 10, 20)
        assert local.hour == 22

    def test_local_now_is_aware(self):
        """local_now carries the configured tzinfo."""
        assert calendar.local_now().tzinfo is not None

    def test_month_name(self):
        """English month names."""
        assert calendar.month_name(2) == "February"
