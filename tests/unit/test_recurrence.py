"""Unit tests for the maintenance recurrence rules."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from carehub.core.recurrence import classify_status, compute_next_due_date, resolve_status
from carehub.domain.maintenance import (
    CompletedState,
    DerivedState,
    DerivedStatus,
    MaintenanceFrequency,
    MaintenanceStatus,
)


def _at(year: int, month: int, day: int, hour: int = 10) -> datetime:
    return datetime(year, month, day, hour, tzinfo=UTC)


@pytest.mark.unit
class TestComputeNextDueDate:
    """Tests for compute_next_due_date function."""

    @pytest.mark.parametrize("frequency", list(MaintenanceFrequency))
    def test_always_strictly_later(self, frequency):
        """Every frequency moves the due date forward."""
        for start in (_at(2024, 1, 31), _at(2024, 2, 29), _at(2023, 12, 31, 23), _at(2024, 6, 15, 0)):
            assert compute_next_due_date(start, frequency) > start

    def test_weekly_adds_seven_days(self):
        """Weekly adds exactly seven days."""
        assert compute_next_due_date(_at(2024, 12, 28), "weekly") == _at(2025, 1, 4)

    def test_monthly(self):
        """Monthly keeps the day of month."""
        assert compute_next_due_date(_at(2024, 1, 15), MaintenanceFrequency.MONTHLY) == _at(2024, 2, 15)

    def test_monthly_from_month_end_clamps_to_last_day(self):
        """Jan 31 plus one month lands on the last day of February."""
        assert compute_next_due_date(_at(2024, 1, 31), "monthly") == _at(2024, 2, 29)
        assert compute_next_due_date(_at(2023, 1, 31), "monthly") == _at(2023, 2, 28)

    def test_quarterly(self):
        """Quarterly adds three calendar months."""
        assert compute_next_due_date(_at(2024, 2, 1), "quarterly") == _at(2024, 5, 1)

    def test_semi_annually(self):
        """Semi-annually adds six calendar months."""
        assert compute_next_due_date(_at(2024, 3, 20), "semi-annually") == _at(2024, 9, 20)

    def test_annually(self):
        """Annually adds one calendar year."""
        assert compute_next_due_date(_at(2023, 1, 10), "annually") == _at(2024, 1, 10)

    def test_annually_from_leap_day_clamps(self):
        """Feb 29 plus one year lands on Feb 28."""
        assert compute_next_due_date(_at(2024, 2, 29), "annually") == _at(2025, 2, 28)

    def test_preserves_time_of_day_and_timezone(self):
        """The result keeps the input's clock time and tzinfo."""
        tz = ZoneInfo("America/New_York")
        start = datetime(2024, 3, 5, 8, 30, tzinfo=tz)

        result = compute_next_due_date(start, "weekly")

        assert result.tzinfo is tz
        assert (result.hour, result.minute) == (8, 30)
        assert result.date() == date(2024, 3, 12)

    def test_unknown_frequency_returns_input(self, caplog):
        """An unrecognized frequency leaves the date unchanged and warns."""
        start = _at(2024, 5, 1)

        assert compute_next_due_date(start, "fortnightly") == start
        assert "Unknown maintenance frequency" in caplog.text


@pytest.mark.unit
class TestClassifyStatus:
    """Tests for classify_status function."""

    TODAY = date(2024, 10, 20)

    def test_due_today(self):
        """Due on today's date."""
        assert classify_status(self.TODAY, self.TODAY) == DerivedStatus.DUE_TODAY

    def test_overdue_yesterday(self):
        """One day past due is overdue."""
        assert classify_status(self.TODAY - timedelta(days=1), self.TODAY) == DerivedStatus.OVERDUE

    def test_due_soon_tomorrow(self):
        """One day ahead is due soon."""
        assert classify_status(self.TODAY + timedelta(days=1), self.TODAY) == DerivedStatus.DUE_SOON

    def test_due_soon_at_seven_days(self):
        """The window includes the seventh day."""
        assert classify_status(self.TODAY + timedelta(days=7), self.TODAY) == DerivedStatus.DUE_SOON

    def test_upcoming_after_window(self):
        """Eight days ahead is upcoming."""
        assert classify_status(self.TODAY + timedelta(days=8), self.TODAY) == DerivedStatus.UPCOMING

    def test_ignores_time_of_day(self):
        """A due instant late today is still due today, one early today is not overdue."""
        assert classify_status(datetime(2024, 10, 20, 23, 59, tzinfo=UTC), self.TODAY) == DerivedStatus.DUE_TODAY
        assert classify_status(datetime(2024, 10, 20, 0, 1, tzinfo=UTC), self.TODAY) == DerivedStatus.DUE_TODAY

    def test_accepts_datetime_today(self):
        """``today`` may be given as an instant."""
        now = datetime(2024, 10, 20, 18, tzinfo=UTC)
        assert classify_status(datetime(2024, 10, 21, 1, tzinfo=UTC), now) == DerivedStatus.DUE_SOON

    def test_is_idempotent(self):
        """Same inputs, same answer."""
        due = self.TODAY + timedelta(days=3)
        assert classify_status(due, self.TODAY) == classify_status(due, self.TODAY)


@pytest.mark.unit
class TestResolveStatus:
    """Tests for resolve_status function."""

    TODAY = date(2024, 10, 20)

    def test_completed_state_sticks(self):
        """A completed task reports COMPLETED whatever its due date."""
        state = CompletedState(completed_at=_at(2024, 10, 20))

        assert resolve_status(state, self.TODAY - timedelta(days=30), self.TODAY) == MaintenanceStatus.COMPLETED

    def test_derived_state_is_classified(self):
        """A derived task reports its urgency."""
        assert resolve_status(DerivedState(), self.TODAY, self.TODAY) == MaintenanceStatus.DUE_TODAY
        assert resolve_status(DerivedState(), date(2025, 1, 1), self.TODAY) == MaintenanceStatus.UPCOMING
