"""Recurrence and urgency rules for maintenance scheduling.

Two pure functions drive every maintenance read and write:

- compute_next_due_date: advance a last-completed instant by one period.
- classify_status: bucket a due date relative to a given calendar day.

Month arithmetic uses dateutil's relativedelta, which clamps to the last
valid day of the target month (2024-01-31 + 1 month == 2024-02-29,
2024-02-29 + 1 year == 2025-02-28).
"""

import logging
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from carehub.core.config import constants
from carehub.domain.maintenance import (
    CompletedState,
    DerivedStatus,
    MaintenanceFrequency,
    MaintenanceStatus,
    TaskState,
)


logger = logging.getLogger(__name__)


_FREQUENCY_PERIODS: dict[MaintenanceFrequency, relativedelta] = {
    MaintenanceFrequency.WEEKLY: relativedelta(days=7),
    MaintenanceFrequency.MONTHLY: relativedelta(months=1),
    MaintenanceFrequency.QUARTERLY: relativedelta(months=3),
    MaintenanceFrequency.SEMI_ANNUALLY: relativedelta(months=6),
    MaintenanceFrequency.ANNUALLY: relativedelta(years=1),
}


def compute_next_due_date(last_completed: datetime, frequency: MaintenanceFrequency | str) -> datetime:
    """Return the instant one ``frequency`` period after ``last_completed``.

    Time of day and timezone are preserved. An unrecognized frequency returns
    ``last_completed`` unchanged.

    Args:
        last_completed: When the task was last performed
        frequency: Recurrence interval

    Returns:
        Next due instant
    """
    try:
        period = _FREQUENCY_PERIODS[MaintenanceFrequency(frequency)]
    except ValueError:
        logger.warning("Unknown maintenance frequency, due date left unchanged", extra={"frequency": str(frequency)})
        return last_completed

    return last_completed + period


def _as_calendar_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def classify_status(next_due_date: date | datetime, today: date | datetime) -> DerivedStatus:
    """Classify how urgent a task is on ``today``.

    Both arguments are reduced to calendar days before comparing, so time of
    day never matters. Callers pass aware datetimes already converted to the
    local timezone.

    Returns:
        OVERDUE if the due day has passed, DUE_TODAY on the due day,
        DUE_SOON within the next seven days, UPCOMING beyond that
    """
    days_diff = (_as_calendar_day(next_due_date) - _as_calendar_day(today)).days

    if days_diff < 0:
        return DerivedStatus.OVERDUE
    if days_diff == 0:
        return DerivedStatus.DUE_TODAY
    if days_diff <= constants.DUE_SOON_WINDOW_DAYS:
        return DerivedStatus.DUE_SOON
    return DerivedStatus.UPCOMING


def resolve_status(state: TaskState, next_due_date: date | datetime, today: date | datetime) -> MaintenanceStatus:
    """Status shown for a task: COMPLETED while the completion sticks, otherwise recomputed."""
    if isinstance(state, CompletedState):
        return MaintenanceStatus.COMPLETED
    return MaintenanceStatus(classify_status(next_due_date, today))
