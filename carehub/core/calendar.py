"""Local clock and month calendar grid helpers."""

import calendar
from datetime import date, datetime, timedelta

from carehub.core.config import constants, settings


def month_name(month: int) -> str:
    """English month name, e.g. 'October'."""
    return calendar.month_name[month]


def local_now() -> datetime:
    """Current instant in the configured timezone."""
    return datetime.now(settings.tzinfo)


def local_today() -> date:
    """Current calendar day in the configured timezone."""
    return local_now().date()


def to_local(value: datetime) -> datetime:
    """Convert an aware instant to the configured timezone."""
    return value.astimezone(settings.tzinfo)


def generate_calendar_days(year: int, month: int, today: date) -> list[tuple[date, bool, bool]]:
    """Build the cells of a month view with Sunday-first weeks.

    Leading cells come from the previous month and trailing cells from the
    next month so that the grid is made of whole weeks.

    Returns:
        List of (day, is_current_month, is_today). Days outside the month
        are never flagged as today.
    """
    first_day = date(year, month, 1)
    days_in_month = calendar.monthrange(year, month)[1]

    # date.weekday(): Monday == 0; shift so Sunday starts the week
    leading = (first_day.weekday() + 1) % constants.DAYS_PER_WEEK

    cells = [(first_day - timedelta(days=offset), False, False) for offset in range(leading, 0, -1)]

    for day_number in range(1, days_in_month + 1):
        day = date(year, month, day_number)
        cells.append((day, True, day == today))

    remaining = constants.DAYS_PER_WEEK - (len(cells) % constants.DAYS_PER_WEEK)
    if remaining < constants.DAYS_PER_WEEK:
        last_day = date(year, month, days_in_month)
        cells.extend((last_day + timedelta(days=offset), False, False) for offset in range(1, remaining + 1))

    return cells
