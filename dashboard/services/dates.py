"""Due-date resolution for budget items.

A due day is stored as a bare day of month. Resolving it against a concrete
month either keeps the calendar date as is (``fixed``) or moves it off the
weekend (``dynamic``) towards the next or previous working day.
"""

import datetime as dt

from dashboard.models.enums import DateType, WeekendRule

SATURDAY = 5
SUNDAY = 6


def is_weekend(date: dt.date) -> bool:
    return date.weekday() in (SATURDAY, SUNDAY)


def next_working_day(date: dt.date) -> dt.date:
    if date.weekday() == SATURDAY:
        return date + dt.timedelta(days=2)
    if date.weekday() == SUNDAY:
        return date + dt.timedelta(days=1)
    return date


def previous_working_day(date: dt.date) -> dt.date:
    if date.weekday() == SATURDAY:
        return date - dt.timedelta(days=1)
    if date.weekday() == SUNDAY:
        return date - dt.timedelta(days=2)
    return date


def naive_due_date(day: int, year: int, month: int) -> dt.date:
    """Day ``day`` of the month, counted from the 1st.

    Days past the end of the month roll into the next one, so day 31 of
    February 2025 is 3 March 2025.
    """
    return dt.date(year, month, 1) + dt.timedelta(days=day - 1)


def resolve_due_date(
    day: int,
    year: int,
    month: int,
    date_type: DateType = DateType.FIXED,
    rule: WeekendRule = WeekendRule.NEXT,
) -> dt.date:
    date = naive_due_date(day, year, month)

    if date_type == DateType.FIXED or not is_weekend(date):
        return date

    if rule == WeekendRule.PREVIOUS:
        return previous_working_day(date)
    return next_working_day(date)


def format_due_date(date: dt.date) -> str:
    return f"{date:%A}, {date:%b} {date.day}, {date.year}"
