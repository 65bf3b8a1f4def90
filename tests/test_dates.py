import datetime as dt

from dashboard.models.enums import DateType, WeekendRule
from dashboard.services.dates import (
    format_due_date,
    is_weekend,
    naive_due_date,
    next_working_day,
    previous_working_day,
    resolve_due_date,
)


def test_fixed_date_is_never_shifted() -> None:
    # 1 June 2024 is a Saturday
    assert resolve_due_date(1, 2024, 6, DateType.FIXED, WeekendRule.NEXT) == dt.date(2024, 6, 1)
    assert resolve_due_date(1, 2024, 6, DateType.FIXED, WeekendRule.PREVIOUS) == dt.date(2024, 6, 1)


def test_dynamic_weekend_moves_to_next_working_day() -> None:
    assert resolve_due_date(1, 2024, 6, DateType.DYNAMIC, WeekendRule.NEXT) == dt.date(2024, 6, 3)
    assert resolve_due_date(2, 2024, 6, DateType.DYNAMIC, WeekendRule.NEXT) == dt.date(2024, 6, 3)


def test_dynamic_weekend_moves_to_previous_working_day() -> None:
    assert resolve_due_date(1, 2024, 6, DateType.DYNAMIC, WeekendRule.PREVIOUS) == dt.date(2024, 5, 31)
    assert resolve_due_date(2, 2024, 6, DateType.DYNAMIC, WeekendRule.PREVIOUS) == dt.date(2024, 5, 31)


def test_dynamic_weekday_is_unchanged() -> None:
    assert resolve_due_date(5, 2024, 6, DateType.DYNAMIC, WeekendRule.NEXT) == dt.date(2024, 6, 5)


def test_day_past_month_end_rolls_into_next_month() -> None:
    assert naive_due_date(31, 2025, 2) == dt.date(2025, 3, 3)
    assert resolve_due_date(31, 2024, 2) == dt.date(2024, 3, 2)
    assert resolve_due_date(31, 2024, 2, DateType.DYNAMIC, WeekendRule.NEXT) == dt.date(2024, 3, 4)


def test_resolved_dynamic_dates_are_working_days() -> None:
    for day in range(1, 32):
        for rule in WeekendRule:
            resolved = resolve_due_date(day, 2024, 9, DateType.DYNAMIC, rule)
            assert not is_weekend(resolved)


def test_working_day_helpers_leave_weekdays_alone() -> None:
    wednesday = dt.date(2024, 6, 5)

    assert next_working_day(wednesday) == wednesday
    assert previous_working_day(wednesday) == wednesday


def test_format_due_date() -> None:
    assert format_due_date(dt.date(2024, 6, 3)) == "Monday, Jun 3, 2024"
