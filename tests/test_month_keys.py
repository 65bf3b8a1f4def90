import datetime as dt

import pytest

from dashboard.services.month import (
    current_month_key,
    is_current_month,
    is_future_month,
    is_past_month,
    month_keys_from,
    next_month_key,
    parse_month_key,
    previous_month_key,
    resolve_month_window,
)


def test_parse_month_key() -> None:
    assert parse_month_key("2024-06") == (2024, 6)


@pytest.mark.parametrize("value", ["2024-6", "2024-13", "June 2024", "2024/06", ""])
def test_parse_month_key_rejects_malformed_keys(value: str) -> None:
    with pytest.raises(ValueError, match="YYYY-MM"):
        parse_month_key(value)


def test_month_arithmetic_rolls_over_year() -> None:
    assert next_month_key("2024-12") == "2025-01"
    assert previous_month_key("2025-01") == "2024-12"


def test_month_keys_from_spans_thirteen_months() -> None:
    keys = month_keys_from("2024-06", 13)

    assert len(keys) == 13
    assert keys[0] == "2024-06"
    assert keys[-1] == "2025-06"
    assert keys == sorted(keys)


def test_month_position_relative_to_today() -> None:
    today = dt.date(2024, 6, 15)

    assert current_month_key(today) == "2024-06"
    assert is_current_month("2024-06", today)
    assert is_future_month("2024-07", today)
    assert is_past_month("2023-12", today)


def test_resolve_month_window() -> None:
    start, end, key = resolve_month_window("2024-12")

    assert start == dt.date(2024, 12, 1)
    assert end == dt.date(2025, 1, 1)
    assert key == "2024-12"
