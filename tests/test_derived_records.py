import asyncio
import datetime as dt
import logging
from decimal import Decimal

import pytest

from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.enums import BudgetCategory, Priority, RepeatType, SourceType
from dashboard.services.derived_records import (
    DerivedRecordDraft,
    DerivedRecordError,
    create_notification,
    derive_priority,
    publish_derived_records,
    retract_derived_records,
)

USER = "user-1"


def _draft(source_id: str = "tpl-1", title: str = "Rent", month_key: str = "2024-06") -> DerivedRecordDraft:
    return DerivedRecordDraft(
        title=title,
        date=dt.date(2024, 6, 5),
        priority=Priority.MEDIUM,
        repeat_type=RepeatType.MONTHLY,
        source_type=SourceType.BUDGET,
        source_id=source_id,
        month_key=month_key,
        event_title=f"{title} - Monthly rent",
    )


def _add_template(store, template_id: str = "tpl-1") -> None:
    store.templates[template_id] = BudgetTemplate(
        id=template_id,
        user_id=USER,
        source="Rent",
        category=BudgetCategory.EXPENSE,
        purpose="Monthly rent",
        due_day=5,
        amount=Decimal("900"),
    )


@pytest.mark.parametrize(
    ("category", "amount", "expected"),
    [
        (BudgetCategory.INCOME, Decimal("10"), Priority.HIGH),
        (BudgetCategory.EXPENSE, Decimal("1000.01"), Priority.HIGH),
        (BudgetCategory.EXPENSE, Decimal("1000"), Priority.MEDIUM),
        (BudgetCategory.EXPENSE, None, Priority.MEDIUM),
        (BudgetCategory.SAVINGS, Decimal("50000"), Priority.LOW),
    ],
)
def test_derive_priority(category: BudgetCategory, amount: Decimal | None, expected: Priority) -> None:
    assert derive_priority(category, amount) == expected


def test_publish_creates_notification_and_event(store) -> None:
    _add_template(store)

    assert asyncio.run(publish_derived_records(store, USER, _draft())) is True

    assert store.notifications[0].title == "Rent"
    assert store.notifications[0].due_date == dt.date(2024, 6, 5)
    assert store.notifications[0].category == SourceType.BUDGET
    assert store.events[0].title == "Rent - Monthly rent"
    assert store.notifications[0].id != store.events[0].id


def test_missing_source_is_rejected(store) -> None:
    with pytest.raises(DerivedRecordError, match="does not exist"):
        asyncio.run(create_notification(store, USER, _draft(source_id="ghost")))


def test_publish_swallows_missing_source(store, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert asyncio.run(publish_derived_records(store, USER, _draft(source_id="ghost"))) is False

    assert store.notifications == []
    assert "ghost" in caplog.text


def test_publish_swallows_invalid_payload(store) -> None:
    _add_template(store)

    assert asyncio.run(publish_derived_records(store, USER, _draft(title=""))) is False
    assert store.notifications == []


def test_publish_swallows_storage_failure(store) -> None:
    _add_template(store)
    store.fail_events = True

    assert asyncio.run(publish_derived_records(store, USER, _draft())) is False
    assert len(store.notifications) == 1
    assert store.events == []


def test_retract_by_month_and_everywhere(store) -> None:
    _add_template(store)
    for month_key in ("2024-06", "2024-07", "2024-08"):
        asyncio.run(publish_derived_records(store, USER, _draft(month_key=month_key)))

    assert asyncio.run(retract_derived_records(store, USER, SourceType.BUDGET, "tpl-1", "2024-07")) == (1, 1)
    assert sorted(item.month_key for item in store.notifications) == ["2024-06", "2024-08"]

    assert asyncio.run(retract_derived_records(store, USER, SourceType.BUDGET, "tpl-1")) == (2, 2)
    assert store.notifications == []
    assert store.events == []
