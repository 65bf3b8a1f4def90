import asyncio
import datetime as dt
from decimal import Decimal

import pytest

from dashboard.errors import NotFound
from dashboard.models.enums import BudgetCategory, DateType, Priority, RepeatType, SourceType
from dashboard.schemas.budget import MonthTransactionCreate, MonthTransactionUpdate, TemplateCreate
from dashboard.services.recurrence import (
    create_month_transaction,
    create_template,
    delete_month_transaction,
    delete_template_from_month,
    get_month_transactions,
    update_month_transaction,
)

USER = "user-1"


def _payload(**overrides) -> TemplateCreate:
    values = {
        "source": "House Rent",
        "category": BudgetCategory.EXPENSE,
        "purpose": "Monthly rent payment",
        "due_day": 5,
        "amount": Decimal("1500"),
    }
    values.update(overrides)
    return TemplateCreate(**values)


def _month_ids(store, month_key: str) -> list[str]:
    return [item["id"] for item in store.buckets.get((USER, month_key), [])]


def test_template_fans_out_to_thirteen_months(store) -> None:
    template = asyncio.run(create_template(store, USER, _payload(start_month="2024-06")))

    month_keys = sorted(key for owner, key in store.buckets if owner == USER)
    assert len(month_keys) == 13
    assert month_keys[0] == "2024-06"
    assert month_keys[-1] == "2025-06"
    for month_key in month_keys:
        assert _month_ids(store, month_key) == [f"{template.id}-{month_key}"]

    assert len(store.notifications) == 13
    assert len(store.events) == 13
    assert {item.month_key for item in store.notifications} == set(month_keys)
    assert {item.month_key for item in store.events} == set(month_keys)
    assert all(item.repeat_type == RepeatType.MONTHLY for item in store.notifications)
    assert all(item.source_id == template.id for item in store.events)


def test_fan_out_resolves_due_dates_and_priority(store) -> None:
    asyncio.run(create_template(store, USER, _payload(due_day=31, start_month="2025-01"), fanout_months=2))

    by_month = {item.month_key: item for item in store.notifications}
    assert by_month["2025-01"].due_date == dt.date(2025, 1, 31)
    assert by_month["2025-02"].due_date == dt.date(2025, 3, 3)
    assert all(item.priority == Priority.HIGH for item in store.notifications)
    assert all(item.category == SourceType.BUDGET for item in store.notifications)


def test_dynamic_template_moves_weekend_due_dates(store) -> None:
    payload = _payload(due_day=1, date_type=DateType.DYNAMIC, start_month="2024-06")
    asyncio.run(create_template(store, USER, payload, fanout_months=1))

    assert store.events[0].date == dt.date(2024, 6, 3)
    assert store.events[0].title == "House Rent - Monthly rent payment"
    assert store.events[0].description == "Category: Expense, Amount: 1500"


def test_fan_out_into_missing_month_keeps_existing_templates(store) -> None:
    first = asyncio.run(create_template(store, USER, _payload(start_month="2024-01"), fanout_months=1))
    salary = _payload(source="Salary", category=BudgetCategory.INCOME, start_month="2024-02")
    second = asyncio.run(create_template(store, USER, salary, fanout_months=1))

    assert _month_ids(store, "2024-02") == [f"{first.id}-2024-02", f"{second.id}-2024-02"]


def test_lazy_initialization_snapshots_templates_once(store) -> None:
    template = asyncio.run(create_template(store, USER, _payload(start_month="2024-01"), fanout_months=1))

    first = asyncio.run(get_month_transactions(store, USER, "2024-09"))
    second = asyncio.run(get_month_transactions(store, USER, "2024-09"))

    assert [item.id for item in first] == [f"{template.id}-2024-09"]
    assert [item.model_dump() for item in second] == [item.model_dump() for item in first]
    assert first[0].template_id == template.id
    assert first[0].is_customized is False


def test_lazy_initialization_with_no_templates_persists_empty_month(store) -> None:
    assert asyncio.run(get_month_transactions(store, USER, "2024-07")) == []
    assert asyncio.run(get_month_transactions(store, USER, "2024-07")) == []
    assert store.buckets[(USER, "2024-07")] == []


def test_month_only_delete_touches_one_month(store) -> None:
    template = asyncio.run(create_template(store, USER, _payload(start_month="2024-01"), fanout_months=3))

    asyncio.run(delete_month_transaction(store, USER, "2024-02", f"{template.id}-2024-02"))

    assert _month_ids(store, "2024-01") == [f"{template.id}-2024-01"]
    assert _month_ids(store, "2024-02") == []
    assert _month_ids(store, "2024-03") == [f"{template.id}-2024-03"]
    assert template.id in store.templates
    assert sorted(item.month_key for item in store.notifications) == ["2024-01", "2024-03"]
    assert sorted(item.month_key for item in store.events) == ["2024-01", "2024-03"]


def test_month_only_delete_reports_missing_month_and_instance(store) -> None:
    with pytest.raises(NotFound) as missing_month:
        asyncio.run(delete_month_transaction(store, USER, "2030-01", "anything"))
    assert missing_month.value.error == "Month not found"
    assert missing_month.value.details == "No budget data found for month: 2030-01"

    asyncio.run(get_month_transactions(store, USER, "2030-01"))
    with pytest.raises(NotFound) as missing_instance:
        asyncio.run(delete_month_transaction(store, USER, "2030-01", "anything"))
    assert missing_instance.value.details == "No transaction found with ID: anything"


def test_delete_from_month_onward_keeps_earlier_months(store) -> None:
    template = asyncio.run(create_template(store, USER, _payload(start_month="2024-01"), fanout_months=4))

    deletion = asyncio.run(delete_template_from_month(store, USER, template.id, "2024-03"))

    assert deletion.template_deleted is True
    assert deletion.instances_removed == 2
    assert deletion.message == "Template and 2 future instances deleted successfully"
    assert template.id not in store.templates
    assert _month_ids(store, "2024-01") == [f"{template.id}-2024-01"]
    assert _month_ids(store, "2024-02") == [f"{template.id}-2024-02"]
    assert _month_ids(store, "2024-03") == []
    assert _month_ids(store, "2024-04") == []
    assert store.notifications == []
    assert store.events == []


def test_delete_from_month_cleans_orphans_when_template_is_gone(store) -> None:
    template = asyncio.run(create_template(store, USER, _payload(start_month="2024-01"), fanout_months=2))
    store.templates.pop(template.id)

    deletion = asyncio.run(delete_template_from_month(store, USER, template.id, "2024-01"))

    assert deletion.template_deleted is False
    assert deletion.instances_removed == 2
    assert deletion.message == "2 orphaned transaction instances removed successfully (template was already deleted)"


def test_month_edit_customizes_only_that_month(store) -> None:
    template = asyncio.run(create_template(store, USER, _payload(start_month="2024-01"), fanout_months=2))
    instance_id = f"{template.id}-2024-01"

    updated = asyncio.run(
        update_month_transaction(store, USER, "2024-01", instance_id, MonthTransactionUpdate(amount=Decimal("500")))
    )

    assert updated.is_customized is True
    assert updated.amount == Decimal("500")
    assert store.buckets[(USER, "2024-02")][0]["amount"] == 1500
    assert store.buckets[(USER, "2024-02")][0]["isCustomized"] is False

    january = [item for item in store.notifications if item.month_key == "2024-01"]
    assert len(january) == 1
    assert january[0].priority == Priority.MEDIUM
    assert len(store.notifications) == 2


def test_one_off_transaction_lives_in_one_month(store) -> None:
    payload = MonthTransactionCreate(
        source="Birthday gift",
        category=BudgetCategory.EXPENSE,
        purpose="Present",
        due_day=12,
        amount=Decimal("80"),
    )

    instance = asyncio.run(create_month_transaction(store, USER, "2024-05", payload))

    assert instance.id.startswith("custom-")
    assert instance.template_id is None
    assert instance.is_customized is True
    assert _month_ids(store, "2024-05") == [instance.id]
    assert store.notifications[0].source_id == instance.id
    assert store.notifications[0].repeat_type == RepeatType.NONE

    asyncio.run(delete_month_transaction(store, USER, "2024-05", instance.id))

    assert _month_ids(store, "2024-05") == []
    assert store.notifications == []
    assert store.events == []


def test_dynamic_rent_on_a_weekday_keeps_its_date(store) -> None:
    payload = _payload(
        source="Rent",
        due_day=5,
        date_type=DateType.DYNAMIC,
        amount=Decimal("1000"),
        start_month="2024-06",
    )

    asyncio.run(create_template(store, USER, payload, fanout_months=1))

    assert store.notifications[0].due_date == dt.date(2024, 6, 5)
    assert store.notifications[0].priority == Priority.MEDIUM
