import asyncio
from decimal import Decimal
from types import SimpleNamespace

from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.enums import BudgetCategory
from dashboard.services.maintenance import (
    cleanup_orphaned_instances,
    describe_store,
    migrate_legacy_transactions,
)

USER = "user-1"


def _template(template_id: str) -> BudgetTemplate:
    return BudgetTemplate(
        id=template_id,
        user_id=USER,
        source="Rent",
        category=BudgetCategory.EXPENSE,
        purpose="Monthly rent",
        due_day=5,
        amount=Decimal("900"),
    )


def _legacy_row(row_id: str) -> SimpleNamespace:
    return SimpleNamespace(
        id=row_id,
        source="Utilities",
        category=BudgetCategory.EXPENSE,
        purpose="Electricity, water, internet",
        due_day=10,
        amount=Decimal("3500"),
        expected_amount=None,
        target=None,
        current_amount=None,
        stepup_date=None,
        stepup_amount=None,
    )


def test_cleanup_removes_only_orphaned_instances(store) -> None:
    store.templates["live"] = _template("live")
    store.buckets[(USER, "2024-01")] = [
        {"id": "live-2024-01", "templateId": "live"},
        {"id": "gone-2024-01", "templateId": "gone"},
        {"id": "custom-1", "templateId": None},
    ]
    store.buckets[(USER, "2024-02")] = [{"id": "live-2024-02", "templateId": "live"}]

    removed = asyncio.run(cleanup_orphaned_instances(store, USER))

    assert removed == {"2024-01": 1}
    assert [item["id"] for item in store.buckets[(USER, "2024-01")]] == ["live-2024-01", "custom-1"]


def test_migrate_legacy_is_idempotent(store) -> None:
    rows = [_legacy_row("legacy-1"), _legacy_row("legacy-2")]

    first = asyncio.run(migrate_legacy_transactions(store, USER, rows, "2024-03"))
    second = asyncio.run(migrate_legacy_transactions(store, USER, rows, "2024-03"))

    assert (first.templates_created, first.instances_added) == (2, 2)
    assert (second.templates_created, second.templates_skipped, second.instances_added) == (0, 2, 0)
    assert store.templates["legacy-1"].expected_amount == Decimal("0")
    assert [item["id"] for item in store.buckets[(USER, "2024-03")]] == [
        "legacy-1-2024-03",
        "legacy-2-2024-03",
    ]


def test_describe_store_counts_orphans(store) -> None:
    store.templates["live"] = _template("live")
    store.buckets[(USER, "2024-01")] = [
        {"id": "live-2024-01", "templateId": "live"},
        {"id": "gone-2024-01", "templateId": "gone"},
    ]
    store.buckets[("someone-else", "2024-01")] = [{"id": "x", "templateId": "gone"}]

    report = asyncio.run(describe_store(store, USER))

    assert (report.templates, report.months, report.instances, report.orphaned_instances) == (1, 1, 2, 1)
