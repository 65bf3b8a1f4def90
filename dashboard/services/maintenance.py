"""One-off repair jobs over the month-bucket store."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.enums import DateType, WeekendRule
from dashboard.schemas.budget import TemplateRead
from dashboard.services.recurrence import instance_from_template
from dashboard.services.store import DashboardStore, Document

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MigrationResult:
    month_key: str
    templates_created: int
    templates_skipped: int
    instances_added: int


@dataclass(slots=True)
class StoreReport:
    templates: int
    months: int
    instances: int
    orphaned_instances: int


def _orphan_filter(valid_ids: set[str]):
    def keep(item: Document) -> bool:
        template_id = item.get("templateId")
        return not template_id or template_id in valid_ids

    return keep


async def cleanup_orphaned_instances(store: DashboardStore, user_id: str) -> dict[str, int]:
    templates = await store.list_templates(user_id)
    valid_ids = {template.id for template in templates}
    logger.info("Found %d valid templates for %s", len(valid_ids), user_id)

    removed = await store.prune_buckets(user_id, _orphan_filter(valid_ids))
    for month_key, count in removed.items():
        logger.info("Removed %d orphaned instances from %s", count, month_key)
    if not removed:
        logger.info("No orphaned instances found for %s", user_id)
    return removed


def _template_from_legacy(user_id: str, row: Any) -> BudgetTemplate:
    return BudgetTemplate(
        id=row.id,
        user_id=user_id,
        source=row.source,
        category=row.category,
        purpose=row.purpose,
        due_day=int(row.due_day),
        date_type=DateType.FIXED,
        dynamic_rule=WeekendRule.NEXT,
        amount=row.amount,
        expected_amount=row.expected_amount or Decimal("0"),
        target=row.target,
        current_amount=row.current_amount,
        stepup_date=row.stepup_date,
        stepup_amount=row.stepup_amount,
    )


async def migrate_legacy_transactions(
    store: DashboardStore,
    user_id: str,
    legacy_rows: Iterable[Any],
    month_key: str,
) -> MigrationResult:
    """Turn flat legacy transactions into templates plus instances in one month.

    Templates keep the legacy id. Rows whose template already exists are
    skipped, and instances already in the bucket are not added twice, so the
    job can be re-run safely.
    """
    created = 0
    skipped = 0
    instances: list[Document] = []

    for row in legacy_rows:
        template = await store.get_template(user_id, row.id)
        if template is None:
            template = await store.add_template(_template_from_legacy(user_id, row))
            created += 1
        else:
            skipped += 1
        instances.append(instance_from_template(TemplateRead.model_validate(template), month_key).to_document())

    added: list[str] = []

    def mutate(transactions: list[Document] | None) -> list[Document]:
        added.clear()
        current = list(transactions or [])
        present = {item.get("id") for item in current}
        for instance in instances:
            if instance["id"] not in present:
                current.append(instance)
                added.append(instance["id"])
        return current

    if instances:
        await store.update_bucket(user_id, month_key, mutate)

    logger.info(
        "Migrated legacy transactions into %s: %d templates created, %d skipped, %d instances added",
        month_key,
        created,
        skipped,
        len(added),
    )
    return MigrationResult(
        month_key=month_key,
        templates_created=created,
        templates_skipped=skipped,
        instances_added=len(added),
    )


async def describe_store(store: DashboardStore, user_id: str) -> StoreReport:
    templates = await store.list_templates(user_id)
    buckets = await store.list_buckets(user_id)
    keep = _orphan_filter({template.id for template in templates})

    instances = sum(len(items) for items in buckets.values())
    orphaned = sum(1 for items in buckets.values() for item in items if not keep(item))
    return StoreReport(
        templates=len(templates),
        months=len(buckets),
        instances=instances,
        orphaned_instances=orphaned,
    )
