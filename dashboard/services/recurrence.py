"""Recurring budget templates and their per-month instances.

A template is copied into month buckets as instances with ids of the form
``{template_id}-{month_key}``. Creating a template fans it out over a run of
consecutive months and publishes one notification and one event per month.
Months that have never been read are materialised lazily from whatever
templates exist at that moment.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal

from dashboard.db.base import new_document_id
from dashboard.errors import NotFound, ValidationFailed
from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.enums import RepeatType, SourceType
from dashboard.schemas.budget import (
    MonthTransaction,
    MonthTransactionCreate,
    MonthTransactionUpdate,
    TemplateCreate,
    TemplateRead,
    TransactionFields,
)
from dashboard.services.dates import resolve_due_date
from dashboard.services.derived_records import (
    DerivedRecordDraft,
    derive_priority,
    publish_derived_records,
    retract_derived_records,
)
from dashboard.services.month import current_month_key, month_keys_from, parse_month_key
from dashboard.services.store import BucketMutation, DashboardStore, Document

logger = logging.getLogger(__name__)

FANOUT_MONTHS = 13
ONE_OFF_PREFIX = "custom-"

TEMPLATE_FIELDS = (
    "source",
    "category",
    "purpose",
    "due_day",
    "date_type",
    "dynamic_rule",
    "amount",
    "expected_amount",
    "target",
    "current_amount",
    "stepup_date",
    "stepup_amount",
)
REQUIRED_FIELDS = frozenset(
    {"source", "category", "purpose", "due_day", "date_type", "dynamic_rule", "amount", "expected_amount"}
)


@dataclass(slots=True)
class TemplateDeletion:
    template_id: str
    month_key: str
    template_deleted: bool
    instances_removed: int

    @property
    def message(self) -> str:
        if self.template_deleted:
            return f"Template and {self.instances_removed} future instances deleted successfully"
        return (
            f"{self.instances_removed} orphaned transaction instances removed successfully "
            "(template was already deleted)"
        )


def _now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


def instance_id_for(template_id: str, month_key: str) -> str:
    return f"{template_id}-{month_key}"


def instance_from_template(template: TemplateRead, month_key: str) -> MonthTransaction:
    values = {field: getattr(template, field) for field in TEMPLATE_FIELDS}
    if values["expected_amount"] is None:
        values["expected_amount"] = Decimal("0")
    return MonthTransaction(
        id=instance_id_for(template.id, month_key),
        template_id=template.id,
        is_customized=False,
        updated_at=_now(),
        **values,
    )


def budget_draft(
    item: TransactionFields,
    month_key: str,
    source_id: str,
    repeat_type: RepeatType,
) -> DerivedRecordDraft:
    year, month = parse_month_key(month_key)
    return DerivedRecordDraft(
        title=item.source,
        date=resolve_due_date(item.due_day, year, month, item.date_type, item.dynamic_rule),
        priority=derive_priority(item.category, item.amount),
        repeat_type=repeat_type,
        source_type=SourceType.BUDGET,
        source_id=source_id,
        month_key=month_key,
        event_title=f"{item.source} - {item.purpose}",
        event_description=f"Category: {item.category.value}, Amount: {item.amount}",
    )


def _snapshot(templates: list[TemplateRead], month_key: str) -> list[Document]:
    return [instance_from_template(template, month_key).to_document() for template in templates]


async def _read_templates(store: DashboardStore, user_id: str) -> list[TemplateRead]:
    # Rows are copied out: a failed write rolls the session back and expires them.
    return [TemplateRead.model_validate(item) for item in await store.list_templates(user_id)]


def _append_instance(instance: Document, templates: list[TemplateRead], month_key: str) -> BucketMutation:
    def mutate(transactions: list[Document] | None) -> list[Document]:
        if transactions is None:
            transactions = _snapshot(templates, month_key)
        if any(item.get("id") == instance["id"] for item in transactions):
            return transactions
        return [*transactions, instance]

    return mutate


async def get_month_transactions(store: DashboardStore, user_id: str, month_key: str) -> list[MonthTransaction]:
    transactions = await store.get_bucket(user_id, month_key)
    if transactions is None:
        templates = await _read_templates(store, user_id)
        transactions = await store.create_bucket(user_id, month_key, _snapshot(templates, month_key))
        logger.info("Initialised month %s for %s from %d templates", month_key, user_id, len(templates))

    return [MonthTransaction.model_validate(item) for item in transactions]


async def create_template(
    store: DashboardStore,
    user_id: str,
    payload: TemplateCreate,
    fanout_months: int = FANOUT_MONTHS,
    today: dt.date | None = None,
) -> TemplateRead:
    """Persist a template and copy it into ``fanout_months`` month buckets.

    Each month also gets a notification and an event. Those are best effort:
    a failed write is logged and the remaining months are still filled.
    """
    start_month = payload.start_month or current_month_key(today)
    stored = await store.add_template(
        BudgetTemplate(
            id=new_document_id(),
            user_id=user_id,
            **payload.model_dump(exclude={"start_month"}),
        )
    )
    template = TemplateRead.model_validate(stored)
    templates = await _read_templates(store, user_id)

    published = 0
    for month_key in month_keys_from(start_month, fanout_months):
        instance = instance_from_template(template, month_key)
        await store.update_bucket(user_id, month_key, _append_instance(instance.to_document(), templates, month_key))

        draft = budget_draft(instance, month_key, template.id, RepeatType.MONTHLY)
        if await publish_derived_records(store, user_id, draft):
            published += 1

    logger.info(
        "Template %s fanned out to %d months from %s (%d with notifications)",
        template.id,
        fanout_months,
        start_month,
        published,
    )
    return template


async def create_month_transaction(
    store: DashboardStore,
    user_id: str,
    month_key: str,
    payload: MonthTransactionCreate,
) -> MonthTransaction:
    instance = MonthTransaction(
        id=f"{ONE_OFF_PREFIX}{new_document_id()}",
        template_id=None,
        is_customized=True,
        updated_at=_now(),
        **payload.model_dump(),
    )
    templates = await _read_templates(store, user_id)
    await store.update_bucket(user_id, month_key, _append_instance(instance.to_document(), templates, month_key))

    await publish_derived_records(store, user_id, budget_draft(instance, month_key, instance.id, RepeatType.NONE))
    return instance


def _derived_source(instance: MonthTransaction) -> tuple[str, RepeatType]:
    if instance.template_id:
        return instance.template_id, RepeatType.MONTHLY
    return instance.id, RepeatType.NONE


async def _require_instance(
    store: DashboardStore,
    user_id: str,
    month_key: str,
    transaction_id: str,
) -> list[Document]:
    transactions = await store.get_bucket(user_id, month_key)
    if transactions is None:
        raise NotFound("Month not found", f"No budget data found for month: {month_key}")
    if not any(item.get("id") == transaction_id for item in transactions):
        raise NotFound("Transaction not found", f"No transaction found with ID: {transaction_id}")
    return transactions


async def update_month_transaction(
    store: DashboardStore,
    user_id: str,
    month_key: str,
    transaction_id: str,
    payload: MonthTransactionUpdate,
) -> MonthTransaction:
    changes = {
        field: value
        for field, value in payload.model_dump(exclude_unset=True).items()
        if value is not None or field not in REQUIRED_FIELDS
    }
    if not changes:
        raise ValidationFailed("No fields to update", "Provide at least one transaction field")

    await _require_instance(store, user_id, month_key, transaction_id)

    updated: dict[str, MonthTransaction] = {}

    def mutate(transactions: list[Document] | None) -> list[Document]:
        updated.clear()
        result = []
        for item in transactions or []:
            if item.get("id") == transaction_id:
                current = MonthTransaction.model_validate(item)
                merged = MonthTransaction.model_validate(
                    {**current.model_dump(), **changes, "is_customized": True, "updated_at": _now()}
                )
                updated["item"] = merged
                item = merged.to_document()
            result.append(item)
        return result

    stored = await store.update_bucket(user_id, month_key, mutate, create_missing=False)
    if stored is None:
        raise NotFound("Month not found", f"No budget data found for month: {month_key}")
    if "item" not in updated:
        raise NotFound("Transaction not found", f"No transaction found with ID: {transaction_id}")

    instance = updated["item"]
    source_id, repeat_type = _derived_source(instance)
    await retract_derived_records(store, user_id, SourceType.BUDGET, source_id, month_key)
    await publish_derived_records(store, user_id, budget_draft(instance, month_key, source_id, repeat_type))
    return instance


async def delete_month_transaction(
    store: DashboardStore,
    user_id: str,
    month_key: str,
    transaction_id: str,
) -> MonthTransaction:
    await _require_instance(store, user_id, month_key, transaction_id)

    removed: dict[str, Document] = {}

    def mutate(transactions: list[Document] | None) -> list[Document]:
        removed.clear()
        kept = []
        for item in transactions or []:
            if item.get("id") == transaction_id:
                removed["item"] = item
                continue
            kept.append(item)
        return kept

    stored = await store.update_bucket(user_id, month_key, mutate, create_missing=False)
    if stored is None:
        raise NotFound("Month not found", f"No budget data found for month: {month_key}")
    if "item" not in removed:
        raise NotFound("Transaction not found", f"No transaction found with ID: {transaction_id}")

    instance = MonthTransaction.model_validate(removed["item"])
    source_id, _ = _derived_source(instance)
    await retract_derived_records(store, user_id, SourceType.BUDGET, source_id, month_key)
    return instance


async def delete_template_from_month(
    store: DashboardStore,
    user_id: str,
    template_id: str,
    month_key: str,
) -> TemplateDeletion:
    template = await store.get_template(user_id, template_id)
    template_deleted = False
    if template is not None:
        await store.delete_template(template)
        template_deleted = True
    else:
        logger.warning("Template %s not found, cleaning up orphaned instances from %s", template_id, month_key)

    removed = await store.prune_buckets(
        user_id,
        lambda item: item.get("templateId") != template_id,
        from_month_key=month_key,
    )
    await retract_derived_records(store, user_id, SourceType.BUDGET, template_id)

    return TemplateDeletion(
        template_id=template_id,
        month_key=month_key,
        template_deleted=template_deleted,
        instances_removed=sum(removed.values()),
    )
