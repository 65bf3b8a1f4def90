"""Notifications and calendar events derived from budget items and todos.

Clients never write these records. They are published when a source record
is created and retracted when it goes away. Both directions are best effort:
a failure is logged and never undoes the primary write.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass
from decimal import Decimal

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from dashboard.db.base import new_document_id
from dashboard.models.enums import BudgetCategory, Priority, RepeatType, SourceType
from dashboard.models.event_record import EventRecord
from dashboard.models.notification_record import NotificationRecord
from dashboard.schemas.derived import EventRecordCreate, NotificationRecordCreate
from dashboard.services.store import DashboardStore

logger = logging.getLogger(__name__)

HIGH_EXPENSE_THRESHOLD = Decimal("1000")


class DerivedRecordError(ValueError):
    pass


@dataclass(slots=True)
class DerivedRecordDraft:
    title: str
    date: dt.date
    priority: Priority
    repeat_type: RepeatType
    source_type: SourceType
    source_id: str
    month_key: str | None
    event_title: str
    event_description: str | None = None


def derive_priority(category: BudgetCategory, amount: Decimal | int | float | None) -> Priority:
    if category == BudgetCategory.INCOME:
        return Priority.HIGH
    if category == BudgetCategory.EXPENSE and Decimal(str(amount or 0)) > HIGH_EXPENSE_THRESHOLD:
        return Priority.HIGH
    if category == BudgetCategory.SAVINGS:
        return Priority.LOW
    return Priority.MEDIUM


async def _ensure_source(store: DashboardStore, user_id: str, draft: DerivedRecordDraft) -> None:
    exists = await store.source_exists(user_id, draft.source_type, draft.source_id, draft.month_key)
    if not exists:
        raise DerivedRecordError(f"Source {draft.source_type.value} with ID {draft.source_id} does not exist")


async def create_notification(store: DashboardStore, user_id: str, draft: DerivedRecordDraft) -> NotificationRecord:
    try:
        payload = NotificationRecordCreate(
            user_id=user_id,
            title=draft.title,
            due_date=draft.date,
            priority=draft.priority,
            repeat_type=draft.repeat_type,
            source_type=draft.source_type,
            source_id=draft.source_id,
            month_key=draft.month_key,
        )
    except ValidationError as exc:
        raise DerivedRecordError(f"Invalid notification: {exc}") from exc

    await _ensure_source(store, user_id, draft)

    record = NotificationRecord(
        id=new_document_id(),
        category=payload.source_type,
        **payload.model_dump(),
    )
    return await store.add_notification(record)


async def create_event(store: DashboardStore, user_id: str, draft: DerivedRecordDraft) -> EventRecord:
    try:
        payload = EventRecordCreate(
            user_id=user_id,
            title=draft.event_title,
            date=draft.date,
            priority=draft.priority,
            repeat_type=draft.repeat_type,
            source_type=draft.source_type,
            source_id=draft.source_id,
            month_key=draft.month_key,
            description=draft.event_description,
        )
    except ValidationError as exc:
        raise DerivedRecordError(f"Invalid event: {exc}") from exc

    await _ensure_source(store, user_id, draft)

    record = EventRecord(id=new_document_id(), **payload.model_dump())
    return await store.add_event(record)


async def publish_derived_records(store: DashboardStore, user_id: str, draft: DerivedRecordDraft) -> bool:
    try:
        await create_notification(store, user_id, draft)
        await create_event(store, user_id, draft)
    except (DerivedRecordError, SQLAlchemyError) as exc:
        logger.error(
            "Failed to create notification/event for %s %s (month %s): %s",
            draft.source_type.value,
            draft.source_id,
            draft.month_key,
            exc,
        )
        return False
    return True


async def retract_derived_records(
    store: DashboardStore,
    user_id: str,
    source_type: SourceType,
    source_id: str,
    month_key: str | None = None,
) -> tuple[int, int]:
    try:
        notifications = await store.delete_notifications_by_source(user_id, source_type, source_id, month_key)
        events = await store.delete_events_by_source(user_id, source_type, source_id, month_key)
    except SQLAlchemyError as exc:
        logger.error(
            "Failed to delete notifications/events for %s %s (month %s): %s",
            source_type.value,
            source_id,
            month_key or "all",
            exc,
        )
        return 0, 0
    return notifications, events
