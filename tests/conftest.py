import copy
from collections.abc import Callable
from typing import Any

import pytest
from sqlalchemy.exc import SQLAlchemyError

from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.enums import SourceType
from dashboard.models.event_record import EventRecord
from dashboard.models.notification_record import NotificationRecord

Document = dict[str, Any]


class InMemoryDashboardStore:
    """Dict-backed stand-in for DashboardStore with the same coroutine API."""

    def __init__(self) -> None:
        self.templates: dict[str, BudgetTemplate] = {}
        self.buckets: dict[tuple[str, str], list[Document]] = {}
        self.notifications: list[NotificationRecord] = []
        self.events: list[EventRecord] = []
        self.todos: set[tuple[str, str]] = set()
        self.fail_events = False
        self.bucket_writes = 0

    async def list_templates(self, user_id: str) -> list[BudgetTemplate]:
        return [item for item in self.templates.values() if item.user_id == user_id]

    async def get_template(self, user_id: str, template_id: str) -> BudgetTemplate | None:
        template = self.templates.get(template_id)
        if template is None or template.user_id != user_id:
            return None
        return template

    async def add_template(self, template: BudgetTemplate) -> BudgetTemplate:
        self.templates[template.id] = template
        return template

    async def delete_template(self, template: BudgetTemplate) -> None:
        self.templates.pop(template.id, None)

    async def get_bucket(self, user_id: str, month_key: str) -> list[Document] | None:
        bucket = self.buckets.get((user_id, month_key))
        return copy.deepcopy(bucket) if bucket is not None else None

    async def list_buckets(self, user_id: str) -> dict[str, list[Document]]:
        return {
            month_key: copy.deepcopy(items)
            for (owner, month_key), items in sorted(self.buckets.items())
            if owner == user_id
        }

    async def create_bucket(self, user_id: str, month_key: str, transactions: list[Document]) -> list[Document]:
        self.buckets.setdefault((user_id, month_key), copy.deepcopy(transactions))
        return copy.deepcopy(self.buckets[(user_id, month_key)])

    async def update_bucket(
        self,
        user_id: str,
        month_key: str,
        mutate: Callable[[list[Document] | None], list[Document]],
        create_missing: bool = True,
    ) -> list[Document] | None:
        current = self.buckets.get((user_id, month_key))
        if current is None and not create_missing:
            return None
        updated = mutate(copy.deepcopy(current) if current is not None else None)
        self.buckets[(user_id, month_key)] = copy.deepcopy(updated)
        self.bucket_writes += 1
        return copy.deepcopy(updated)

    async def prune_buckets(
        self,
        user_id: str,
        keep: Callable[[Document], bool],
        from_month_key: str | None = None,
    ) -> dict[str, int]:
        removed: dict[str, int] = {}
        for (owner, month_key), items in sorted(self.buckets.items()):
            if owner != user_id or (from_month_key is not None and month_key < from_month_key):
                continue
            kept = [item for item in items if keep(item)]
            if len(kept) < len(items):
                removed[month_key] = len(items) - len(kept)
                self.buckets[(owner, month_key)] = kept
        return removed

    async def add_notification(self, record: NotificationRecord) -> NotificationRecord:
        self.notifications.append(record)
        return record

    async def add_event(self, record: EventRecord) -> EventRecord:
        if self.fail_events:
            raise SQLAlchemyError("event table unavailable")
        self.events.append(record)
        return record

    @staticmethod
    def _matches(record: Any, user_id: str, source_type: SourceType, source_id: str, month_key: str | None) -> bool:
        return (
            record.user_id == user_id
            and record.source_type == source_type
            and record.source_id == source_id
            and (month_key is None or record.month_key == month_key)
        )

    async def delete_notifications_by_source(
        self,
        user_id: str,
        source_type: SourceType,
        source_id: str,
        month_key: str | None = None,
    ) -> int:
        before = len(self.notifications)
        self.notifications = [
            item for item in self.notifications if not self._matches(item, user_id, source_type, source_id, month_key)
        ]
        return before - len(self.notifications)

    async def delete_events_by_source(
        self,
        user_id: str,
        source_type: SourceType,
        source_id: str,
        month_key: str | None = None,
    ) -> int:
        before = len(self.events)
        self.events = [
            item for item in self.events if not self._matches(item, user_id, source_type, source_id, month_key)
        ]
        return before - len(self.events)

    async def source_exists(
        self,
        user_id: str,
        source_type: SourceType,
        source_id: str,
        month_key: str | None = None,
    ) -> bool:
        if source_type == SourceType.BUDGET:
            if await self.get_template(user_id, source_id) is not None:
                return True
            if month_key is None:
                return False
            transactions = await self.get_bucket(user_id, month_key) or []
            return any(item.get("id") == source_id for item in transactions)
        if source_type == SourceType.TODO:
            return (user_id, source_id) in self.todos
        return False


@pytest.fixture
def store() -> InMemoryDashboardStore:
    return InMemoryDashboardStore()
