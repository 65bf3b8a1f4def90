"""Persistence for budget templates, month buckets and derived records.

Month buckets are JSON documents. Every write goes through a versioned
read-modify-write: the mapper's ``version_id_col`` turns a concurrent update
into ``StaleDataError`` and a concurrent insert into ``IntegrityError``, and
the write is replayed against the fresh bucket.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from dashboard.errors import DatabaseFailure
from dashboard.models.budget_template import BudgetTemplate
from dashboard.models.enums import SourceType
from dashboard.models.event_record import EventRecord
from dashboard.models.monthly_budget import MonthlyBudget
from dashboard.models.notification_record import NotificationRecord
from dashboard.models.recipe import Recipe
from dashboard.models.todo import Todo

logger = logging.getLogger(__name__)

Document = dict[str, Any]
BucketMutation = Callable[[list[Document] | None], list[Document]]


class BucketConflictError(DatabaseFailure):
    pass


class DashboardStore:
    def __init__(self, session: AsyncSession, max_write_attempts: int = 3) -> None:
        self.session = session
        self.max_write_attempts = max(1, max_write_attempts)

    async def _commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def list_templates(self, user_id: str) -> list[BudgetTemplate]:
        rows = await self.session.scalars(
            select(BudgetTemplate)
            .where(BudgetTemplate.user_id == user_id)
            .order_by(BudgetTemplate.created_at.asc(), BudgetTemplate.id.asc())
        )
        return list(rows.all())

    async def get_template(self, user_id: str, template_id: str) -> BudgetTemplate | None:
        template = await self.session.get(BudgetTemplate, template_id)
        if template is None or template.user_id != user_id:
            return None
        return template

    async def add_template(self, template: BudgetTemplate) -> BudgetTemplate:
        self.session.add(template)
        await self._commit()
        await self.session.refresh(template)
        return template

    async def delete_template(self, template: BudgetTemplate) -> None:
        await self.session.delete(template)
        await self._commit()

    async def _load_bucket(self, user_id: str, month_key: str) -> MonthlyBudget | None:
        return await self.session.get(MonthlyBudget, (user_id, month_key), populate_existing=True)

    async def get_bucket(self, user_id: str, month_key: str) -> list[Document] | None:
        bucket = await self._load_bucket(user_id, month_key)
        if bucket is None:
            return None
        return copy.deepcopy(bucket.transactions)

    async def list_buckets(self, user_id: str) -> dict[str, list[Document]]:
        rows = await self.session.scalars(
            select(MonthlyBudget)
            .where(MonthlyBudget.user_id == user_id)
            .order_by(MonthlyBudget.month_key.asc())
        )
        return {bucket.month_key: copy.deepcopy(bucket.transactions) for bucket in rows.all()}

    async def create_bucket(self, user_id: str, month_key: str, transactions: list[Document]) -> list[Document]:
        bucket = MonthlyBudget(user_id=user_id, month_key=month_key, transactions=transactions)
        self.session.add(bucket)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning("Month %s for %s was initialised concurrently, keeping stored bucket", month_key, user_id)
            stored = await self.get_bucket(user_id, month_key)
            if stored is None:
                raise
            return stored
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return copy.deepcopy(bucket.transactions)

    async def update_bucket(
        self,
        user_id: str,
        month_key: str,
        mutate: BucketMutation,
        create_missing: bool = True,
    ) -> list[Document] | None:
        """Apply ``mutate`` to the bucket's instances and write them back.

        ``mutate`` receives ``None`` when the bucket does not exist yet and
        may be called more than once, so it must not have side effects
        beyond its return value. Returns the stored instances, or ``None``
        when the bucket is missing and ``create_missing`` is false.
        """
        for attempt in range(1, self.max_write_attempts + 1):
            bucket = await self._load_bucket(user_id, month_key)
            if bucket is None:
                if not create_missing:
                    return None
                bucket = MonthlyBudget(user_id=user_id, month_key=month_key, transactions=mutate(None))
                self.session.add(bucket)
            else:
                bucket.transactions = mutate(copy.deepcopy(bucket.transactions))
                flag_modified(bucket, "transactions")

            try:
                await self.session.commit()
            except (StaleDataError, IntegrityError):
                await self.session.rollback()
                logger.warning(
                    "Write conflict on month %s for %s (attempt %d/%d)",
                    month_key,
                    user_id,
                    attempt,
                    self.max_write_attempts,
                )
                continue
            except SQLAlchemyError:
                await self.session.rollback()
                raise
            return copy.deepcopy(bucket.transactions)

        raise BucketConflictError(
            "Failed to update month budget",
            f"Month {month_key} kept changing after {self.max_write_attempts} attempts",
        )

    async def prune_buckets(
        self,
        user_id: str,
        keep: Callable[[Document], bool],
        from_month_key: str | None = None,
    ) -> dict[str, int]:
        """Drop instances rejected by ``keep`` in one batched commit.

        Only buckets whose key is >= ``from_month_key`` are touched when it
        is given. Returns removed counts for the buckets that changed.
        """
        filters = [MonthlyBudget.user_id == user_id]
        if from_month_key is not None:
            filters.append(MonthlyBudget.month_key >= from_month_key)

        for attempt in range(1, self.max_write_attempts + 1):
            rows = await self.session.scalars(
                select(MonthlyBudget)
                .where(*filters)
                .order_by(MonthlyBudget.month_key.asc())
                .execution_options(populate_existing=True)
            )
            removed: dict[str, int] = {}
            for bucket in rows.all():
                kept = [item for item in bucket.transactions if keep(item)]
                if len(kept) < len(bucket.transactions):
                    removed[bucket.month_key] = len(bucket.transactions) - len(kept)
                    bucket.transactions = kept
                    flag_modified(bucket, "transactions")

            if not removed:
                return removed

            try:
                await self.session.commit()
            except StaleDataError:
                await self.session.rollback()
                logger.warning("Write conflict while pruning months for %s (attempt %d)", user_id, attempt)
                continue
            except SQLAlchemyError:
                await self.session.rollback()
                raise
            return removed

        raise BucketConflictError(
            "Failed to update month budgets",
            f"Buckets kept changing after {self.max_write_attempts} attempts",
        )

    async def add_notification(self, record: NotificationRecord) -> NotificationRecord:
        self.session.add(record)
        await self._commit()
        return record

    async def add_event(self, record: EventRecord) -> EventRecord:
        self.session.add(record)
        await self._commit()
        return record

    async def delete_notifications_by_source(
        self,
        user_id: str,
        source_type: SourceType,
        source_id: str,
        month_key: str | None = None,
    ) -> int:
        statement = delete(NotificationRecord).where(
            NotificationRecord.user_id == user_id,
            NotificationRecord.source_type == source_type,
            NotificationRecord.source_id == source_id,
        )
        if month_key is not None:
            statement = statement.where(NotificationRecord.month_key == month_key)
        result = await self.session.execute(statement)
        await self._commit()
        return result.rowcount or 0

    async def delete_events_by_source(
        self,
        user_id: str,
        source_type: SourceType,
        source_id: str,
        month_key: str | None = None,
    ) -> int:
        statement = delete(EventRecord).where(
            EventRecord.user_id == user_id,
            EventRecord.source_type == source_type,
            EventRecord.source_id == source_id,
        )
        if month_key is not None:
            statement = statement.where(EventRecord.month_key == month_key)
        result = await self.session.execute(statement)
        await self._commit()
        return result.rowcount or 0

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

        model = Todo if source_type == SourceType.TODO else Recipe
        row = await self.session.get(model, source_id)
        return row is not None and row.user_id == user_id
